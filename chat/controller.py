"""Session controller: owns the session lifecycle and mediates every turn."""

from __future__ import annotations

import logging
import secrets
import time
from typing import Any, Dict, Optional, Protocol, Tuple

from backend.models import TurnRequest

from .constants import (
    CONNECTION_ERROR_TEXT,
    DEFAULT_BE_LIMIT,
    END_SESSION_TEXT,
    FORCED_TERMINATION_TEXT,
    NO_RESPONSE_TEXT,
    SESSION_CREATED_TEMPLATE,
    SESSION_ENDED_TEXT,
    SESSION_ID_ALPHABET,
    SESSION_ID_PREFIX,
    SESSION_ID_SUFFIX_LENGTH,
    UNKNOWN_ERROR_TEXT,
    WARNING_MARKER,
)
from .markup import normalize_markup
from .state import EntryKind, SessionState, TranscriptEntry
from .transcript import TranscriptStore

logger = logging.getLogger(__name__)


class TurnSender(Protocol):
    async def send_turn(self, request: TurnRequest) -> Dict[str, Any]: ...


def generate_session_id() -> str:
    suffix = "".join(secrets.choice(SESSION_ID_ALPHABET) for _ in range(SESSION_ID_SUFFIX_LENGTH))
    return f"{SESSION_ID_PREFIX}{time.time_ns()}-{suffix}"


def _response_text(payload: Dict[str, Any]) -> Optional[str]:
    """Return the payload's response text, rejecting non-string values."""

    text = payload.get("response")
    if text is not None and not isinstance(text, str):
        raise TypeError(f"Turn response must be a string, got {type(text).__name__}")
    return text


class SessionController:
    """
    Explicit state machine for a single chat session.

    The presentation layer reads `state`, `session_id`, `in_flight`, `input_text`
    and `transcript`, and only changes them through the operations below.
    At most one turn is in flight; turns requested meanwhile are ignored.
    """

    def __init__(
        self,
        sender: TurnSender,
        *,
        transcript: Optional[TranscriptStore] = None,
        be_limit: int = DEFAULT_BE_LIMIT,
        end_session_text: str = END_SESSION_TEXT,
    ) -> None:
        self.sender = sender
        self.transcript = transcript if transcript is not None else TranscriptStore()
        self.be_limit = be_limit
        self.end_session_text = end_session_text
        self._state = SessionState.NONE
        self._session_id: Optional[str] = None
        self._in_flight = False
        self._input_text = ""

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def input_text(self) -> str:
        return self._input_text

    @property
    def can_create(self) -> bool:
        return self._session_id is None and not self._in_flight

    @property
    def can_end(self) -> bool:
        return self._session_id is not None and not self._in_flight

    @property
    def can_send(self) -> bool:
        return self.can_end and bool(self._input_text.strip())

    def set_input(self, text: str) -> None:
        self._input_text = text

    def create_session(self) -> str:
        session_id = generate_session_id()
        self._session_id = session_id
        self._state = SessionState.ACTIVE
        self._add_entry(EntryKind.SYSTEM, SESSION_CREATED_TEMPLATE.format(session_id=session_id))
        logger.info(f"Created session {session_id}")
        return session_id

    def clear_transcript(self) -> None:
        self.transcript.clear()

    async def send_message(self, text: Optional[str] = None) -> Optional[TranscriptEntry]:
        """
        Send one user message and record its outcome.

        Uses the pending input buffer when `text` is omitted. Returns the outcome
        entry, or None when the call was ignored.
        """
        message = (self._input_text if text is None else text).strip()
        if not message or self._session_id is None or self._in_flight:
            logger.debug("Ignoring send_message: empty text, no session, or turn in flight")
            return None

        self._add_entry(EntryKind.USER, message)
        self._input_text = ""
        self._in_flight = True
        try:
            kind, content = await self._exchange(message)
            return self._add_entry(kind, content)
        finally:
            self._in_flight = False

    async def end_session(self) -> Optional[TranscriptEntry]:
        """Close the session; it is cleared locally whatever the remote answers."""

        if self._session_id is None or self._in_flight:
            logger.debug("Ignoring end_session: no session or turn in flight")
            return None

        session_id = self._session_id
        self._state = SessionState.ENDING
        self._in_flight = True
        try:
            payload = await self.sender.send_turn(self._build_request(self.end_session_text, end_session=True))
            entry = self._add_entry(EntryKind.SYSTEM, _response_text(payload) or SESSION_ENDED_TEXT)
        except Exception as exc:
            logger.error(f"End session error: {exc!r}")
            entry = self._add_entry(EntryKind.SYSTEM, FORCED_TERMINATION_TEXT)
        finally:
            self._session_id = None
            self._state = SessionState.NONE
            self._input_text = ""
            self._in_flight = False

        logger.info(f"Ended session {session_id}")
        return entry

    async def _exchange(self, message: str) -> Tuple[EntryKind, str]:
        try:
            payload = await self.sender.send_turn(self._build_request(message, end_session=False))
            text = _response_text(payload)
            if payload.get("error"):
                return EntryKind.SYSTEM, f"{WARNING_MARKER} {text or UNKNOWN_ERROR_TEXT}"
            return EntryKind.ASSISTANT, text or NO_RESPONSE_TEXT
        except Exception as exc:
            logger.error(f"Send message error: {exc!r}")
            return EntryKind.SYSTEM, CONNECTION_ERROR_TEXT

    def _build_request(self, input_text: str, *, end_session: bool) -> TurnRequest:
        return TurnRequest(
            input_text=input_text,
            session_id=self._session_id,
            end_session=end_session,
            session_attributes={"be_limit": self.be_limit},
        )

    def _add_entry(self, kind: EntryKind, content: str) -> TranscriptEntry:
        return self.transcript.append(kind, normalize_markup(content))
