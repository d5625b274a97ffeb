"""Chat package exposing the session controller and its transcript."""

from .client import ChatApiClient, ChatApiError
from .controller import SessionController, TurnSender, generate_session_id
from .markup import normalize_markup
from .state import EntryKind, SessionState, TranscriptEntry
from .transcript import TranscriptStore

__all__ = [
    "ChatApiClient",
    "ChatApiError",
    "EntryKind",
    "SessionController",
    "SessionState",
    "TranscriptEntry",
    "TranscriptStore",
    "TurnSender",
    "generate_session_id",
    "normalize_markup",
]
