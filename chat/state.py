"""Dataclasses and enums for session state and transcript entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class SessionState(str, Enum):
    """Lifecycle of the single chat session."""

    NONE = "none"
    ACTIVE = "active"
    ENDING = "ending"


class EntryKind(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class TranscriptEntry:
    """One immutable line of the transcript."""

    id: int
    kind: EntryKind
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
