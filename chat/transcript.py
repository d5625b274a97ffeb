"""Append-only transcript log observed by the presentation layer."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Iterator, List, Optional, Tuple

from blinker import Signal

from .state import EntryKind, TranscriptEntry

logger = logging.getLogger(__name__)

# Called with the appended entry, or with None after the transcript is cleared
TranscriptListener = Callable[[Optional[TranscriptEntry]], None]


class TranscriptStore:
    """Ordered log of user, assistant and system entries."""

    def __init__(self) -> None:
        self._entries: List[TranscriptEntry] = []
        self._ids = itertools.count(1)
        self._changed = Signal()

    @property
    def entries(self) -> Tuple[TranscriptEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TranscriptEntry]:
        return iter(self.entries)

    def append(self, kind: EntryKind, content: str) -> TranscriptEntry:
        entry = TranscriptEntry(id=next(self._ids), kind=EntryKind(kind), content=content)
        self._entries.append(entry)
        self._changed.send(self, entry=entry)
        return entry

    def clear(self) -> None:
        self._entries.clear()
        self._changed.send(self, entry=None)

    def subscribe(self, listener: TranscriptListener) -> Callable[[], None]:
        """
        Register a change listener.

        A listener that raises is logged and does not affect the store or
        the other listeners.

        Returns:
            A callable that removes the listener again.
        """

        def _receiver(sender: Any, *, entry: Optional[TranscriptEntry]) -> None:
            try:
                listener(entry)
            except Exception:
                logger.exception("Transcript listener failed")

        self._changed.connect(_receiver, weak=False)
        return lambda: self._changed.disconnect(_receiver)
