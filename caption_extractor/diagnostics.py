"""
Diagnostics for non-fatal degradations in the extraction pipeline.

Missing captions, an unparseable track list or a malformed caption line never
raise. Each one is recorded as a DiagnosticEvent so callers can inspect what
happened programmatically, and is also logged at warning level.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class DiagnosticCode(str, Enum):
    """Kinds of degraded outcomes."""

    NO_CAPTIONS = "no_captions"
    TRACK_LIST_NOT_FOUND = "track_list_not_found"
    TRACK_LIST_MALFORMED = "track_list_malformed"
    TRACK_NOT_FOUND = "track_not_found"
    MALFORMED_LINE = "malformed_line"


@dataclass(frozen=True)
class DiagnosticEvent:
    """
    A single degraded outcome.

    Attributes:
        code: Kind of degradation
        message: Human-readable description
        video_id: Video the event relates to, when known
    """

    code: DiagnosticCode
    message: str
    video_id: str | None = None


class Diagnostics:
    """
    Accumulates DiagnosticEvent objects for one extraction call.

    Not shared between calls; create one per request.
    """

    def __init__(self, callback: Callable[[DiagnosticEvent], None] | None = None) -> None:
        self._events: list[DiagnosticEvent] = []
        self._callback = callback

    def warn(self, code: DiagnosticCode, message: str, video_id: str | None = None) -> DiagnosticEvent:
        """Record a degraded outcome, log it and notify the callback."""
        event = DiagnosticEvent(code=code, message=message, video_id=video_id)
        self._events.append(event)
        logger.warning(message)
        if self._callback is not None:
            self._callback(event)
        return event

    @property
    def events(self) -> list[DiagnosticEvent]:
        return list(self._events)

    @property
    def codes(self) -> list[DiagnosticCode]:
        return [event.code for event in self._events]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[DiagnosticEvent]:
        return iter(list(self._events))
