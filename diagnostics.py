"""Structured diagnostic log for failures the student never sees."""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Mapping

logger = logging.getLogger(__name__)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


@dataclass(frozen=True)
class DiagnosticEvent:
    """A single recorded event."""

    level: str
    event: str
    detail: Mapping[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def asdict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "level": self.level,
            "event": self.event,
            "detail": dict(self.detail),
        }


class DiagnosticLog:
    """Keeps the most recent events in memory and mirrors them to :mod:`logging`."""

    def __init__(self, *, capacity: int = 200) -> None:
        self._events: deque[DiagnosticEvent] = deque(maxlen=max(1, capacity))

    def record(self, level: str, event: str, **detail: Any) -> DiagnosticEvent:
        level = level.upper()
        entry = DiagnosticEvent(level=level, event=event, detail=detail)
        self._events.append(entry)
        logger.log(_LEVELS.get(level, logging.INFO), "%s %s", event, detail)
        return entry

    def events(self, event: str | None = None) -> list[DiagnosticEvent]:
        if event is None:
            return list(self._events)
        return [entry for entry in self._events if entry.event == event]

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)


__all__ = ["DiagnosticEvent", "DiagnosticLog"]
