from __future__ import annotations

from dataclasses import dataclass, field
import time
from typing import Any, Dict

from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class Event:
    """
    Base event class.

    - type: EventType
    - source: EventSource
    - timestamp: wall-clock time of creation
    """

    type: EventType
    source: EventSource | None
    timestamp: float = field(default_factory=time.time)

    def __init__(self, *, type: EventType, source: EventSource | None):
        self.type = type
        self.source = source
        self.timestamp = time.time()

    def to_data(self) -> Dict[str, Any]:
        """Structured payload (everything except the metadata fields)"""
        return {
            k: v for k, v in self.__dict__.items()
            if k not in ("type", "source", "timestamp")
        }
