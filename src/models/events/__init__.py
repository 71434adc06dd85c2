"""
Event system for the lottie player engine

Events are collected during a tick and published on the EventBus afterwards.
"""

from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource

from models.events.player_events import (
    StateTransitionRequestedEvent,
    StateChangedEvent,
    TransitionDeferredEvent,
    PlaybackStartedEvent,
    PlaybackCompletedEvent,
)

__all__ = [
    "EventType",
    "Event",
    "EventSource",

    "StateTransitionRequestedEvent",
    "StateChangedEvent",
    "TransitionDeferredEvent",
    "PlaybackStartedEvent",
    "PlaybackCompletedEvent",
]
