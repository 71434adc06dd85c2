from dataclasses import dataclass
from typing import Optional

from models.enums import TransitionTrigger
from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class StateTransitionRequestedEvent(Event):
    entity_id: int
    from_state: str
    to_state: str
    trigger: TransitionTrigger

    def __init__(self, entity_id: int, from_state: str, to_state: str, trigger: TransitionTrigger):
        super().__init__(
            type=EventType.STATE_TRANSITION_REQUESTED,
            source=EventSource.TRANSITION_SYSTEM,
        )
        self.entity_id = entity_id
        self.from_state = from_state
        self.to_state = to_state
        self.trigger = trigger


@dataclass(init=False)
class StateChangedEvent(Event):
    entity_id: int
    from_state: Optional[str]
    to_state: str
    asset_changed: bool
    rendered_frames: float

    def __init__(
        self,
        entity_id: int,
        from_state: Optional[str],
        to_state: str,
        asset_changed: bool,
        rendered_frames: float,
    ):
        super().__init__(
            type=EventType.STATE_CHANGED,
            source=EventSource.STATE_SYSTEM,
        )
        self.entity_id = entity_id
        self.from_state = from_state
        self.to_state = to_state
        self.asset_changed = asset_changed
        self.rendered_frames = rendered_frames


@dataclass(init=False)
class TransitionDeferredEvent(Event):
    """Target asset not loaded yet; the transition is retried next tick"""
    entity_id: int
    to_state: str

    def __init__(self, entity_id: int, to_state: str):
        super().__init__(
            type=EventType.TRANSITION_DEFERRED,
            source=EventSource.STATE_SYSTEM,
        )
        self.entity_id = entity_id
        self.to_state = to_state


@dataclass(init=False)
class PlaybackStartedEvent(Event):
    entity_id: int
    state: str

    def __init__(self, entity_id: int, state: str):
        super().__init__(
            type=EventType.PLAYBACK_STARTED,
            source=EventSource.PLAYHEAD_SYSTEM,
        )
        self.entity_id = entity_id
        self.state = state


@dataclass(init=False)
class PlaybackCompletedEvent(Event):
    """Playhead crossed the end of a loop (including intermission)"""
    entity_id: int
    state: str
    loops_completed: int

    def __init__(self, entity_id: int, state: str, loops_completed: int):
        super().__init__(
            type=EventType.PLAYBACK_COMPLETED,
            source=EventSource.PLAYHEAD_SYSTEM,
        )
        self.entity_id = entity_id
        self.state = state
        self.loops_completed = loops_completed
