from enum import Enum, auto


class EventType(Enum):
    # State machine
    STATE_TRANSITION_REQUESTED = auto()
    STATE_CHANGED = auto()
    TRANSITION_DEFERRED = auto()

    # Playback
    PLAYBACK_STARTED = auto()
    PLAYBACK_COMPLETED = auto()
