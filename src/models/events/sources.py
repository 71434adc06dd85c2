from enum import Enum, auto


class EventSource(Enum):
    """Which tick system (or API) produced an event"""
    PLAYHEAD_SYSTEM = auto()     # advance_playheads
    TRANSITION_SYSTEM = auto()   # run_transitions
    STATE_SYSTEM = auto()        # set_state
