"""
Enums for the lottie player state machine
"""

from enum import Enum, auto


class PlaybackDirection(Enum):
    """
    Direction to play the segments of an animation.

    The value is the sign applied to the frame axis.
    """
    NORMAL = 1     # First frame to last frame
    REVERSE = -1   # Last frame to first frame


class LoopMode(Enum):
    """How often to loop (see PlaybackLoopBehavior)"""
    DO_NOT_LOOP = auto()   # Play once; same as AMOUNT with 0 extra loops
    AMOUNT = auto()        # Complete a fixed number of extra loops
    LOOP = auto()          # Loop forever


class AssetKind(Enum):
    """What kind of content an asset holds"""
    LOTTIE = auto()   # Frame-based composition
    SVG = auto()      # Static image, no frame concept


class TransitionTrigger(Enum):
    """Trigger conditions for state transitions"""
    ON_AFTER = auto()        # Seconds elapsed since first frame was shown
    ON_COMPLETE = auto()     # Playhead reached the end of the loop (+ intermission)
    ON_MOUSE_ENTER = auto()  # Pointer is inside the animation bounds
    ON_MOUSE_CLICK = auto()  # Pointer inside and left button just pressed
    ON_MOUSE_LEAVE = auto()  # Pointer was inside last tick, is outside now
    ON_SHOW = auto()         # First frame has been shown at least once


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    ENGINE = auto()      # Engine lifecycle, tick loop
    PLAYHEAD = auto()    # Seeks, speed/intermission changes
    STATE = auto()       # State commits
    TRANSITION = auto()  # Transition rule evaluation
    INPUT = auto()       # Pending player requests (speed, play state)
    ASSET = auto()       # Asset registration/readiness
    EVENT = auto()       # Event bus events and handling
    SYSTEM = auto()      # Startup, shutdown, errors
