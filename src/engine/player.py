"""
LottiePlayer - state machine controller for one animated entity

Owns the state graph, the current/pending state ids and the one-shot user
requests (seek, speed, intermission). The tick systems read and consume them.
"""

import sys
from typing import Dict, Iterator, Optional

from engine.errors import InvalidTransitionError, UnknownStateError
from models.enums import LogCategory
from models.playback import validate_intermission, validate_speed
from models.state import AnimationState
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.STATE)

# Seeking here clamps to the first frame of the segment
MIN_FRAME = -sys.float_info.max


class LottiePlayer:
    """
    Interactive lottie player closely following dotLottie interactivity.

    Status flags:
    - playing=False (paused): playhead frozen, transitions still evaluated
    - stopped=True: playhead frozen AND no transitions evaluated

    next_state starts pre-populated with the initial state so the first tick
    commits into it.

    Example:
        player = LottiePlayer("idle") \\
            .with_state(AnimationState("idle").with_transition(
                AnimationTransition.on_mouse_enter("hover"))) \\
            .with_state(AnimationState("hover").with_transition(
                AnimationTransition.on_mouse_leave("idle")))
    """

    def __init__(self, initial_state: str):
        initial_state = sys.intern(initial_state)
        self.initial_state: str = initial_state
        self.current_state: str = initial_state
        self.next_state: Optional[str] = initial_state
        self._states: Dict[str, AnimationState] = {}

        # One-shot requests consumed by the input system
        self.pending_seek_frame: Optional[float] = None
        self.pending_intermission: Optional[float] = None
        self.pending_speed: Optional[float] = None

        self.started = False
        self.playing = False
        self.stopped = False

        # Pointer was inside the bounds on the last evaluated tick
        self.hovered = False

    # ------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------

    def with_state(self, state: AnimationState) -> 'LottiePlayer':
        self._states[state.id] = state
        return self

    def validate(self) -> None:
        """
        Check the state graph before it is ticked.

        Raises:
            InvalidTransitionError: initial state missing, or a transition
                targets an unregistered state
        """
        if self.initial_state not in self._states:
            raise InvalidTransitionError(
                f"initial state '{self.initial_state}' is not registered "
                f"(known: {sorted(self._states)})"
            )
        for state in self._states.values():
            for transition in state.transitions:
                if transition.state not in self._states:
                    raise InvalidTransitionError(
                        f"state '{state.id}' has {transition.trigger.name} "
                        f"transition to unknown state '{transition.state}'"
                    )

    # ------------------------------------------------------------
    # State access
    # ------------------------------------------------------------

    def get_state(self, state_id: str) -> AnimationState:
        try:
            return self._states[state_id]
        except KeyError:
            raise UnknownStateError(state_id) from None

    def state(self) -> AnimationState:
        """The current state (raises UnknownStateError if not registered)"""
        return self.get_state(self.current_state)

    def state_mut(self) -> AnimationState:
        """Mutable alias of state(); states are plain dataclasses"""
        return self.get_state(self.current_state)

    def states(self) -> Iterator[AnimationState]:
        """All registered states, in no particular order"""
        return iter(self._states.values())

    def states_mut(self) -> Iterator[AnimationState]:
        return iter(self._states.values())

    # ------------------------------------------------------------
    # Mutation API
    # ------------------------------------------------------------

    def transition(self, state_id: str) -> None:
        """Request a transition; committed by the next tick"""
        if state_id not in self._states:
            raise UnknownStateError(state_id)
        self.next_state = sys.intern(state_id)
        log.debug("Transition requested", to=state_id)

    def reset(self) -> None:
        """Go back to the initial state, at the first frame"""
        self.next_state = self.initial_state
        self.seek(MIN_FRAME)

    def seek(self, frame: float) -> None:
        self.pending_seek_frame = frame

    def set_intermission(self, intermission: float) -> None:
        """Pause between loops in seconds. Applies to the current playback only."""
        self.pending_intermission = validate_intermission(intermission)

    def set_speed(self, speed: float) -> None:
        """Speed multiplier. Applies to the current playback only."""
        self.pending_speed = validate_speed(speed)

    def toggle_play(self) -> None:
        if self.stopped or not self.playing:
            self.play()
        else:
            self.pause()

    def play(self) -> None:
        self.playing = True
        self.stopped = False

    def pause(self) -> None:
        """Pause the playhead. State machines keep running."""
        self.playing = False

    def stop(self) -> None:
        """Freeze the playhead and the state machine."""
        self.stopped = True

    def is_playing(self) -> bool:
        return self.playing

    def is_stopped(self) -> bool:
        return self.stopped

    def __repr__(self):
        return (
            f"LottiePlayer(current={self.current_state!r}, next={self.next_state!r}, "
            f"states={len(self._states)}, playing={self.playing}, stopped={self.stopped})"
        )
