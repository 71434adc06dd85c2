"""
State machine domain models

AnimationState is a node of a player's state graph; AnimationTransition is a
trigger condition plus the destination state id.
"""

import sys
from dataclasses import dataclass, field
from typing import List, Optional

from models.asset import AssetHandle
from models.enums import TransitionTrigger
from models.playback import PlaybackSettings
from models.theme import Theme


@dataclass(frozen=True)
class AnimationTransition:
    """
    Trigger condition plus destination state.

    Examples:
        AnimationTransition.on_mouse_enter("hover")
        AnimationTransition.on_after("idle", secs=2.5)
    """
    trigger: TransitionTrigger
    state: str
    secs: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "state", sys.intern(self.state))
        if self.trigger == TransitionTrigger.ON_AFTER:
            if self.secs is None or self.secs < 0:
                raise ValueError(f"ON_AFTER needs secs >= 0, got {self.secs}")

    @classmethod
    def on_after(cls, state: str, secs: float) -> 'AnimationTransition':
        return cls(TransitionTrigger.ON_AFTER, state, secs)

    @classmethod
    def on_complete(cls, state: str) -> 'AnimationTransition':
        return cls(TransitionTrigger.ON_COMPLETE, state)

    @classmethod
    def on_mouse_enter(cls, state: str) -> 'AnimationTransition':
        return cls(TransitionTrigger.ON_MOUSE_ENTER, state)

    @classmethod
    def on_mouse_click(cls, state: str) -> 'AnimationTransition':
        return cls(TransitionTrigger.ON_MOUSE_CLICK, state)

    @classmethod
    def on_mouse_leave(cls, state: str) -> 'AnimationTransition':
        return cls(TransitionTrigger.ON_MOUSE_LEAVE, state)

    @classmethod
    def on_show(cls, state: str) -> 'AnimationTransition':
        return cls(TransitionTrigger.ON_SHOW, state)


@dataclass
class AnimationState:
    """
    Named configuration of asset/theme/playback settings plus transition rules.

    Attributes:
        id: Unique key in the owning player's state map
        asset: Asset override (None = keep whatever asset is bound)
        theme: Theme override
        playback_settings: Settings override (None = default settings)
        transitions: Evaluated in declared order, first match wins
        reset_playhead_on_transition: Reset playhead to 0 when leaving this state
        reset_playhead_on_start: Reset playhead to 0 when entering this state

    Built with chained with_* calls:
        AnimationState("idle") \\
            .with_asset(handle) \\
            .with_transition(AnimationTransition.on_mouse_enter("hover"))
    """
    id: str
    asset: Optional[AssetHandle] = None
    theme: Optional[Theme] = None
    playback_settings: Optional[PlaybackSettings] = None
    transitions: List[AnimationTransition] = field(default_factory=list)
    reset_playhead_on_transition: bool = False
    reset_playhead_on_start: bool = False

    def __post_init__(self):
        self.id = sys.intern(self.id)

    def with_asset(self, asset: AssetHandle) -> 'AnimationState':
        self.asset = asset
        return self

    def with_theme(self, theme: Theme) -> 'AnimationState':
        self.theme = theme
        return self

    def with_playback_settings(self, playback_settings: PlaybackSettings) -> 'AnimationState':
        self.playback_settings = playback_settings
        return self

    def with_transition(self, transition: AnimationTransition) -> 'AnimationState':
        self.transitions.append(transition)
        return self

    def with_reset_playhead_on_transition(self, reset: bool) -> 'AnimationState':
        self.reset_playhead_on_transition = reset
        return self

    def with_reset_playhead_on_start(self, reset: bool) -> 'AnimationState':
        self.reset_playhead_on_start = reset
        return self
