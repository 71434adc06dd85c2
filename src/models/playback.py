"""
Playback domain models

PlaybackSettings describes how one animation segment plays. It carries no
behavior; the engine systems consume it.
"""

import math
import sys
from dataclasses import dataclass, field, replace
from typing import Tuple

from models.enums import PlaybackDirection, LoopMode


# Default segment spans the whole numeric range ("whole composition")
FULL_SEGMENT: Tuple[float, float] = (-sys.float_info.max, sys.float_info.max)


@dataclass(frozen=True)
class PlaybackLoopBehavior:
    """
    How often to loop.

    Examples:
        PlaybackLoopBehavior.loop()          # forever
        PlaybackLoopBehavior.amount(3)       # 3 loops after the first play
        PlaybackLoopBehavior.do_not_loop()   # same as amount(0)
    """
    mode: LoopMode = LoopMode.LOOP
    count: int = 0

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"Loop amount must be >= 0, got {self.count}")

    @classmethod
    def loop(cls) -> 'PlaybackLoopBehavior':
        return cls(LoopMode.LOOP)

    @classmethod
    def amount(cls, count: int) -> 'PlaybackLoopBehavior':
        return cls(LoopMode.AMOUNT, count)

    @classmethod
    def do_not_loop(cls) -> 'PlaybackLoopBehavior':
        return cls(LoopMode.DO_NOT_LOOP)

    @property
    def extra_loops(self) -> float:
        """Loops allowed after the first play (inf for LOOP)"""
        if self.mode == LoopMode.LOOP:
            return math.inf
        if self.mode == LoopMode.DO_NOT_LOOP:
            return 0
        return self.count


@dataclass(frozen=True)
class PlaybackSettings:
    """
    Playback settings which adjust the playback of an animation asset.

    Attributes:
        autoplay: Start playing automatically when first encountered
        direction: NORMAL or REVERSE
        speed: Multiplier, 1.0 is normal speed (finite, >= 0)
        intermission: Idle seconds spent between loops (>= 0)
        looping: Whether to loop, and how many times
        segments: Half-open [start, end) frame range, clamped against the
                  composition's own bounds
    """
    autoplay: bool = True
    direction: PlaybackDirection = PlaybackDirection.NORMAL
    speed: float = 1.0
    intermission: float = 0.0
    looping: PlaybackLoopBehavior = field(default_factory=PlaybackLoopBehavior)
    segments: Tuple[float, float] = FULL_SEGMENT

    def __post_init__(self):
        validate_speed(self.speed)
        validate_intermission(self.intermission)

    def with_speed(self, speed: float) -> 'PlaybackSettings':
        return replace(self, speed=speed)

    def with_intermission(self, intermission: float) -> 'PlaybackSettings':
        return replace(self, intermission=intermission)

    def intermission_frames(self, frame_rate: float) -> float:
        """Intermission expressed on the playhead axis"""
        return self.intermission * frame_rate


def validate_speed(speed: float) -> float:
    """Speed must be finite and non-negative. Zero freezes the playhead."""
    if not math.isfinite(speed) or speed < 0:
        raise ValueError(f"Speed must be a finite value >= 0, got {speed}")
    return speed


def validate_intermission(intermission: float) -> float:
    if not math.isfinite(intermission) or intermission < 0:
        raise ValueError(f"Intermission must be a finite value >= 0, got {intermission}")
    return intermission
