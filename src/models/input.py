"""Pointer input supplied by the host's window/camera layer"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class PointerInput:
    """
    Pointer state for the current tick.

    world_position is None when there is no cursor, window or camera;
    hit-tests then report "outside".
    """
    world_position: Optional[Tuple[float, float]] = None
    left_just_pressed: bool = False  # left button went down this tick

    def clear_edges(self) -> None:
        """Reset per-tick edge flags (call after each tick)"""
        self.left_just_pressed = False
