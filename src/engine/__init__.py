"""
Lottie player engine

- playhead: pure playhead arithmetic
- player: LottiePlayer state machine controller
- world: entities and the asset arena
- systems: the four ordered tick systems
- lottie_engine: LottieEngine (tick + async tick loop)
"""

from .errors import UnknownStateError, InvalidTransitionError, UnsupportedAssetError, ConfigError
from .player import LottiePlayer
from .world import World, LottieEntity
from .lottie_engine import LottieEngine

__all__ = [
    "UnknownStateError",
    "InvalidTransitionError",
    "UnsupportedAssetError",
    "ConfigError",
    "LottiePlayer",
    "World",
    "LottieEntity",
    "LottieEngine",
]
