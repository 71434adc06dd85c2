"""
Pydantic schemas for YAML configuration
"""

from .engine import EngineSchema, AssetSchema, ConfigSchema
from .player import TransformSchema, PlaybackSchema, TransitionSchema, StateSchema, PlayerSchema

__all__ = [
    "EngineSchema",
    "AssetSchema",
    "ConfigSchema",
    "TransformSchema",
    "PlaybackSchema",
    "TransitionSchema",
    "StateSchema",
    "PlayerSchema",
]
