"""
Models package - Data models for the lottie player engine
"""

from .enums import PlaybackDirection, LoopMode, AssetKind, TransitionTrigger, LogLevel, LogCategory
from .playback import PlaybackSettings, PlaybackLoopBehavior
from .asset import AnimationAsset, AssetHandle, AssetStore, Composition
from .state import AnimationState, AnimationTransition
from .theme import Theme
from .transform import Affine2D, Transform2D
from .input import PointerInput

__all__ = [
    'PlaybackDirection',
    'LoopMode',
    'AssetKind',
    'TransitionTrigger',
    'LogLevel',
    'LogCategory',
    'PlaybackSettings',
    'PlaybackLoopBehavior',
    'AnimationAsset',
    'AssetHandle',
    'AssetStore',
    'Composition',
    'AnimationState',
    'AnimationTransition',
    'Theme',
    'Affine2D',
    'Transform2D',
    'PointerInput',
]
