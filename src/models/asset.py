"""
Asset domain models

Assets live in an arena (AssetStore) keyed by stable integer handles.
Entities hold handles, never the asset itself, so several players may share
one underlying animation.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, NewType, Optional, Tuple

from models.enums import AssetKind
from models.transform import Transform2D

AssetHandle = NewType("AssetHandle", int)


@dataclass(frozen=True)
class Composition:
    """Immutable composition bounds of a frame-based animation"""
    frame_start: float
    frame_end: float
    frame_rate: float

    def __post_init__(self):
        if self.frame_rate <= 0:
            raise ValueError(f"frame_rate must be > 0, got {self.frame_rate}")
        if self.frame_end <= self.frame_start:
            raise ValueError(
                f"frame_end must be greater than frame_start, got [{self.frame_start}, {self.frame_end})"
            )

    @property
    def length(self) -> float:
        return self.frame_end - self.frame_start


@dataclass
class AnimationAsset:
    """
    Loaded animation content plus the mutable playhead.

    rendered_frames is owned by the asset and mutated only by the engine.
    It is not wrapped into a single loop; loop counts are derived from it.
    first_frame is the engine-clock time the first frame was shown during
    the current state entry (None until then).
    """
    kind: AssetKind
    width: float
    height: float
    composition: Optional[Composition] = None
    rendered_frames: float = 0.0
    first_frame: Optional[float] = None
    local_transform_center: Optional[Transform2D] = None

    def __post_init__(self):
        if self.kind == AssetKind.LOTTIE and self.composition is None:
            raise ValueError("Lottie assets require a composition")
        if self.local_transform_center is None:
            # Content is drawn centred on the entity, y-up
            self.local_transform_center = Transform2D.from_translation(self.width / 2, -self.height / 2)

    @classmethod
    def lottie(cls, frame_start: float, frame_end: float, frame_rate: float,
               width: float = 100.0, height: float = 100.0) -> 'AnimationAsset':
        return cls(
            kind=AssetKind.LOTTIE,
            width=width,
            height=height,
            composition=Composition(frame_start, frame_end, frame_rate),
        )

    @classmethod
    def svg(cls, width: float = 100.0, height: float = 100.0) -> 'AnimationAsset':
        return cls(kind=AssetKind.SVG, width=width, height=height)

    @property
    def has_frames(self) -> bool:
        return self.composition is not None

    def mark_rendered(self, now: float) -> bool:
        """
        Record the first-frame timestamp once per state entry.

        Returns:
            True if this call set the timestamp
        """
        if self.first_frame is not None:
            return False
        self.first_frame = now
        return True

    def reset_first_frame(self) -> None:
        self.first_frame = None


class AssetStore:
    """
    Arena of assets keyed by stable handles.

    A handle may be reserved before its content is loaded; get() returns None
    until load() supplies it, which the state commit treats as "not ready".
    """

    def __init__(self):
        self._assets: Dict[AssetHandle, Optional[AnimationAsset]] = {}
        self._names: Dict[str, AssetHandle] = {}
        self._next_handle = 0

    def reserve(self, name: Optional[str] = None) -> AssetHandle:
        """Reserve a handle for content that is not loaded yet"""
        handle = AssetHandle(self._next_handle)
        self._next_handle += 1
        self._assets[handle] = None
        if name is not None:
            self._names[name] = handle
        return handle

    def add(self, asset: AnimationAsset, name: Optional[str] = None) -> AssetHandle:
        handle = self.reserve(name)
        self._assets[handle] = asset
        return handle

    def load(self, handle: AssetHandle, asset: AnimationAsset) -> None:
        if handle not in self._assets:
            raise KeyError(f"Unknown asset handle: {handle}")
        self._assets[handle] = asset

    def unload(self, handle: AssetHandle) -> None:
        if handle in self._assets:
            self._assets[handle] = None

    def get(self, handle: AssetHandle) -> Optional[AnimationAsset]:
        return self._assets.get(handle)

    def is_ready(self, handle: AssetHandle) -> bool:
        return self._assets.get(handle) is not None

    def handle_for(self, name: str) -> AssetHandle:
        try:
            return self._names[name]
        except KeyError:
            raise KeyError(f"Unknown asset name: '{name}'") from None

    def items(self) -> Iterator[Tuple[AssetHandle, Optional[AnimationAsset]]]:
        return iter(self._assets.items())

    def __contains__(self, handle: object) -> bool:
        return handle in self._assets

    def __len__(self) -> int:
        return len(self._assets)
