"""
Entity world - entities, the asset arena and per-tick inputs

Entities are plain records holding an asset handle plus optional player,
playback settings and theme. Systems iterate them in id order.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from engine.player import LottiePlayer
from models.asset import AnimationAsset, AssetHandle, AssetStore
from models.input import PointerInput
from models.playback import PlaybackSettings
from models.theme import Theme
from models.transform import Transform2D


@dataclass
class LottieEntity:
    """
    One animated entity.

    player is None for an uncontrolled asset: it still plays, with default
    settings, and never transitions.
    """
    id: int
    asset: AssetHandle
    player: Optional[LottiePlayer] = None
    playback_settings: Optional[PlaybackSettings] = None
    theme: Optional[Theme] = None
    transform: Transform2D = field(default_factory=Transform2D)

    def settings_or_default(self) -> PlaybackSettings:
        return self.playback_settings if self.playback_settings is not None else PlaybackSettings()


class World:
    """Entity storage plus the shared resources every system reads"""

    def __init__(self, assets: Optional[AssetStore] = None):
        self.assets = assets if assets is not None else AssetStore()
        self.entities: Dict[int, LottieEntity] = {}
        self.pointer = PointerInput()
        # Engine clock, seconds; advanced once per tick
        self.time = 0.0
        self.next_entity_id = 0

    def spawn(
        self,
        asset: AssetHandle,
        player: Optional[LottiePlayer] = None,
        playback_settings: Optional[PlaybackSettings] = None,
        transform: Optional[Transform2D] = None,
    ) -> LottieEntity:
        if asset not in self.assets:
            raise KeyError(f"Unknown asset handle: {asset}")
        entity = LottieEntity(
            id=self.next_entity_id,
            asset=asset,
            player=player,
            playback_settings=playback_settings,
            transform=transform if transform is not None else Transform2D(),
        )
        self.entities[entity.id] = entity
        self.next_entity_id += 1
        return entity

    def despawn(self, entity_id: int) -> None:
        self.entities.pop(entity_id, None)

    def get_entity(self, entity_id: int) -> Optional[LottieEntity]:
        return self.entities.get(entity_id)

    def iter_entities(self) -> Iterator[LottieEntity]:
        return iter(list(self.entities.values()))

    def players(self) -> List[LottieEntity]:
        """Entities with a LottiePlayer attached"""
        return [e for e in self.entities.values() if e.player is not None]

    def asset_of(self, entity: LottieEntity) -> Optional[AnimationAsset]:
        return self.assets.get(entity.asset)
