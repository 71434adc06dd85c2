"""
Player Manager

Turns validated config schemas into engine objects: assets go into the
engine's AssetStore, players become LottiePlayer state graphs and are spawned
as entities.
"""

import math
from typing import Dict, Optional

from engine.errors import ConfigError
from engine.lottie_engine import LottieEngine
from engine.player import LottiePlayer
from engine.world import LottieEntity
from models.asset import AnimationAsset, AssetHandle
from models.enums import AssetKind, PlaybackDirection, TransitionTrigger
from models.playback import FULL_SEGMENT, PlaybackLoopBehavior, PlaybackSettings
from models.state import AnimationState, AnimationTransition
from models.theme import Theme
from models.transform import Transform2D
from schemas import AssetSchema, ConfigSchema, PlaybackSchema, PlayerSchema, StateSchema, TransformSchema
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)


def build_asset(schema: AssetSchema) -> AnimationAsset:
    if AssetKind[schema.kind] == AssetKind.SVG:
        return AnimationAsset.svg(schema.width, schema.height)
    return AnimationAsset.lottie(schema.frame_start, schema.frame_end, schema.frame_rate,
                                 schema.width, schema.height)


def build_playback(schema: PlaybackSchema) -> PlaybackSettings:
    if schema.looping == "LOOP":
        looping = PlaybackLoopBehavior.loop()
    elif schema.looping == "DO_NOT_LOOP":
        looping = PlaybackLoopBehavior.do_not_loop()
    else:
        looping = PlaybackLoopBehavior.amount(schema.looping)

    return PlaybackSettings(
        autoplay=schema.autoplay,
        direction=PlaybackDirection[schema.direction],
        speed=schema.speed,
        intermission=schema.intermission,
        looping=looping,
        segments=tuple(schema.segments) if schema.segments is not None else FULL_SEGMENT,
    )


def build_transform(schema: TransformSchema) -> Transform2D:
    return Transform2D(
        x=schema.x,
        y=schema.y,
        rotation=math.radians(schema.rotation),
        scale_x=schema.scale,
        scale_y=schema.scale,
    )


class PlayerManager:
    """
    Builds and spawns the players described in the config.

    Example:
        config = ConfigManager()
        config.load()

        engine = LottieEngine(event_bus)
        entities = PlayerManager(config.schema).populate(engine)
        entities["button"].player.transition("pressed")
    """

    def __init__(self, config: ConfigSchema):
        self.config = config
        self.handles: Dict[str, AssetHandle] = {}

    def load_assets(self, engine: LottieEngine) -> Dict[str, AssetHandle]:
        """
        Register every configured asset. Assets with preload: false only get
        a reserved handle; load_pending() supplies their content later.
        """
        for name, schema in self.config.assets.items():
            if schema.preload:
                self.handles[name] = engine.add_asset(build_asset(schema), name)
            else:
                self.handles[name] = engine.assets.reserve(name)
                log.info(f"Asset '{name}' reserved, not loaded", handle=self.handles[name])
        return self.handles

    def load_pending(self, engine: LottieEngine) -> int:
        """Load the content of every reserved asset. Returns how many were loaded."""
        loaded = 0
        for name, handle in self.handles.items():
            if not engine.assets.is_ready(handle):
                engine.assets.load(handle, build_asset(self.config.assets[name]))
                log.info(f"Asset '{name}' loaded", handle=handle)
                loaded += 1
        return loaded

    def build_state(self, state_id: str, schema: StateSchema) -> AnimationState:
        state = AnimationState(state_id) \
            .with_reset_playhead_on_transition(schema.reset_playhead_on_transition) \
            .with_reset_playhead_on_start(schema.reset_playhead_on_start)

        if schema.asset is not None:
            state.with_asset(self._handle(schema.asset))
        if schema.theme:
            try:
                state.with_theme(Theme.from_hex(schema.theme))
            except ValueError as ex:
                raise ConfigError(f"state '{state_id}': {ex}") from ex
        if schema.playback is not None:
            state.with_playback_settings(build_playback(schema.playback))

        for rule in schema.transitions:
            state.with_transition(AnimationTransition(TransitionTrigger[rule.trigger], rule.state, rule.secs))
        return state

    def build_player(self, schema: PlayerSchema) -> LottiePlayer:
        player = LottiePlayer(schema.initial_state)
        for state_id, state_schema in schema.states.items():
            player.with_state(self.build_state(state_id, state_schema))
        return player

    def populate(self, engine: LottieEngine) -> Dict[str, LottieEntity]:
        """
        Load assets (if not done yet) and spawn one entity per configured player.

        Returns:
            Player name -> spawned entity
        """
        if not self.handles:
            self.load_assets(engine)

        entities: Dict[str, LottieEntity] = {}
        for name, schema in self.config.players.items():
            player = self.build_player(schema)
            playback = build_playback(schema.playback) if schema.playback is not None else None
            entities[name] = engine.spawn(
                self._handle(schema.asset),
                player,
                playback_settings=playback,
                transform=build_transform(schema.transform),
            )
            log.info(f"Player '{name}' ready", entity=entities[name].id, states=sum(1 for _ in player.states()))
        return entities

    def _handle(self, asset_name: str) -> AssetHandle:
        try:
            return self.handles[asset_name]
        except KeyError:
            raise ConfigError(f"Unknown asset '{asset_name}'") from None

    def get_handle(self, asset_name: str) -> Optional[AssetHandle]:
        return self.handles.get(asset_name)
