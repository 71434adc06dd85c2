"""
Tick systems

The engine runs these once per tick, strictly in this order, each over every
entity before the next one starts:

    PlayerInputSystem  -> fold pending seek/speed/intermission into the playhead
    PlayheadSystem     -> advance playheads by dt
    TransitionSystem   -> evaluate the current state's transition rules
    StateSystem        -> commit next_state

Inputs must land before the playhead advances, the playhead must advance
before rules are evaluated against it, and rules must be decided before the
commit consumes next_state.
"""

from typing import List, Optional, Set

from engine import playhead
from engine.errors import UnsupportedAssetError
from engine.world import LottieEntity, World
from models.asset import AnimationAsset, AssetHandle
from models.enums import LogCategory, PlaybackDirection, TransitionTrigger
from models.events import (
    Event,
    PlaybackCompletedEvent,
    PlaybackStartedEvent,
    StateChangedEvent,
    StateTransitionRequestedEvent,
    TransitionDeferredEvent,
)
from models.input import PointerInput
from models.playback import PlaybackSettings
from models.state import AnimationTransition
from models.transform import Transform2D
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.ENGINE)


class System:
    """Processing step over the world's entities"""

    def __init__(self, world: World, events: List[Event]):
        self.world = world
        # Events produced during the tick, published by the engine afterwards
        self.events = events

    def update(self, dt: float):
        raise NotImplementedError


# ============================================================
# 1. Pending user inputs
# ============================================================

class PlayerInputSystem(System):
    """Apply inputs the developer has made, e.g. player.seek(frame)"""

    def update(self, dt: float):
        for entity in self.world.players():
            player = entity.player
            asset = self.world.asset_of(entity)
            if asset is None or not asset.has_frames:
                # Requests stay pending until a frame-based asset is bound
                continue

            composition = asset.composition
            settings = entity.settings_or_default()

            # Order matters: seek's loop arithmetic uses the new intermission
            if player.pending_intermission is not None:
                intermission = player.pending_intermission
                player.pending_intermission = None
                asset.rendered_frames = playhead.apply_intermission_change(
                    asset.rendered_frames,
                    composition.length,
                    settings.intermission_frames(composition.frame_rate),
                    intermission * composition.frame_rate,
                )
                settings = settings.with_intermission(intermission)
                log.debug(
                    "Intermission changed",
                    category=LogCategory.PLAYHEAD,
                    entity=entity.id,
                    intermission=intermission,
                    rendered_frames=asset.rendered_frames,
                )

            if player.pending_seek_frame is not None:
                frame = player.pending_seek_frame
                player.pending_seek_frame = None
                asset.rendered_frames = playhead.seek_to(asset.rendered_frames, frame, composition, settings)
                log.debug(
                    "Seek applied",
                    category=LogCategory.PLAYHEAD,
                    entity=entity.id,
                    frame=frame,
                    rendered_frames=asset.rendered_frames,
                )

            if player.pending_speed is not None:
                settings = settings.with_speed(player.pending_speed)
                player.pending_speed = None
                log.debug("Speed changed", category=LogCategory.INPUT, entity=entity.id, speed=settings.speed)

            entity.playback_settings = settings


# ============================================================
# 2. Playhead integration
# ============================================================

class PlayheadSystem(System):
    """Advance all the playheads in the world, once per asset per tick"""

    def update(self, dt: float):
        advanced: Set[AssetHandle] = set()

        for entity in self.world.iter_entities():
            asset = self.world.asset_of(entity)
            if asset is None:
                continue

            settings = entity.settings_or_default()
            player = entity.player

            if player is None:
                # Uncontrolled asset still plays
                self._advance(entity, asset, settings, dt, advanced)
                continue

            if player.stopped:
                continue
            if settings.autoplay and not player.started:
                player.playing = True
            if not player.playing:
                continue

            # At this point, we are playing
            asset.mark_rendered(self.world.time)
            if not player.started:
                player.started = True
                self.events.append(PlaybackStartedEvent(entity.id, player.current_state))

            self._advance(entity, asset, settings, dt, advanced)

    def _advance(self, entity: LottieEntity, asset: AnimationAsset, settings: PlaybackSettings,
                 dt: float, advanced: Set[AssetHandle]) -> None:
        if not asset.has_frames or entity.asset in advanced:
            return
        advanced.add(entity.asset)

        composition = asset.composition
        before = asset.rendered_frames
        asset.rendered_frames = playhead.integrate(before, dt, settings.speed, composition.frame_rate)

        if entity.player is None:
            return
        cycle = composition.length + settings.intermission_frames(composition.frame_rate)
        loops = playhead.loops_completed(asset.rendered_frames, cycle)
        if loops > playhead.loops_completed(before, cycle):
            self.events.append(PlaybackCompletedEvent(entity.id, entity.player.current_state, loops))


# ============================================================
# 3. Transition rules
# ============================================================

def pointer_inside(pointer: PointerInput, transform: Transform2D, asset: AnimationAsset) -> bool:
    """
    Whether the pointer is inside the asset's local bounds.

    The pointer is taken into content space through the entity transform
    composed with the asset's centring transform. Inside means
    0 <= x <= width and -height <= y <= 0 (y-up content frame).
    """
    if pointer.world_position is None:
        return False

    local = asset.local_transform_center.compute_matrix().inverse()
    to_world = transform.compute_matrix() @ local
    try:
        to_local = to_world.inverse()
    except ValueError:
        # Zero scale: nothing on screen to hit
        return False

    x, y = to_local.transform_point(*pointer.world_position)
    return 0.0 <= x <= asset.width and -asset.height <= y <= 0.0


class TransitionSystem(System):
    """Evaluate the current state's rules; the first match sets next_state"""

    def update(self, dt: float):
        pointer = self.world.pointer

        for entity in self.world.players():
            player = entity.player
            if player.stopped:
                continue

            asset = self.world.asset_of(entity)
            if asset is None:
                continue

            is_inside = pointer_inside(pointer, entity.transform, asset)
            was_hovered = player.hovered
            state = player.state()

            for rule in state.transitions:
                if self._matches(rule, entity, asset, is_inside, was_hovered):
                    player.next_state = rule.state
                    log.debug(
                        "Transition rule fired",
                        category=LogCategory.TRANSITION,
                        entity=entity.id,
                        rule=rule.trigger.name,
                        from_state=state.id,
                        to_state=rule.state,
                    )
                    self.events.append(
                        StateTransitionRequestedEvent(entity.id, state.id, rule.state, rule.trigger)
                    )
                    break

            player.hovered = is_inside

    def _matches(self, rule: AnimationTransition, entity: LottieEntity, asset: AnimationAsset,
                 is_inside: bool, was_hovered: bool) -> bool:
        trigger = rule.trigger

        if trigger == TransitionTrigger.ON_AFTER:
            return asset.first_frame is not None and self.world.time - asset.first_frame >= rule.secs

        if trigger == TransitionTrigger.ON_COMPLETE:
            if not asset.has_frames:
                raise UnsupportedAssetError(
                    f"invalid state: '{entity.player.current_state}', ON_COMPLETE is only valid "
                    f"for frame-based assets. Use ON_AFTER for {asset.kind.name}."
                )
            return playhead.is_loop_complete(asset.rendered_frames, asset.composition,
                                             entity.settings_or_default())

        if trigger == TransitionTrigger.ON_MOUSE_ENTER:
            return is_inside

        if trigger == TransitionTrigger.ON_MOUSE_CLICK:
            return is_inside and self.world.pointer.left_just_pressed

        if trigger == TransitionTrigger.ON_MOUSE_LEAVE:
            return was_hovered and not is_inside

        if trigger == TransitionTrigger.ON_SHOW:
            return asset.first_frame is not None

        raise ValueError(f"Unhandled transition trigger: {trigger}")


# ============================================================
# 4. State commit
# ============================================================

class StateSystem(System):
    """
    Commit pending transitions.

    Two phases: resolve the target and check its asset is loaded, then
    mutate. A target asset that is not loaded yet re-arms next_state
    unchanged and the commit is retried next tick.
    """

    def update(self, dt: float):
        for entity in self.world.players():
            self._commit(entity)

    def _commit(self, entity: LottieEntity) -> None:
        player = entity.player
        next_id = player.next_state
        if next_id is None:
            return
        player.next_state = None

        player.started = False
        player.playing = False

        target_state = player.get_state(next_id)
        target_handle = target_state.asset if target_state.asset is not None else entity.asset

        asset = self.world.assets.get(target_handle)
        if asset is None:
            log.warn("Asset not ready for transition, re-queueing",
                     category=LogCategory.ASSET, entity=entity.id, to=next_id)
            player.next_state = next_id
            self.events.append(TransitionDeferredEvent(entity.id, next_id))
            return

        changed_assets = entity.asset != target_handle
        entity.asset = target_handle

        current_settings = entity.settings_or_default()
        asset.reset_first_frame()
        if asset.has_frames:
            self._reset_playhead(player.state().reset_playhead_on_transition, target_state.reset_playhead_on_start,
                                 changed_assets, asset, current_settings, target_state.playback_settings)

        if target_state.theme is not None:
            entity.theme = target_state.theme
        entity.playback_settings = (
            target_state.playback_settings if target_state.playback_settings is not None
            else PlaybackSettings()
        )

        from_state = player.current_state
        player.current_state = next_id
        log.info("State committed", category=LogCategory.STATE,
                 entity=entity.id, from_state=from_state, to_state=next_id)
        self.events.append(
            StateChangedEvent(entity.id, from_state, next_id, changed_assets, asset.rendered_frames)
        )

    @staticmethod
    def _reset_playhead(
        reset_on_leave: bool,
        reset_on_enter: bool,
        changed_assets: bool,
        asset: AnimationAsset,
        current_settings: PlaybackSettings,
        target_settings: Optional[PlaybackSettings],
    ) -> None:
        composition = asset.composition
        # Where the playhead logically is, under the outgoing settings
        shown = playhead.calculate_playhead(asset.rendered_frames, composition, current_settings)

        if reset_on_leave or reset_on_enter or changed_assets:
            asset.rendered_frames = 0.0
            return

        target_direction = (
            target_settings.direction if target_settings is not None else PlaybackDirection.NORMAL
        )
        asset.rendered_frames = playhead.remap_on_transition(
            asset.rendered_frames,
            shown,
            composition.frame_start,
            composition.frame_end,
            current_settings.direction,
            target_direction,
        )
