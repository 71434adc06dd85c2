"""
LottieEngine - runs the tick pipeline over every player in the world

tick(dt) is synchronous and never suspends. Events raised during a tick are
queued and published on the EventBus by flush_events(), which the async
tick loop calls after every tick.
"""

import asyncio
import time
from collections import deque
from typing import Deque, List, Optional, Tuple

from engine.player import LottiePlayer
from engine.systems import PlayerInputSystem, PlayheadSystem, StateSystem, TransitionSystem, System
from engine.world import LottieEntity, World
from models.asset import AnimationAsset, AssetHandle, AssetStore
from models.enums import LogCategory
from models.events import Event
from models.playback import PlaybackSettings
from models.transform import Transform2D
from services.event_bus import EventBus
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.ENGINE)


class LottieEngine:
    """
    Owns the world and the ordered systems.

    Example:
        engine = LottieEngine()
        handle = engine.add_asset(AnimationAsset.lottie(0, 100, 30))
        entity = engine.spawn(handle, player)

        engine.set_pointer((10.0, -5.0))
        engine.tick(1 / 60)
    """

    def __init__(self, event_bus: Optional[EventBus] = None, assets: Optional[AssetStore] = None, fps: int = 60):
        self.event_bus = event_bus
        self.world = World(assets)
        self.fps = fps

        self._events: List[Event] = []
        self.systems: List[System] = [
            PlayerInputSystem(self.world, self._events),
            PlayheadSystem(self.world, self._events),
            TransitionSystem(self.world, self._events),
            StateSystem(self.world, self._events),
        ]

        self.running = False
        self.tick_task: Optional[asyncio.Task] = None
        self.ticks = 0
        self.tick_times: Deque[float] = deque(maxlen=120)

    # ------------------------------------------------------------
    # World setup
    # ------------------------------------------------------------

    @property
    def assets(self) -> AssetStore:
        return self.world.assets

    def add_asset(self, asset: AnimationAsset, name: Optional[str] = None) -> AssetHandle:
        handle = self.world.assets.add(asset, name)
        log.debug("Asset added", category=LogCategory.ASSET, handle=handle, kind=asset.kind.name, name=name)
        return handle

    def spawn(
        self,
        asset: AssetHandle,
        player: Optional[LottiePlayer] = None,
        playback_settings: Optional[PlaybackSettings] = None,
        transform: Optional[Transform2D] = None,
    ) -> LottieEntity:
        """
        Add an entity. Players are validated first so a transition to a
        missing state fails here, not mid-playback.
        """
        if player is not None:
            player.validate()
        entity = self.world.spawn(asset, player, playback_settings, transform)
        log.info(
            "Entity spawned",
            entity=entity.id,
            asset=asset,
            initial_state=player.initial_state if player else None,
        )
        return entity

    # ------------------------------------------------------------
    # Input
    # ------------------------------------------------------------

    def set_pointer(self, world_position: Optional[Tuple[float, float]]) -> None:
        self.world.pointer.world_position = world_position

    def press_left(self) -> None:
        """Left button went down; visible to the next tick only"""
        self.world.pointer.left_just_pressed = True

    # ------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------

    def tick(self, dt: float) -> List[Event]:
        """
        Run one tick: inputs -> playheads -> transitions -> state commit.

        Returns:
            Events produced by this tick (also queued for flush_events)
        """
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")

        first = len(self._events)
        self.world.time += dt
        for system in self.systems:
            system.update(dt)
        self.world.pointer.clear_edges()

        self.ticks += 1
        self.tick_times.append(time.perf_counter())
        return self._events[first:]

    async def flush_events(self) -> int:
        """Publish queued events in order. Returns how many were published."""
        pending = list(self._events)
        self._events.clear()
        if self.event_bus is None:
            return 0
        for event in pending:
            await self.event_bus.publish(event)
        return len(pending)

    # ------------------------------------------------------------
    # Async tick loop
    # ------------------------------------------------------------

    async def start(self) -> None:
        if self.running:
            log.warn("LottieEngine already running")
            return
        self.running = True
        self.tick_task = asyncio.create_task(self._tick_loop())
        log.info(f"Tick loop started @ {self.fps} FPS")

    async def stop(self) -> None:
        """
        Stop the tick loop and reap its task.

        Raises:
            Exception: whatever ended the loop early (e.g. UnsupportedAssetError)
        """
        self.running = False
        task = self.tick_task
        if task is None:
            return
        self.tick_task = None

        if not task.done():
            task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        finally:
            log.info("LottieEngine stopped", ticks=self.ticks)

    async def _tick_loop(self) -> None:
        frame_delay = 1.0 / self.fps
        last = time.perf_counter()

        while self.running:
            now = time.perf_counter()
            dt = now - last
            last = now

            try:
                self.tick(dt)
            except Exception as e:
                # Authoring errors (unknown state, ON_COMPLETE on an SVG) end the loop
                log.error("Tick failed, stopping loop", category=LogCategory.SYSTEM,
                          error=str(e), error_type=type(e).__name__)
                self.running = False
                raise
            await self.flush_events()

            await asyncio.sleep(frame_delay)

    def get_actual_fps(self) -> float:
        """Measured tick rate over recent ticks"""
        if len(self.tick_times) < 2:
            return 0.0
        duration = self.tick_times[-1] - self.tick_times[0]
        if duration <= 0:
            return 0.0
        return (len(self.tick_times) - 1) / duration

    def __repr__(self) -> str:
        return f"LottieEngine(entities={len(self.world.entities)}, assets={len(self.world.assets)}, ticks={self.ticks})"
