"""
main.py - Demo entry point for the lottie player engine
--------------------------------------------------------

Responsible for:
- loading config/config.yaml and spawning the configured players
- wiring the EventBus (log middleware + state change handler)
- running the async tick loop with a scripted pointer sweep
- graceful shutdown on Ctrl+C / SIGTERM
"""

import asyncio
import signal
import sys

from engine import LottieEngine
from managers import ConfigManager, PlayerManager
from models.enums import LogCategory
from models.events import EventType, StateChangedEvent
from services import EventBus, log_middleware
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.SYSTEM)

# World-space pointer path swept over the demo button, one point per second
POINTER_PATH = [None, (0.0, 0.0), (10.0, 5.0), (300.0, 300.0), (0.0, 0.0), None]


async def sweep_pointer(engine: LottieEngine, stop: asyncio.Event) -> None:
    """Move the pointer along POINTER_PATH forever, clicking on every other hit"""
    step = 0
    while not stop.is_set():
        position = POINTER_PATH[step % len(POINTER_PATH)]
        engine.set_pointer(position)
        if position is not None and step % 2 == 0:
            engine.press_left()
        step += 1
        try:
            await asyncio.wait_for(stop.wait(), timeout=1.0)
        except asyncio.TimeoutError:
            pass


async def main():
    log.info("Starting lottie player demo...")

    config = ConfigManager()
    schema = config.load()

    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    def on_state_changed(event: StateChangedEvent):
        log.info(f"Entity {event.entity_id}: {event.from_state} -> {event.to_state}",
                 asset_changed=event.asset_changed)

    event_bus.subscribe(EventType.STATE_CHANGED, on_state_changed)

    engine = LottieEngine(event_bus, fps=schema.engine.fps)
    players = PlayerManager(schema)
    players.populate(engine)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    await engine.start()
    pointer_task = asyncio.create_task(sweep_pointer(engine, stop))

    log.info("Engine running. Ctrl+C to exit.")
    signal_task = asyncio.create_task(stop.wait())
    # Returns on a signal, or as soon as the tick loop dies
    await asyncio.wait({signal_task, engine.tick_task}, return_when=asyncio.FIRST_COMPLETED)
    if not signal_task.done():
        log.error("Tick loop ended unexpectedly, shutting down")

    stop.set()
    for task in (signal_task, pointer_task):
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    # Re-raises the error that ended the tick loop, if any
    await engine.stop()
    log.info("Shut down cleanly", ticks=engine.ticks, fps=f"{engine.get_actual_fps():.1f}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except Exception as e:
        log.error(f"Fatal error: {e}", error_type=type(e).__name__)
        sys.exit(1)
