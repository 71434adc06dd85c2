import pytest

from engine import LottieEngine, LottiePlayer
from models.asset import AnimationAsset
from models.state import AnimationState, AnimationTransition
from services.event_bus import EventBus
from utils.logger import configure_logger, LogLevel


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep test output readable; only errors are printed."""
    configure_logger(LogLevel.ERROR, use_colors=False)
    yield
    configure_logger(LogLevel.INFO, use_colors=True)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def engine(event_bus):
    return LottieEngine(event_bus)


@pytest.fixture
def lottie_asset():
    """100 frames at 30 fps, 100x100 units."""
    return AnimationAsset.lottie(0, 100, 30)


@pytest.fixture
def hover_player():
    """idle <-> hover driven by the pointer."""
    return LottiePlayer("idle") \
        .with_state(AnimationState("idle").with_transition(AnimationTransition.on_mouse_enter("hover"))) \
        .with_state(AnimationState("hover").with_transition(AnimationTransition.on_mouse_leave("idle")))


@pytest.fixture
def spawn_player(engine, lottie_asset):
    """
    Spawn a player on the shared lottie asset and commit its initial state.

    Returns (entity, asset).
    """
    def _spawn(player, asset=None, **kwargs):
        asset = asset if asset is not None else lottie_asset
        handle = engine.add_asset(asset)
        entity = engine.spawn(handle, player, **kwargs)
        engine.tick(0.0)
        return entity, asset

    return _spawn
