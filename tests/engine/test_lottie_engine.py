"""
Tests for LottieEngine (engine/lottie_engine.py)

Covers spawning, tick bookkeeping, event publishing and the async tick loop.
"""

import asyncio

import pytest

from engine import InvalidTransitionError, LottieEngine, LottiePlayer, UnsupportedAssetError
from models.asset import AnimationAsset
from models.events import EventType
from models.state import AnimationState, AnimationTransition


class TestEngineSetup:
    def test_spawn_validates_player(self, engine, lottie_asset):
        broken = LottiePlayer("idle").with_state(
            AnimationState("idle").with_transition(AnimationTransition.on_mouse_enter("missing"))
        )
        handle = engine.add_asset(lottie_asset)
        with pytest.raises(InvalidTransitionError):
            engine.spawn(handle, broken)
        assert not engine.world.entities

    def test_spawn_unknown_asset(self, engine, hover_player):
        with pytest.raises(KeyError):
            engine.spawn(99, hover_player)

    def test_entity_ids_are_sequential(self, engine, lottie_asset):
        handle = engine.add_asset(lottie_asset)
        first = engine.spawn(handle)
        second = engine.spawn(handle)
        assert (first.id, second.id) == (0, 1)

    def test_despawn(self, engine, lottie_asset):
        entity = engine.spawn(engine.add_asset(lottie_asset))
        engine.world.despawn(entity.id)
        assert engine.world.get_entity(entity.id) is None

    def test_named_assets(self, engine, lottie_asset):
        handle = engine.add_asset(lottie_asset, "intro")
        assert engine.assets.handle_for("intro") == handle
        assert engine.assets.is_ready(handle)


class TestTick:
    def test_negative_dt_rejected(self, engine):
        with pytest.raises(ValueError):
            engine.tick(-0.1)

    def test_clock_advances(self, engine):
        engine.tick(0.25)
        engine.tick(0.5)
        assert engine.world.time == 0.75
        assert engine.ticks == 2

    def test_tick_returns_only_its_events(self, engine, lottie_asset, hover_player):
        engine.spawn(engine.add_asset(lottie_asset), hover_player)
        first = engine.tick(0.0)
        second = engine.tick(0.0)
        assert any(e.type == EventType.STATE_CHANGED for e in first)
        assert not any(e.type == EventType.STATE_CHANGED for e in second)

    def test_actual_fps_needs_two_ticks(self, engine):
        assert engine.get_actual_fps() == 0.0


class TestEventPublishing:
    @pytest.mark.asyncio
    async def test_flush_publishes_in_order(self, engine, event_bus, lottie_asset, hover_player):
        received = []
        event_bus.subscribe(EventType.STATE_CHANGED, received.append)
        event_bus.subscribe(EventType.STATE_TRANSITION_REQUESTED, received.append)

        engine.spawn(engine.add_asset(lottie_asset), hover_player)
        engine.tick(0.0)
        engine.set_pointer((0.0, 0.0))
        engine.tick(0.1)

        count = await engine.flush_events()
        assert count >= 3
        assert [e.type for e in received] == [
            EventType.STATE_CHANGED,
            EventType.STATE_TRANSITION_REQUESTED,
            EventType.STATE_CHANGED,
        ]
        assert received[-1].to_state == "hover"

    @pytest.mark.asyncio
    async def test_flush_without_bus_drops_events(self, lottie_asset, hover_player):
        engine = LottieEngine()
        engine.spawn(engine.add_asset(lottie_asset), hover_player)
        engine.tick(0.0)
        assert await engine.flush_events() == 0
        assert await engine.flush_events() == 0


class TestTickLoop:
    @pytest.mark.asyncio
    async def test_start_and_stop(self, event_bus, lottie_asset, hover_player):
        engine = LottieEngine(event_bus, fps=200)
        changed = []
        event_bus.subscribe(EventType.STATE_CHANGED, changed.append)
        engine.spawn(engine.add_asset(lottie_asset), hover_player)

        await engine.start()
        assert engine.running
        await asyncio.sleep(0.05)
        await engine.stop()

        assert not engine.running
        assert engine.tick_task is None
        assert engine.ticks > 0
        assert changed and changed[0].to_state == "idle"

    @pytest.mark.asyncio
    async def test_stop_when_not_running_is_noop(self, engine):
        await engine.stop()
        assert not engine.running

    @pytest.mark.asyncio
    async def test_loop_ends_on_authoring_error(self, event_bus):
        engine = LottieEngine(event_bus, fps=200)
        player = LottiePlayer("idle").with_state(
            AnimationState("idle").with_transition(AnimationTransition.on_complete("idle"))
        )
        engine.spawn(engine.add_asset(AnimationAsset.svg()), player)

        await engine.start()
        await asyncio.sleep(0.05)

        assert not engine.running
        assert engine.tick_task.done()
        assert engine.tick_task.exception() is not None

    @pytest.mark.asyncio
    async def test_stop_surfaces_loop_error(self, event_bus):
        """A dead loop is reaped by stop(), which re-raises what killed it."""
        engine = LottieEngine(event_bus, fps=200)
        player = LottiePlayer("idle").with_state(
            AnimationState("idle").with_transition(AnimationTransition.on_complete("idle"))
        )
        engine.spawn(engine.add_asset(AnimationAsset.svg()), player)

        await engine.start()
        await asyncio.sleep(0.05)

        with pytest.raises(UnsupportedAssetError):
            await engine.stop()
        assert engine.tick_task is None

        # Nothing left to reap
        await engine.stop()
