"""
Tests for EventBus (services/event_bus.py)

Subscription, priority, filtering, middleware and handler isolation.
"""

import pytest

from models.events import (
    EventType,
    PlaybackStartedEvent,
    StateChangedEvent,
    TransitionDeferredEvent,
)
from services.event_bus import EventBus, log_middleware


def changed(entity_id=0, to_state="hover"):
    return StateChangedEvent(entity_id, "idle", to_state, False, 0.0)


@pytest.mark.asyncio
class TestEventBus:
    async def test_basic_pub_sub(self, event_bus):
        received = []

        async def handler(event):
            received.append(event)

        event_bus.subscribe(EventType.STATE_CHANGED, handler)
        await event_bus.publish(changed())

        assert len(received) == 1
        assert received[0].to_state == "hover"

    async def test_sync_handler(self, event_bus):
        received = []
        event_bus.subscribe(EventType.STATE_CHANGED, received.append)
        await event_bus.publish(changed())
        assert len(received) == 1

    async def test_only_matching_type(self, event_bus):
        received = []
        event_bus.subscribe(EventType.PLAYBACK_STARTED, received.append)
        await event_bus.publish(changed())
        await event_bus.publish(PlaybackStartedEvent(0, "idle"))
        assert [e.type for e in received] == [EventType.PLAYBACK_STARTED]

    async def test_filtering(self, event_bus):
        first, second = [], []
        event_bus.subscribe(EventType.STATE_CHANGED, first.append, filter_fn=lambda e: e.entity_id == 0)
        event_bus.subscribe(EventType.STATE_CHANGED, second.append, filter_fn=lambda e: e.entity_id == 1)

        await event_bus.publish(changed(0))
        await event_bus.publish(changed(1))
        await event_bus.publish(changed(0))

        assert len(first) == 2
        assert len(second) == 1

    async def test_priority_order(self, event_bus):
        order = []
        event_bus.subscribe(EventType.STATE_CHANGED, lambda e: order.append("low"), priority=0)
        event_bus.subscribe(EventType.STATE_CHANGED, lambda e: order.append("high"), priority=10)
        event_bus.subscribe(EventType.STATE_CHANGED, lambda e: order.append("low-2"), priority=0)

        await event_bus.publish(changed())
        assert order == ["high", "low", "low-2"]

    async def test_middleware_blocks(self, event_bus):
        received = []
        event_bus.subscribe(EventType.TRANSITION_DEFERRED, received.append)
        event_bus.add_middleware(lambda e: None if e.type == EventType.TRANSITION_DEFERRED else e)

        await event_bus.publish(TransitionDeferredEvent(0, "hover"))
        assert received == []
        assert event_bus.get_event_history() == []

    async def test_log_middleware_passes_through(self, event_bus):
        received = []
        event_bus.subscribe(EventType.STATE_CHANGED, received.append)
        event_bus.add_middleware(log_middleware)
        await event_bus.publish(changed())
        assert len(received) == 1

    async def test_failing_handler_does_not_stop_others(self, event_bus):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        event_bus.subscribe(EventType.STATE_CHANGED, broken, priority=5)
        event_bus.subscribe(EventType.STATE_CHANGED, received.append)

        await event_bus.publish(changed())
        assert len(received) == 1

    async def test_unsubscribe(self, event_bus):
        received = []
        event_bus.subscribe(EventType.STATE_CHANGED, received.append)
        assert event_bus.unsubscribe(EventType.STATE_CHANGED, received.append)
        assert not event_bus.unsubscribe(EventType.STATE_CHANGED, received.append)

        await event_bus.publish(changed())
        assert received == []

    async def test_history_is_bounded(self):
        bus = EventBus(history_limit=3)
        for i in range(5):
            await bus.publish(changed(i))

        history = bus.get_event_history(limit=10)
        assert [e.entity_id for e in history] == [2, 3, 4]

        bus.clear_history()
        assert bus.get_event_history() == []


class TestEventPayload:
    def test_to_data_excludes_metadata(self):
        data = changed(3, "pressed").to_data()
        assert data["entity_id"] == 3
        assert data["to_state"] == "pressed"
        assert "type" not in data
        assert "timestamp" not in data
