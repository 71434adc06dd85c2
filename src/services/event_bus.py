"""
Event Bus - Central event routing for player events

Implements pub-sub pattern:
- Publishers: publish(event)
- Subscribers: subscribe(event_type, handler, priority, filter_fn)
- Middleware: add_middleware(middleware_fn)
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from models.events import Event, EventType
from utils.logger import get_category_logger, LogCategory

log = get_category_logger(LogCategory.EVENT)


@dataclass
class EventHandler:
    """Event handler registration"""
    handler: Callable[[Event], None]
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]


class EventBus:
    """
    Central event bus for pub-sub event handling

    Features:
    - Priority-based handler execution (high priority first)
    - Per-handler filtering
    - Middleware pipeline (modify or block events)
    - Async/sync handler support (auto-detected)
    - One handler crashing doesn't stop the others

    Example:
        bus = EventBus()

        bus.subscribe(
            EventType.STATE_CHANGED,
            on_state_changed,
            filter_fn=lambda e: e.entity_id == button.id
        )

        await bus.publish(StateChangedEvent(button.id, "idle", "hover", False, 0.0))
    """

    def __init__(self, history_limit: int = 100):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._middleware: List[Callable[[Event], Optional[Event]]] = []

        # Recent events, newest last
        self._event_history: List[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType,
        handler: Callable[[Event], None],
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Subscribe to event type

        Args:
            event_type: Which events to listen for
            handler: Function to call (can be async or sync)
            priority: Execution priority (higher = called first, default: 0)
            filter_fn: Optional filter (return True = handle, False = skip)
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append(EventHandler(handler, priority, filter_fn))

        # Stable sort keeps registration order within a priority
        handlers.sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> bool:
        """Remove a handler. Returns True if it was registered."""
        handlers = self._handlers.get(event_type, [])
        for entry in handlers:
            if entry.handler == handler:
                handlers.remove(entry)
                return True
        return False

    def add_middleware(self, middleware: Callable[[Event], Optional[Event]]) -> None:
        """
        Add middleware to the processing pipeline (runs in registration order).

        Middleware returns the (possibly modified) event, or None to block it.
        """
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=getattr(middleware, "__name__", repr(middleware)))

    async def publish(self, event: Event) -> None:
        """
        Publish event to all subscribers

        Flow:
        1. Apply middleware (can modify or block event)
        2. Save to event history
        3. Execute handlers by priority, honouring per-handler filters
        4. Log handler exceptions and continue
        """
        for middleware in self._middleware:
            processed_event = middleware(event)
            if processed_event is None:
                return
            event = processed_event

        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

        handlers = self._handlers.get(event.type, [])
        if not handlers:
            return

        for handler_entry in list(handlers):
            if handler_entry.filter_fn and not handler_entry.filter_fn(event):
                continue

            try:
                if asyncio.iscoroutinefunction(handler_entry.handler):
                    await handler_entry.handler(event)
                else:
                    handler_entry.handler(event)
            except Exception as e:
                log.error(
                    f"Event handler failed: {getattr(handler_entry.handler, '__name__', '?')} for {event.type.name}",
                    error=str(e),
                    error_type=type(e).__name__
                )

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """Recent events from history, newest last"""
        return self._event_history[-limit:]

    def clear_history(self) -> None:
        self._event_history.clear()


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source = event.source.name if event.source else None
    log.debug(f"Event: {event.type.name} from {source}", **event.to_data())
    return event
