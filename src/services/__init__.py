"""Services layer"""

from .event_bus import EventBus, log_middleware

__all__ = [
    "EventBus",
    "log_middleware",
]
