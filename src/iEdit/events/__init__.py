from .bus import Event, EventBus, Subscription
from .edit_events import PreviewRenderedEvent

__all__ = [
    "Event",
    "EventBus",
    "PreviewRenderedEvent",
    "Subscription",
]
