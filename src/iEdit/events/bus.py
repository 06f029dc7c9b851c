"""Minimal publish/subscribe bus used to notify UIs about renders and errors."""

from __future__ import annotations

import logging
import threading
import uuid
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type


@dataclass(kw_only=True)
class Event:
    """Base event class."""
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Subscription:
    """Handle returned by subscribe(); can be used to unsubscribe."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: Type = Event
    handler: Callable = field(default=lambda e: None)
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Dispatch events to handlers registered for their exact type.

    Synchronous handlers run on the publishing thread in registration order.
    Asynchronous handlers are submitted to a small thread pool.  A failing
    handler is logged and never interrupts the publisher.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, max_workers: int = 2):
        self._logger = logger or logging.getLogger(__name__)
        self._sync_handlers: Dict[Type[Event], List[Subscription]] = defaultdict(list)
        self._async_handlers: Dict[Type[Event], List[Subscription]] = defaultdict(list)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="iEdit-events")
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type[Event], handler: Callable, async_: bool = False) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler)
        with self._lock:
            store = self._async_handlers if async_ else self._sync_handlers
            store[event_type].append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.active = False
        with self._lock:
            for store in (self._sync_handlers, self._async_handlers):
                subs = store.get(subscription.event_type)
                if subs and subscription in subs:
                    subs.remove(subscription)

    def publish(self, event: Event) -> None:
        event_type = type(event)

        with self._lock:
            sync_subs = list(self._sync_handlers[event_type])
            async_subs = list(self._async_handlers[event_type])

        for sub in sync_subs:
            if sub.active:
                self._safe_call(sub.handler, event)

        for sub in async_subs:
            if sub.active:
                self._executor.submit(self._safe_call, sub.handler, event)

    def _safe_call(self, handler: Callable, event: Event) -> None:
        try:
            handler(event)
        except Exception:
            self._logger.exception("Handler failed for %s", type(event).__name__)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
