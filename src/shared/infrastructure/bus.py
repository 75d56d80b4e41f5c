"""In-memory event bus implementation."""

from __future__ import annotations

from typing import Dict, List, Type

import structlog

from shared.domain.bus import IEventBus, IEventHandler

logger = structlog.get_logger(__name__)


class InMemoryEventBus(IEventBus):
    """Simple in-process, fire-and-forget bus.

    Delivery is synchronous to the handlers subscribed at publish time;
    there is no persistence and no delivery across processes.
    """

    def __init__(self) -> None:
        self._handlers: Dict[type, List[IEventHandler]] = {}

    def subscribe(self, event_class: Type, handler: IEventHandler) -> None:
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_class: Type, handler: IEventHandler) -> None:
        handlers = self._handlers.get(event_class, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: object) -> None:
        # Copy: a handler may unsubscribe while being notified.
        handlers = list(self._handlers.get(type(event), []))
        logger.debug(
            "bus.published",
            message_type=type(event).__name__,
            subscriber_count=len(handlers),
        )
        for handler in handlers:
            handler.handle(event)


# Process-wide bus for domain events (the order workspace panels use their
# own per-session instance).
event_bus = InMemoryEventBus()
