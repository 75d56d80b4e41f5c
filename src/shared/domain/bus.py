"""Bus interfaces for in-process publish/subscribe.

The same contract carries domain events (``DomainEvent`` subclasses) and
the panel channel messages of the order workspace: subscribers register per
message class and receive every instance published afterwards.
"""

from __future__ import annotations

from typing import Generic, Protocol, Type, TypeVar

M = TypeVar("M", contravariant=True)


class IEventHandler(Protocol, Generic[M]):
    """Handler interface for published messages."""

    def handle(self, event: M) -> None: ...


class IEventBus(Protocol):
    """Event bus interface."""

    def publish(self, event: object) -> None: ...

    def subscribe(self, event_class: Type[M], handler: IEventHandler[M]) -> None: ...

    def unsubscribe(
        self, event_class: Type[M], handler: IEventHandler[M]
    ) -> None: ...
