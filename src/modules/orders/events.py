"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderItemsAdded(DomainEvent):
    """Raised when a selection was merged into an order's lines."""

    created_count: int = 0
    updated_count: int = 0


@dataclass(frozen=True)
class OrderActivated(DomainEvent):
    """Raised when the external system accepted the order."""
