"""Order repository interface.

Extends ``IRepository[Order]`` with the line-level operations the
add-to-order and confirmation workflows need.  The Service Layer depends
exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root (Order + OrderItems)."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its account and price book, or ``None``."""

    @abstractmethod
    def list_items(self, order_id: UUID, limit: Optional[int] = None) -> List[OrderItem]:
        """Lines of an order with product loaded, cheapest first."""

    @abstractmethod
    def bulk_create_items(self, items: List[OrderItem]) -> List[OrderItem]:
        """Insert new lines; every line is validated before any insert."""

    @abstractmethod
    def bulk_update_items(self, items: List[OrderItem]) -> int:
        """Persist quantity changes on existing lines."""

    @abstractmethod
    def activate(self, order: Order) -> bool:
        """Move a Draft order to Activated.

        Returns ``False`` when the order was no longer Draft (another request
        activated it first).
        """

    @abstractmethod
    def publish_events(self, order: Order) -> int:
        """Hand the order's pending domain events to the bus on commit."""
