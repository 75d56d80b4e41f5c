"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import OrderActivated, OrderItemsAdded
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderItemsAddedHandler(IEventHandler[OrderItemsAdded]):
    def handle(self, event: OrderItemsAdded) -> None:
        logger.info(
            f"Order {event.aggregate_id} lines changed",
            order_id=str(event.aggregate_id),
            created_count=event.created_count,
            updated_count=event.updated_count,
        )


class OrderActivatedHandler(IEventHandler[OrderActivated]):
    def handle(self, event: OrderActivated) -> None:
        logger.info(
            f"Order {event.aggregate_id} activated",
            order_id=str(event.aggregate_id),
        )


order_items_added_handler = OrderItemsAddedHandler()
order_activated_handler = OrderActivatedHandler()
