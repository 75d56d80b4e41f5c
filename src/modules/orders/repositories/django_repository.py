"""Django ORM implementation of the Order repository.

Domain events are handed to the in-process bus through
``transaction.on_commit`` so handlers never observe rolled-back work.

Activation is a conditional ``UPDATE ... WHERE status = 'Draft'``: of two
concurrent confirmations only one changes the row.
"""

from __future__ import annotations

from functools import partial
from typing import List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from modules.orders.constants import OrderStatus
from modules.orders.events import OrderActivated
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return (
                Order.objects.select_related("account", "price_book")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list_items(self, order_id: UUID, limit: Optional[int] = None) -> List[OrderItem]:
        queryset = (
            OrderItem.objects.select_related("product", "price_book_entry")
            .filter(order_id=order_id)
            .order_by("unit_price", "created_at", "id")
        )
        if limit is not None:
            queryset = queryset[:limit]
        return list(queryset)

    # ------------------------------------------------------------------
    # Save (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        entity.save()
        event_count = self.publish_events(entity)
        logger.info("order.saved", order_id=str(entity.id), event_count=event_count)
        return entity

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    @transaction.atomic
    def bulk_create_items(self, items: List[OrderItem]) -> List[OrderItem]:
        for item in items:
            item.clean()
        created = OrderItem.objects.bulk_create(items)
        logger.info("order.items_created", count=len(created))
        return created

    @transaction.atomic
    def bulk_update_items(self, items: List[OrderItem]) -> int:
        now = timezone.now()
        for item in items:
            item.updated_at = now
        updated = OrderItem.objects.bulk_update(items, ["quantity", "updated_at"])
        logger.info("order.items_updated", count=updated)
        return updated

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @transaction.atomic
    def activate(self, order: Order) -> bool:
        updated = Order.objects.filter(id=order.id, status=OrderStatus.DRAFT).update(
            status=OrderStatus.ACTIVATED, updated_at=timezone.now()
        )
        if not updated:
            return False
        order.status = OrderStatus.ACTIVATED
        order.add_domain_event(OrderActivated(aggregate_id=order.id))
        self.publish_events(order)
        logger.info("order.activated", order_id=str(order.id))
        return True

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def publish_events(self, order: Order) -> int:
        events = order.pull_domain_events()
        for event in events:
            transaction.on_commit(partial(event_bus.publish, event))
        return len(events)
