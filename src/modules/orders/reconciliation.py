"""Merge a catalog selection into an order's existing lines.

Pure in-memory step of the add-to-order workflow: no queries, no writes.
Lines are keyed by product.  A selected product that already has a line
gains one unit; otherwise a new line is built at quantity 1 and indexed, so
a product selected twice in the same batch ends up as one line with
quantity 2.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List
from uuid import UUID

from modules.catalog.models import PriceBookEntry
from modules.orders.models import Order, OrderItem


@dataclass
class ReconciliationPlan:
    """Lines to insert and lines whose quantity changed."""

    new_items: List[OrderItem] = field(default_factory=list)
    updated_items: List[OrderItem] = field(default_factory=list)


def reconcile_selection(
    order: Order,
    existing_items: Iterable[OrderItem],
    selected_entries: Iterable[PriceBookEntry],
) -> ReconciliationPlan:
    by_product: Dict[UUID, OrderItem] = {item.product_id: item for item in existing_items}
    new_ids = set()
    updated: Dict[UUID, OrderItem] = {}
    plan = ReconciliationPlan()

    for entry in selected_entries:
        item = by_product.get(entry.product_id)
        if item is None:
            item = OrderItem(
                order=order,
                product=entry.product,
                price_book_entry=entry,
                unit_price=entry.unit_price,
                quantity=Decimal("1"),
            )
            by_product[entry.product_id] = item
            new_ids.add(item.id)
            plan.new_items.append(item)
            continue

        item.quantity = item.quantity + 1
        if item.id not in new_ids:
            updated[item.id] = item

    plan.updated_items = list(updated.values())
    return plan
