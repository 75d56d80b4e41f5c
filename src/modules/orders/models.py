"""Order and OrderItem models.

Business rules implemented:
- An order moves Draft -> Activated exactly once; Activated is terminal.
- Order number auto-generated as a human-readable identifier.
- Account FK uses PROTECT so confirmed orders keep their account.
- At most one line per product within an order (unique constraint); repeated
  selections of a product increase the quantity of the existing line.
- A line's price book entry must belong to the order's price book.
- OrderItem snapshots the entry price at creation time (``unit_price``).
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.orders.constants import (
    ORDER_NUMBER_MAX_RETRIES,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
)
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root.

    ``order_number`` is generated on first save (format:
    ``ORD-YYYYMMDD-XXXXXX``).  ``price_book`` is empty until lines are first
    added, at which point the workflow points it at the standard price book.
    """

    order_number = models.CharField(max_length=20, unique=True, editable=False)
    account = models.ForeignKey(
        "accounts.Account",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    order_type = models.CharField(max_length=40, blank=True, default="")
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.DRAFT,
    )
    price_book = models.ForeignKey(
        "catalog.PriceBook",
        on_delete=models.PROTECT,
        related_name="orders",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_activated(self) -> bool:
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    # ------------------------------------------------------------------
    # Order number generation
    # ------------------------------------------------------------------

    @staticmethod
    def generate_order_number() -> str:
        now = timezone.now()
        return f"ORD-{now:%Y%m%d}-{secrets.token_hex(3).upper()}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.order_number:
            for _ in range(ORDER_NUMBER_MAX_RETRIES):
                candidate = self.generate_order_number()
                if not Order.objects.filter(order_number=candidate).exists():
                    self.order_number = candidate
                    break
            else:
                raise RuntimeError(
                    f"Failed to generate unique order_number after "
                    f"{ORDER_NUMBER_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"


class OrderItem(BaseModel):
    """One product line within an order.

    ``quantity`` is decimal to match the CRM's numeric quantity field; the
    confirmation payload truncates it to a whole number.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    price_book_entry = models.ForeignKey(
        "catalog.PriceBookEntry",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    unit_price = models.DecimalField(max_digits=16, decimal_places=2)
    quantity = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        default=Decimal("1"),
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        db_table = "order_items"
        ordering = ["unit_price", "created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "product"],
                name="order_items_unique_product",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="order_items_quantity_positive",
            ),
        ]

    @property
    def total_price(self) -> Decimal:
        return self.quantity * self.unit_price

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity <= 0:
            raise ValidationError({"quantity": "Quantity must be greater than zero."})
        self.validate_price_book()

    def validate_price_book(self) -> None:
        """Reject an entry that is not in the order's price book or product."""
        entry = self.price_book_entry
        if self.order.price_book_id is None or entry.price_book_id != self.order.price_book_id:
            raise ValidationError(
                {
                    "price_book_entry": (
                        "The price book entry's price book must match the "
                        "order's price book."
                    )
                }
            )
        if entry.product_id != self.product_id:
            raise ValidationError(
                {"price_book_entry": "The price book entry is for a different product."}
            )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self.unit_price is None:
            self.unit_price = self.price_book_entry.unit_price
        if self._state.adding:
            self.validate_price_book()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product} x{self.quantity} (${self.unit_price})"
