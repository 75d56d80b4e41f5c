"""Catalog records: products, price books and price book entries.

Rules implemented:
- Exactly one price book may be flagged ``is_standard`` (partial unique
  constraint).  Orders must reference it before lines can be added.
- A product has at most one entry per price book.
- Entry prices are never negative.

The catalog is read-only to the order workflow; it is maintained through the
``seed_data`` command or an upstream sync.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Product(BaseModel):
    """Sellable product."""

    name = models.CharField(max_length=255)
    product_code = models.CharField(max_length=64, blank=True, default="")
    description = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["product_code"], name="products_code_idx"),
        ]

    def __str__(self) -> str:
        if self.product_code:
            return f"{self.product_code} - {self.name}"
        return self.name


class PriceBook(BaseModel):
    """Named collection of product prices."""

    name = models.CharField(max_length=255)
    is_standard = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "price_books"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["is_standard"],
                condition=models.Q(is_standard=True),
                name="price_books_single_standard",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} (standard)" if self.is_standard else self.name


class PriceBookEntry(BaseModel):
    """One product's price within one price book (a catalog entry)."""

    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="price_book_entries",
    )
    price_book = models.ForeignKey(
        "catalog.PriceBook",
        on_delete=models.CASCADE,
        related_name="entries",
    )
    unit_price = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "price_book_entries"
        ordering = ["unit_price"]
        verbose_name_plural = "price book entries"
        indexes = [
            models.Index(
                fields=["price_book", "is_active", "unit_price"],
                name="pbe_book_active_price_idx",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "price_book"],
                name="pbe_unique_product_per_book",
            ),
            models.CheckConstraint(
                condition=models.Q(unit_price__gte=0),
                name="pbe_unit_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product} @ {self.unit_price} [{self.price_book}]"
