"""Catalog DTOs.

``CatalogEntryDTO`` is the immutable snapshot of a sellable item handed to
callers of the catalog reader (and back to the order reconciler when the
user selects rows).
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from modules.catalog.models import PriceBookEntry


class CatalogEntryDTO(BaseModel):
    """Immutable snapshot of one active standard price book entry."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    product_id: UUID
    product_name: str
    product_code: str
    unit_price: Decimal

    @classmethod
    def from_entity(cls, entry: PriceBookEntry) -> CatalogEntryDTO:
        """Build the DTO; expects ``product`` to be select-related."""
        return cls(
            id=entry.id,
            product_id=entry.product_id,
            product_name=entry.product.name,
            product_code=entry.product.product_code,
            unit_price=entry.unit_price,
        )
