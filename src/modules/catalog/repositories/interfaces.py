"""Catalog repository interface.

The catalog is read-only to this system, so the contract only exposes the
look-ups the catalog reader and the order reconciler need.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional
from uuid import UUID

if TYPE_CHECKING:
    from modules.catalog.models import PriceBook, PriceBookEntry


class ICatalogRepository(ABC):
    """Repository contract for price books and their entries."""

    @abstractmethod
    def get_standard_price_book(self) -> Optional[PriceBook]:
        """Return the standard price book, or ``None`` if none is flagged."""

    @abstractmethod
    def list_available_entries(self, limit: int) -> List[PriceBookEntry]:
        """Active entries of the standard price book, cheapest first."""

    @abstractmethod
    def get_available_entries(
        self, ids: Iterable[UUID]
    ) -> Dict[UUID, PriceBookEntry]:
        """Map the given ids to active standard entries; unknown ids are absent."""
