"""Django ORM implementation of the catalog repository.

Missing records are reported as ``None`` / absent keys rather than raised:
the service layer decides which domain exception applies.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional
from uuid import UUID

import structlog
from django.db.models import QuerySet

from modules.catalog.models import PriceBook, PriceBookEntry
from modules.catalog.repositories.interfaces import ICatalogRepository

logger = structlog.get_logger(__name__)


class CatalogDjangoRepository(ICatalogRepository):
    """Concrete catalog repository backed by Django ORM."""

    def get_standard_price_book(self) -> Optional[PriceBook]:
        return PriceBook.objects.filter(is_standard=True).first()

    def list_available_entries(self, limit: int) -> List[PriceBookEntry]:
        """Active, standard-book entries ordered by ``unit_price`` ascending.

        ``limit`` is a defensive ceiling; callers receive at most that many
        rows and no continuation token.
        """
        entries = list(
            self._available().order_by("unit_price", "product__name", "id")[:limit]
        )
        logger.info("catalog.entries_listed", count=len(entries), limit=limit)
        return entries

    def get_available_entries(
        self, ids: Iterable[UUID]
    ) -> Dict[UUID, PriceBookEntry]:
        wanted = set(ids)
        if not wanted:
            return {}
        return {entry.id: entry for entry in self._available().filter(id__in=wanted)}

    @staticmethod
    def _available() -> QuerySet[PriceBookEntry]:
        return PriceBookEntry.objects.select_related("product", "price_book").filter(
            is_active=True,
            product__is_active=True,
            price_book__is_standard=True,
        )
