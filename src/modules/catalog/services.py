"""Catalog service layer.

Exposes the catalog reader: the list of items a user may add to an order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.conf import settings

from modules.catalog.models import PriceBookEntry, Product
from modules.core.authorization import require_read

if TYPE_CHECKING:
    from modules.catalog.repositories.interfaces import ICatalogRepository
    from modules.core.authorization import IAuthorizationContext

logger = structlog.get_logger(__name__)


class CatalogService:
    """Application service for catalog reads.

    Receives an ``ICatalogRepository`` via constructor injection (DIP).
    """

    def __init__(
        self, repository: ICatalogRepository, limit: Optional[int] = None
    ) -> None:
        self._repo = repository
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit if self._limit is not None else settings.CATALOG_QUERY_LIMIT

    def list_available_entries(self, auth: IAuthorizationContext) -> List[PriceBookEntry]:
        """Return active standard-catalog entries, cheapest first.

        Raises:
            AccessDenied: the caller cannot read entries or products.
        """
        require_read(auth, PriceBookEntry, Product)
        logger.info("catalog.entries_requested", limit=self.limit)
        return self._repo.list_available_entries(self.limit)
