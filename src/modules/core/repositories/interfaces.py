"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that the
domain-specific repository interfaces extend.  Service-layer code
depends on these abstractions, never on the Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the record managed by the
    repository (e.g. ``Order``, ``PriceBookEntry``).
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve a record by its primary key (``None`` when absent)."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) a record."""
