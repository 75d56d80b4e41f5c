"""Catalog domain exceptions.

Raised by the catalog repository consumers when a referenced catalog record
is missing.  The API layer translates them into HTTP responses; the order
workflow collapses them into its ``not_found`` failure reason.
"""

from __future__ import annotations


class StandardPriceBookNotFound(Exception):
    """No price book is flagged as the standard catalog."""


class CatalogEntryNotFound(Exception):
    """A selected entry is missing, inactive or outside the standard catalog."""
