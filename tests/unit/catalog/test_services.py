"""Unit tests for CatalogService and the catalog repository.

Covers:
- Only active standard-book entries of active products are listed.
- Entries come back cheapest first.
- The query cap.
- Read permission enforcement.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from uuid import uuid4

import pytest

from modules.catalog.dtos import CatalogEntryDTO
from modules.catalog.models import PriceBookEntry, Product
from modules.catalog.repositories.django_repository import CatalogDjangoRepository
from modules.catalog.services import CatalogService
from modules.core.authorization import AccessDenied

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return CatalogService(repository=CatalogDjangoRepository())


@pytest.fixture()
def catalog(make_entry, custom_book):
    return {
        "gold": make_entry("SLA: Gold", "SL9060", "60000.00"),
        "portable": make_entry("Installation: Portable", "IN7020", "50000.00"),
        "bronze": make_entry("SLA: Bronze", "SL9020", "20000.00"),
        "inactive_entry": make_entry("Retired", "RT0001", "10.00", is_active=False),
        "inactive_product": make_entry(
            "Discontinued", "DC0001", "15.00", product_active=False
        ),
        "custom": make_entry("Partner Only", "PT0001", "5.00", book=custom_book),
    }


class TestListAvailableEntries:
    def test_lists_only_active_standard_entries(self, service, catalog, full_access):
        entries = service.list_available_entries(full_access)
        assert {e.id for e in entries} == {
            catalog["gold"].id,
            catalog["portable"].id,
            catalog["bronze"].id,
        }

    def test_sorted_by_unit_price_ascending(self, service, catalog, full_access):
        prices = [e.unit_price for e in service.list_available_entries(full_access)]
        assert prices == sorted(prices)
        assert prices[0] == Decimal("20000.00")

    def test_respects_limit(self, catalog, full_access):
        service = CatalogService(repository=CatalogDjangoRepository(), limit=2)
        entries = service.list_available_entries(full_access)
        assert [e.id for e in entries] == [catalog["bronze"].id, catalog["portable"].id]

    def test_limit_defaults_to_setting(self, settings):
        settings.CATALOG_QUERY_LIMIT = 7
        assert CatalogService(repository=CatalogDjangoRepository()).limit == 7

    def test_empty_catalog(self, service, standard_book, full_access):
        assert service.list_available_entries(full_access) == []

    def test_request_logged(self, service, catalog, full_access, caplog):
        with caplog.at_level(logging.INFO, logger="modules.catalog.services"):
            service.list_available_entries(full_access)

        assert any(
            "catalog.entries_requested" in record.getMessage()
            for record in caplog.records
        )

    @pytest.mark.parametrize("denied", [PriceBookEntry, Product])
    def test_read_denied(self, service, catalog, make_auth, denied):
        with pytest.raises(AccessDenied):
            service.list_available_entries(make_auth(deny_read=[denied]))


class TestCatalogRepository:
    def test_get_standard_price_book(self, standard_book, custom_book):
        assert CatalogDjangoRepository().get_standard_price_book() == standard_book

    def test_no_standard_price_book(self, custom_book):
        assert CatalogDjangoRepository().get_standard_price_book() is None

    def test_get_available_entries_skips_unavailable(self, catalog):
        wanted = [catalog["gold"].id, catalog["custom"].id, catalog["inactive_entry"].id, uuid4()]
        found = CatalogDjangoRepository().get_available_entries(wanted)
        assert set(found) == {catalog["gold"].id}

    def test_get_available_entries_empty(self):
        assert CatalogDjangoRepository().get_available_entries([]) == {}


def test_catalog_entry_dto_from_entity(make_entry):
    entry = make_entry("SLA: Silver", "SL9040", "40000.00")
    dto = CatalogEntryDTO.from_entity(entry)
    assert dto.id == entry.id
    assert dto.product_id == entry.product_id
    assert dto.product_name == "SLA: Silver"
    assert dto.product_code == "SL9040"
    assert dto.unit_price == Decimal("40000.00")
