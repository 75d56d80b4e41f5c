from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.accounts.models import Account
from modules.catalog.models import PriceBook, PriceBookEntry, Product
from modules.catalog.repositories.django_repository import CatalogDjangoRepository
from modules.orders.gateways import HttpConfirmationGateway
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService


class StubAuthorizationContext:
    """Authorization context with per-action deny lists (model classes)."""

    def __init__(self, deny_read=(), deny_create=(), deny_update=()):
        self.deny_read = set(deny_read)
        self.deny_create = set(deny_create)
        self.deny_update = set(deny_update)

    def can_read(self, model) -> bool:
        return model not in self.deny_read

    def can_create(self, model) -> bool:
        return model not in self.deny_create

    def can_update(self, model) -> bool:
        return model not in self.deny_update


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_auth():
    return StubAuthorizationContext


@pytest.fixture()
def full_access():
    return StubAuthorizationContext()


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@pytest.fixture()
def account():
    return Account.objects.create(name="Acme Corporation", account_number="CD451796")


@pytest.fixture()
def standard_book():
    return PriceBook.objects.create(name="Standard Price Book", is_standard=True)


@pytest.fixture()
def custom_book():
    return PriceBook.objects.create(name="Partner Price Book")


@pytest.fixture()
def make_entry(standard_book):
    """Create a product and its entry (standard book unless ``book`` given)."""

    def _make(
        name,
        code,
        price,
        book=None,
        is_active=True,
        product_active=True,
    ) -> PriceBookEntry:
        product = Product.objects.create(
            name=name, product_code=code, is_active=product_active
        )
        return PriceBookEntry.objects.create(
            product=product,
            price_book=book or standard_book,
            unit_price=Decimal(price),
            is_active=is_active,
        )

    return _make


@pytest.fixture()
def order(account):
    return Order.objects.create(account=account, order_type="New")


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


@pytest.fixture()
def confirmation_gateway():
    return HttpConfirmationGateway(url="https://confirmation.test/orders", timeout=10)


@pytest.fixture()
def order_service(confirmation_gateway):
    return OrderService(
        order_repository=OrderDjangoRepository(),
        catalog_repository=CatalogDjangoRepository(),
        confirmation_gateway=confirmation_gateway,
    )
