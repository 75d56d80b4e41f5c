"""Integration tests for Order API endpoints.

Covers:
- Order retrieve via GET /api/v1/orders/{id}/.
- Order lines via GET /api/v1/orders/{id}/lines/.
- Add to order via POST /api/v1/orders/{id}/add-items/.
- Confirmation via POST /api/v1/orders/{id}/confirm/.
- Authentication enforcement (401 without token).
"""

from __future__ import annotations

import json
from decimal import Decimal
from unittest.mock import Mock, patch
from uuid import uuid4

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.integration

POST = "modules.orders.gateways.requests.post"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def gold(make_entry):
    return make_entry("SLA: Gold", "SL9060", "60000.00")


@pytest.fixture()
def bronze(make_entry):
    return make_entry("SLA: Bronze", "SL9020", "20000.00")


def _url(order_id, suffix=""):
    return f"/api/v1/orders/{order_id}/{suffix}"


def _add(client, order_id, *entries):
    return client.post(
        _url(order_id, "add-items/"),
        {"entries": [{"id": str(e.id)} for e in entries]},
        format="json",
    )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


class TestRetrieve:
    def test_retrieve(self, auth_client, order):
        response = auth_client.get(_url(order.id))

        assert response.status_code == 200
        data = response.json()
        assert data["order_number"] == order.order_number
        assert data["account_number"] == "CD451796"
        assert data["status"] == "Draft"
        assert data["is_activated"] is False
        assert data["price_book_id"] is None

    def test_not_found(self, auth_client):
        assert auth_client.get(_url(uuid4())).status_code == 404

    def test_forbidden(self, make_client, order):
        assert make_client("view_account").get(_url(order.id)).status_code == 403

    def test_requires_authentication(self, api_client, order):
        assert api_client.get(_url(order.id)).status_code == 401


class TestLines:
    def test_lines_cheapest_first(self, auth_client, order, gold, bronze):
        _add(auth_client, order.id, gold, bronze, gold)

        response = auth_client.get(_url(order.id, "lines/"))

        assert response.status_code == 200
        data = response.json()
        assert [(row["product_code"], row["quantity"]) for row in data] == [
            ("SL9020", "1.00"),
            ("SL9060", "2.00"),
        ]
        assert Decimal(data[1]["total_price"]) == Decimal("120000.00")

    def test_lines_of_unknown_order(self, auth_client):
        assert auth_client.get(_url(uuid4(), "lines/")).status_code == 404

    def test_lines_forbidden_without_product_read(self, make_client, order):
        client = make_client("view_order", "view_orderitem")
        assert client.get(_url(order.id, "lines/")).status_code == 403


# ---------------------------------------------------------------------------
# Add to order
# ---------------------------------------------------------------------------


class TestAddItems:
    def test_add_items(self, auth_client, order, standard_book, gold, bronze):
        response = _add(auth_client, order.id, gold, bronze)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "outcome": "success",
            "reason": None,
            "detail": "",
            "skipped_steps": [],
            "created_count": 2,
            "updated_count": 0,
        }
        order.refresh_from_db()
        assert order.price_book_id == standard_book.id
        assert OrderItem.objects.filter(order=order).count() == 2

    def test_empty_selection_is_bad_request(self, auth_client, order):
        response = auth_client.post(_url(order.id, "add-items/"), {"entries": []}, format="json")
        assert response.status_code == 400

    def test_malformed_entry_id_is_bad_request(self, auth_client, order):
        response = auth_client.post(
            _url(order.id, "add-items/"), {"entries": [{"id": "nope"}]}, format="json"
        )
        assert response.status_code == 400

    def test_unknown_entry_reports_failure(self, auth_client, order, gold):
        response = auth_client.post(
            _url(order.id, "add-items/"),
            {"entries": [{"id": str(gold.id)}, {"id": str(uuid4())}]},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["reason"] == "not_found"
        assert OrderItem.objects.count() == 0

    def test_without_create_permission_is_partial(self, make_client, order, gold):
        client = make_client(
            "view_order", "change_order", "view_orderitem", "view_pricebookentry"
        )

        data = _add(client, order.id, gold).json()

        assert data["success"] is True
        assert data["outcome"] == "partial"
        assert data["skipped_steps"] == ["create_order_items"]
        assert OrderItem.objects.count() == 0

    def test_activated_order(self, auth_client, order, gold):
        Order.objects.filter(id=order.id).update(status=OrderStatus.ACTIVATED)
        data = _add(auth_client, order.id, gold).json()
        assert data["success"] is False
        assert data["reason"] == "order_activated"


# ---------------------------------------------------------------------------
# Confirm
# ---------------------------------------------------------------------------


class TestConfirm:
    def test_confirm(self, auth_client, order, gold):
        _add(auth_client, order.id, gold)

        with patch(POST, return_value=Mock(status_code=200)) as post:
            response = auth_client.post(_url(order.id, "confirm/"))

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "outcome": "success",
            "reason": None,
            "detail": "",
            "skipped_steps": [],
            "http_status": 200,
        }
        body = json.loads(post.call_args.kwargs["data"])
        assert body["orderProducts"] == [
            {"name": "SLA: Gold", "code": "SL9060", "unitPrice": 60000.0, "quantity": 1}
        ]
        order.refresh_from_db()
        assert order.status == OrderStatus.ACTIVATED

    def test_rejected_by_external_system(self, auth_client, order):
        with patch(POST, return_value=Mock(status_code=500)):
            data = auth_client.post(_url(order.id, "confirm/")).json()

        assert data["success"] is False
        assert data["reason"] == "external_call_failed"
        assert data["http_status"] == 500

    def test_lines_frozen_after_activation(self, auth_client, order, gold):
        _add(auth_client, order.id, gold)
        with patch(POST, return_value=Mock(status_code=200)):
            auth_client.post(_url(order.id, "confirm/"))

        assert _add(auth_client, order.id, gold).json()["reason"] == "order_activated"
        with patch(POST) as post:
            assert auth_client.post(_url(order.id, "confirm/")).json()["success"] is False
        post.assert_not_called()

    def test_requires_authentication(self, api_client, order):
        assert api_client.post(_url(order.id, "confirm/")).status_code == 401
