"""Unit tests for the HTTP confirmation gateway."""

from __future__ import annotations

import json
from unittest.mock import Mock, patch

import pytest
import requests

from modules.orders.dtos import ConfirmationLineDTO, ConfirmationPayload
from modules.orders.exceptions import ConfirmationTransportError
from modules.orders.gateways import HttpConfirmationGateway

pytestmark = pytest.mark.unit


@pytest.fixture()
def payload():
    return ConfirmationPayload(
        account_number="CD451796",
        order_number="ORD-20240101-ABCDEF",
        order_type="New",
        status="Draft",
        order_products=[
            ConfirmationLineDTO(name="SLA: Gold", code="SL9060", unit_price=60000, quantity=1)
        ],
    )


def test_posts_json_and_returns_status(payload):
    gateway = HttpConfirmationGateway(url="https://erp.test/confirm", timeout=3)

    with patch("modules.orders.gateways.requests.post", return_value=Mock(status_code=418)) as post:
        assert gateway.send(payload) == 418

    post.assert_called_once_with(
        "https://erp.test/confirm",
        data=payload.to_json(),
        headers={"Content-Type": "application/json"},
        timeout=3,
    )
    assert json.loads(post.call_args.kwargs["data"])["orderNumber"] == "ORD-20240101-ABCDEF"


def test_defaults_come_from_settings(settings):
    settings.ORDER_CONFIRMATION_URL = "https://erp.test/from-settings"
    settings.ORDER_CONFIRMATION_TIMEOUT = 25

    gateway = HttpConfirmationGateway()

    assert gateway.url == "https://erp.test/from-settings"
    assert gateway.timeout == 25


def test_transport_error_wrapped(payload):
    gateway = HttpConfirmationGateway(url="https://erp.test/confirm", timeout=3)

    with patch(
        "modules.orders.gateways.requests.post",
        side_effect=requests.ConnectionError("connection refused"),
    ):
        with pytest.raises(ConfirmationTransportError, match="connection refused"):
            gateway.send(payload)
