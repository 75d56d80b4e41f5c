"""Unit tests for Orders event handlers."""

from __future__ import annotations

import logging
from uuid import uuid4

import pytest

from modules.orders.events import OrderActivated, OrderItemsAdded
from modules.orders.handlers import (
    OrderActivatedHandler,
    OrderItemsAddedHandler,
    order_activated_handler,
    order_items_added_handler,
)
from shared.infrastructure.bus import event_bus

pytestmark = pytest.mark.unit


def test_items_added_handler_logs(caplog):
    event = OrderItemsAdded(aggregate_id=uuid4(), created_count=2, updated_count=1)

    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        OrderItemsAddedHandler().handle(event)

    assert any("lines changed" in record.getMessage() for record in caplog.records)


def test_activated_handler_logs(caplog):
    event = OrderActivated(aggregate_id=uuid4())

    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        OrderActivatedHandler().handle(event)

    assert any(
        f"Order {event.aggregate_id} activated" in record.getMessage()
        for record in caplog.records
    )


def test_handlers_wired_on_startup():
    assert order_items_added_handler in event_bus._handlers[OrderItemsAdded]
    assert order_activated_handler in event_bus._handlers[OrderActivated]
