"""Unit tests for Order DTOs: selection input, confirmation payload, results."""

from __future__ import annotations

import json
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.catalog.dtos import CatalogEntryDTO
from modules.orders.constants import FailureReason, SkippedStep, WorkflowOutcome
from modules.orders.dtos import (
    AddToOrderDTO,
    AddToOrderResult,
    ConfirmationLineDTO,
    ConfirmationPayload,
    ConfirmOrderResult,
)
from modules.orders.models import OrderItem

pytestmark = pytest.mark.unit


class TestAddToOrderDTO:
    def test_rejects_empty_selection(self):
        with pytest.raises(ValidationError):
            AddToOrderDTO(entry_ids=())

    def test_keeps_duplicates(self):
        entry_id = uuid4()
        dto = AddToOrderDTO(entry_ids=(entry_id, entry_id))
        assert dto.entry_ids == (entry_id, entry_id)

    def test_from_entries(self):
        entries = [
            CatalogEntryDTO(
                id=uuid4(),
                product_id=uuid4(),
                product_name=f"Product {i}",
                product_code=f"P{i}",
                unit_price=Decimal("1.00"),
            )
            for i in range(2)
        ]
        dto = AddToOrderDTO.from_entries(entries)
        assert dto.entry_ids == tuple(e.id for e in entries)

    def test_is_frozen(self):
        dto = AddToOrderDTO(entry_ids=(uuid4(),))
        with pytest.raises(ValidationError):
            dto.entry_ids = ()


class TestConfirmationLineDTO:
    @pytest.mark.parametrize(
        ("quantity", "expected"),
        [
            (Decimal("2.7"), 2),
            (Decimal("1.00"), 1),
            (Decimal("0.5"), 0),
            (3, 3),
        ],
    )
    def test_quantity_truncated(self, quantity, expected):
        line = ConfirmationLineDTO(name="X", code="X1", unit_price=Decimal("1"), quantity=quantity)
        assert line.quantity == expected

    def test_unit_price_serialized_as_number(self):
        line = ConfirmationLineDTO(
            name="SLA: Gold", code="SL9060", unit_price=Decimal("10.50"), quantity=1
        )
        body = json.loads(line.model_dump_json(by_alias=True))
        assert body == {"name": "SLA: Gold", "code": "SL9060", "unitPrice": 10.5, "quantity": 1}


class TestConfirmationPayload:
    def test_from_entity_uses_external_field_names(self, order, standard_book, make_entry):
        order.price_book = standard_book
        order.save()
        gold = make_entry("SLA: Gold", "SL9060", "60000.00")
        portable = make_entry("Installation: Portable", "IN7020", "50000.00")
        items = [
            OrderItem(
                order=order,
                product=gold.product,
                price_book_entry=gold,
                unit_price=gold.unit_price,
                quantity=Decimal("2.7"),
            ),
            OrderItem(
                order=order,
                product=portable.product,
                price_book_entry=portable,
                unit_price=portable.unit_price,
                quantity=Decimal("1"),
            ),
        ]

        body = json.loads(ConfirmationPayload.from_entity(order, items).to_json())

        assert body == {
            "accountNumber": "CD451796",
            "orderNumber": order.order_number,
            "type": "New",
            "status": "Draft",
            "orderProducts": [
                {"name": "SLA: Gold", "code": "SL9060", "unitPrice": 60000.0, "quantity": 2},
                {
                    "name": "Installation: Portable",
                    "code": "IN7020",
                    "unitPrice": 50000.0,
                    "quantity": 1,
                },
            ],
        }

    def test_empty_order(self, order):
        payload = ConfirmationPayload.from_entity(order, [])
        assert json.loads(payload.to_json())["orderProducts"] == []


class TestWorkflowResults:
    def test_completed_without_skips_is_success(self):
        result = AddToOrderResult.completed(created_count=2)
        assert result.outcome == WorkflowOutcome.SUCCESS
        assert result.success is True
        assert result.created_count == 2

    def test_completed_with_skips_is_partial_but_successful(self):
        result = AddToOrderResult.completed([SkippedStep.CREATE_ORDER_ITEMS])
        assert result.outcome == WorkflowOutcome.PARTIAL
        assert result.success is True
        assert result.skipped_steps == (SkippedStep.CREATE_ORDER_ITEMS,)

    def test_failed(self):
        result = ConfirmOrderResult.failed(
            FailureReason.EXTERNAL_CALL_FAILED, detail="HTTP 500", http_status=500
        )
        assert result.success is False
        assert result.reason == FailureReason.EXTERNAL_CALL_FAILED
        assert result.http_status == 500

    def test_json_dump(self):
        result = ConfirmOrderResult.completed([SkippedStep.ACTIVATE_ORDER], http_status=200)
        assert result.model_dump(mode="json") == {
            "outcome": "partial",
            "reason": None,
            "detail": "",
            "skipped_steps": ["activate_order"],
            "http_status": 200,
        }
