"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``).

- ``AddToOrderDTO``: the catalog entries a user selected.
- ``OrderLineDTO``: output for a single order line.
- ``ConfirmationLineDTO`` / ``ConfirmationPayload``: the JSON body sent to
  the external confirmation endpoint (camelCase on the wire).
- ``AddToOrderResult`` / ``ConfirmOrderResult``: structured workflow
  outcomes; ``success`` keeps the boolean contract of the operations.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.orders.constants import FailureReason, SkippedStep, WorkflowOutcome

if TYPE_CHECKING:
    from modules.catalog.dtos import CatalogEntryDTO
    from modules.orders.models import Order, OrderItem


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class AddToOrderDTO(BaseModel):
    """Immutable selection of catalog entries to merge into an order.

    Entry ids may repeat; each occurrence adds one unit.
    """

    model_config = ConfigDict(frozen=True)

    entry_ids: Tuple[UUID, ...]

    @field_validator("entry_ids")
    @classmethod
    def entry_ids_must_not_be_empty(cls, v: Tuple[UUID, ...]) -> Tuple[UUID, ...]:
        if not v:
            raise ValueError("Select at least one catalog entry.")
        return v

    @classmethod
    def from_entries(cls, entries: Iterable[CatalogEntryDTO]) -> AddToOrderDTO:
        return cls(entry_ids=tuple(entry.id for entry in entries))


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderLineDTO(BaseModel):
    """Immutable snapshot of an order line for display."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    product_id: UUID
    product_name: str
    product_code: str
    unit_price: Decimal
    quantity: Decimal
    total_price: Decimal

    @classmethod
    def from_entity(cls, item: OrderItem) -> OrderLineDTO:
        return cls(
            id=item.id,
            product_id=item.product_id,
            product_name=item.product.name,
            product_code=item.product.product_code,
            unit_price=item.unit_price,
            quantity=item.quantity,
            total_price=item.total_price,
        )


# ---------------------------------------------------------------------------
# Confirmation payload
# ---------------------------------------------------------------------------


class ConfirmationLineDTO(BaseModel):
    """One ``orderProducts`` element of the confirmation payload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    code: str
    unit_price: float = Field(alias="unitPrice")
    quantity: int

    @field_validator("unit_price", mode="before")
    @classmethod
    def price_as_number(cls, v):
        return float(v)

    @field_validator("quantity", mode="before")
    @classmethod
    def truncate_quantity(cls, v):
        # The external system takes whole units: 2.7 is sent as 2.
        return int(Decimal(str(v)))


class ConfirmationPayload(BaseModel):
    """Body POSTed to the external system when confirming an order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    account_number: str = Field(alias="accountNumber")
    order_number: str = Field(alias="orderNumber")
    order_type: str = Field(alias="type")
    status: str
    order_products: List[ConfirmationLineDTO] = Field(alias="orderProducts")

    @classmethod
    def from_entity(
        cls, order: Order, items: Iterable[OrderItem]
    ) -> ConfirmationPayload:
        """Build the payload; expects ``account`` and ``items.product`` loaded."""
        return cls(
            account_number=order.account.account_number,
            order_number=order.order_number,
            order_type=order.order_type,
            status=str(order.status),
            order_products=[
                ConfirmationLineDTO(
                    name=item.product.name,
                    code=item.product.product_code,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                )
                for item in items
            ],
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


# ---------------------------------------------------------------------------
# Workflow results
# ---------------------------------------------------------------------------


class WorkflowResult(BaseModel):
    """Outcome of a workflow operation.

    ``partial`` means the operation reported success but skipped at least one
    permission-gated write (listed in ``skipped_steps``).
    """

    model_config = ConfigDict(frozen=True)

    outcome: WorkflowOutcome
    reason: Optional[FailureReason] = None
    detail: str = ""
    skipped_steps: Tuple[SkippedStep, ...] = ()

    @property
    def success(self) -> bool:
        return self.outcome != WorkflowOutcome.FAILED

    @classmethod
    def completed(cls, skipped_steps: Iterable[SkippedStep] = (), **extra):
        skipped = tuple(skipped_steps)
        outcome = WorkflowOutcome.PARTIAL if skipped else WorkflowOutcome.SUCCESS
        return cls(outcome=outcome, skipped_steps=skipped, **extra)

    @classmethod
    def failed(cls, reason: FailureReason, detail: str = "", **extra):
        return cls(outcome=WorkflowOutcome.FAILED, reason=reason, detail=detail, **extra)


class AddToOrderResult(WorkflowResult):
    created_count: int = 0
    updated_count: int = 0


class ConfirmOrderResult(WorkflowResult):
    # Status code returned by the external system, when it answered.
    http_status: Optional[int] = None
