"""Order service layer (Use Cases).

Orchestrates the two order workflows:

- **add to order**: merge a catalog selection into the order's lines,
  pointing the order at the standard price book first if needed.
- **confirm order**: send the order to the external system and, on HTTP
  200, activate it.

Each workflow is one unit of work: any error rolls back every write made so
far and is reported as a failed ``WorkflowResult``; nothing propagates to the
caller.  Writes the caller has no permission for are skipped and reported
as ``partial``, which still counts as success.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from modules.accounts.models import Account
from modules.catalog.exceptions import CatalogEntryNotFound, StandardPriceBookNotFound
from modules.catalog.models import PriceBookEntry, Product
from modules.core.authorization import AccessDenied, require_read
from modules.orders.constants import (
    CONFIRMATION_SUCCESS_STATUS,
    FailureReason,
    OrderStatus,
    SkippedStep,
)
from modules.orders.dtos import AddToOrderResult, ConfirmationPayload, ConfirmOrderResult
from modules.orders.events import OrderItemsAdded
from modules.orders.exceptions import (
    ConfirmationRejected,
    ConfirmationTransportError,
    OrderAlreadyActivated,
    OrderNotFound,
)
from modules.orders.models import Order, OrderItem
from modules.orders.reconciliation import reconcile_selection

if TYPE_CHECKING:
    from modules.catalog.repositories.interfaces import ICatalogRepository
    from modules.core.authorization import IAuthorizationContext
    from modules.orders.dtos import AddToOrderDTO
    from modules.orders.gateways import IConfirmationGateway
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

_EXPECTED_FAILURES = {
    OrderNotFound: FailureReason.NOT_FOUND,
    StandardPriceBookNotFound: FailureReason.NOT_FOUND,
    CatalogEntryNotFound: FailureReason.NOT_FOUND,
    AccessDenied: FailureReason.ACCESS_DENIED,
    ValidationError: FailureReason.VALIDATION_FAILED,
    IntegrityError: FailureReason.VALIDATION_FAILED,
    OrderAlreadyActivated: FailureReason.ORDER_ACTIVATED,
    ConfirmationRejected: FailureReason.EXTERNAL_CALL_FAILED,
    ConfirmationTransportError: FailureReason.EXTERNAL_CALL_FAILED,
}


def classify_failure(exc: Exception) -> FailureReason:
    for exc_type, reason in _EXPECTED_FAILURES.items():
        if isinstance(exc, exc_type):
            return reason
    return FailureReason.UNEXPECTED


class OrderService:
    """Application service for Order use-cases.

    Receives repositories and the confirmation gateway via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        catalog_repository: ICatalogRepository,
        confirmation_gateway: IConfirmationGateway,
        limit: Optional[int] = None,
    ) -> None:
        self._order_repo = order_repository
        self._catalog_repo = catalog_repository
        self._gateway = confirmation_gateway
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit if self._limit is not None else settings.CATALOG_QUERY_LIMIT

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: UUID, auth: IAuthorizationContext) -> Order:
        """Return the order (status read used by the UI panels).

        Raises:
            AccessDenied: the caller cannot read orders.
            OrderNotFound: order does not exist.
        """
        require_read(auth, Order)
        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_order_lines(
        self, order_id: UUID, auth: IAuthorizationContext
    ) -> List[OrderItem]:
        """Return the order's lines with product data, cheapest first.

        Raises:
            AccessDenied: the caller cannot read orders, lines or products.
            OrderNotFound: order does not exist.
        """
        require_read(auth, Order, OrderItem, Product)
        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return self._order_repo.list_items(order.id, limit=self.limit)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_to_order(
        self, dto: AddToOrderDTO, order_id: UUID, auth: IAuthorizationContext
    ) -> bool:
        """Merge the selection into the order; ``True`` on success."""
        return self.add_to_order_with_result(dto, order_id, auth).success

    def add_to_order_with_result(
        self, dto: AddToOrderDTO, order_id: UUID, auth: IAuthorizationContext
    ) -> AddToOrderResult:
        log = logger.bind(order_id=str(order_id), selected_count=len(dto.entry_ids))
        log.info("order.add_items.started")
        try:
            with transaction.atomic():
                result = self._merge_selection(dto, order_id, auth, log)
        except Exception as exc:
            return self._failed(AddToOrderResult, exc, log, "order.add_items.failed")

        log.info(
            "order.add_items.completed",
            outcome=result.outcome.value,
            created_count=result.created_count,
            updated_count=result.updated_count,
        )
        return result

    def confirm_order(self, order_id: UUID, auth: IAuthorizationContext) -> bool:
        """Confirm the order with the external system; ``True`` on success."""
        return self.confirm_order_with_result(order_id, auth).success

    def confirm_order_with_result(
        self, order_id: UUID, auth: IAuthorizationContext
    ) -> ConfirmOrderResult:
        log = logger.bind(order_id=str(order_id))
        log.info("order.confirm.started")
        try:
            with transaction.atomic():
                result = self._confirm(order_id, auth, log)
        except Exception as exc:
            return self._failed(
                ConfirmOrderResult,
                exc,
                log,
                "order.confirm.failed",
                http_status=getattr(exc, "status_code", None),
            )

        log.info("order.confirm.completed", outcome=result.outcome.value)
        return result

    # ------------------------------------------------------------------
    # Workflow steps
    # ------------------------------------------------------------------

    def _merge_selection(
        self, dto: AddToOrderDTO, order_id: UUID, auth: IAuthorizationContext, log
    ) -> AddToOrderResult:
        require_read(auth, Order, OrderItem, PriceBookEntry)

        standard = self._catalog_repo.get_standard_price_book()
        if not standard:
            raise StandardPriceBookNotFound("No standard price book is configured.")

        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        if order.is_activated:
            raise OrderAlreadyActivated(f"Order {order.order_number} is activated.")

        skipped: List[SkippedStep] = []

        # 1. Point the order at the standard price book
        if order.price_book_id != standard.id:
            if auth.can_update(Order):
                previous = order.price_book_id
                order.price_book = standard
                self._order_repo.save(order)
                log.info(
                    "order.price_book_reassigned",
                    previous_price_book_id=str(previous) if previous else None,
                    price_book_id=str(standard.id),
                )
            else:
                self._skip(skipped, SkippedStep.REASSIGN_PRICE_BOOK, log)

        # 2. Resolve the selection
        entries = self._catalog_repo.get_available_entries(dto.entry_ids)
        missing = [str(entry_id) for entry_id in dto.entry_ids if entry_id not in entries]
        if missing:
            raise CatalogEntryNotFound(
                f"Catalog entries not available: {', '.join(sorted(set(missing)))}."
            )

        # 3. Merge into existing lines
        plan = reconcile_selection(
            order,
            self._order_repo.list_items(order.id),
            [entries[entry_id] for entry_id in dto.entry_ids],
        )

        created_count = updated_count = 0
        if plan.new_items:
            if auth.can_create(OrderItem):
                created_count = len(self._order_repo.bulk_create_items(plan.new_items))
            else:
                self._skip(skipped, SkippedStep.CREATE_ORDER_ITEMS, log)
        if plan.updated_items:
            if auth.can_update(OrderItem):
                self._order_repo.bulk_update_items(plan.updated_items)
                updated_count = len(plan.updated_items)
            else:
                self._skip(skipped, SkippedStep.UPDATE_ORDER_ITEMS, log)

        if created_count or updated_count:
            order.add_domain_event(
                OrderItemsAdded(
                    aggregate_id=order.id,
                    created_count=created_count,
                    updated_count=updated_count,
                )
            )
            self._order_repo.publish_events(order)

        return AddToOrderResult.completed(
            skipped, created_count=created_count, updated_count=updated_count
        )

    def _confirm(
        self, order_id: UUID, auth: IAuthorizationContext, log
    ) -> ConfirmOrderResult:
        require_read(auth, Order, OrderItem, Account)

        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        if not order.can_transition_to(OrderStatus.ACTIVATED):
            raise OrderAlreadyActivated(
                f"Order {order.order_number} cannot be activated from {order.status}."
            )

        # Every line goes out, regardless of the display cap.
        items = self._order_repo.list_items(order.id)
        payload = ConfirmationPayload.from_entity(order, items)

        status_code = self._gateway.send(payload)
        if status_code != CONFIRMATION_SUCCESS_STATUS:
            raise ConfirmationRejected(status_code)

        if not auth.can_update(Order):
            skipped: List[SkippedStep] = []
            self._skip(skipped, SkippedStep.ACTIVATE_ORDER, log)
            return ConfirmOrderResult.completed(skipped, http_status=status_code)

        if not self._order_repo.activate(order):
            # Another request activated the order after our read; the external
            # system may have received the order twice.
            log.warning("order.confirm.concurrent_activation")

        return ConfirmOrderResult.completed(http_status=status_code)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _skip(skipped: List[SkippedStep], step: SkippedStep, log) -> None:
        log.warning("order.permission_skipped", step=step.value)
        skipped.append(step)

    @staticmethod
    def _failed(result_cls, exc: Exception, log, event: str, **extra):
        reason = classify_failure(exc)
        if reason is FailureReason.UNEXPECTED:
            log.exception(event, reason=reason.value)
            return result_cls.failed(reason, detail="Unexpected error.", **extra)
        log.warning(event, reason=reason.value, error=str(exc))
        return result_cls.failed(reason, detail=str(exc), **extra)
