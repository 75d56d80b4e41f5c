"""Order domain constants.

Defines the order lifecycle used by the confirmation workflow and the codes
reported in workflow results.
"""

from enum import Enum

from django.db import models


class OrderStatus(models.TextChoices):
    DRAFT = "Draft", "Draft"
    ACTIVATED = "Activated", "Activated"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.DRAFT: {OrderStatus.ACTIVATED},
    OrderStatus.ACTIVATED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.ACTIVATED}

ORDER_NUMBER_MAX_RETRIES = 5

# The external system accepts an order only on this exact status code.
CONFIRMATION_SUCCESS_STATUS = 200


class WorkflowOutcome(str, Enum):
    SUCCESS = "success"
    # Completed, but a permission-gated write was skipped.
    PARTIAL = "partial"
    FAILED = "failed"


class FailureReason(str, Enum):
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    VALIDATION_FAILED = "validation_failed"
    EXTERNAL_CALL_FAILED = "external_call_failed"
    ORDER_ACTIVATED = "order_activated"
    UNEXPECTED = "unexpected"


class SkippedStep(str, Enum):
    REASSIGN_PRICE_BOOK = "reassign_price_book"
    CREATE_ORDER_ITEMS = "create_order_items"
    UPDATE_ORDER_ITEMS = "update_order_items"
    ACTIVATE_ORDER = "activate_order"
