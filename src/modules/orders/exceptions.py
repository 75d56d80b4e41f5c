"""Order domain exceptions.

Raised inside the order workflow when a step cannot proceed.  The workflow
boundary in ``OrderService`` maps each of them to a ``FailureReason``; the
read endpoints translate them into HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist."""


class OrderAlreadyActivated(Exception):
    """The order is Activated; lines and status are frozen."""


class ConfirmationRejected(Exception):
    """The external system answered with a status other than 200."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Confirmation endpoint answered HTTP {status_code}.")
        self.status_code = status_code


class ConfirmationTransportError(Exception):
    """The confirmation request could not be delivered."""
