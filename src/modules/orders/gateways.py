"""Outbound gateway to the external order confirmation system.

The gateway only delivers the payload and reports the HTTP status; deciding
what counts as acceptance is the service's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import requests
import structlog
from django.conf import settings

from modules.orders.dtos import ConfirmationPayload
from modules.orders.exceptions import ConfirmationTransportError

logger = structlog.get_logger(__name__)


class IConfirmationGateway(ABC):
    @abstractmethod
    def send(self, payload: ConfirmationPayload) -> int:
        """POST the payload; return the response status code.

        Raises:
            ConfirmationTransportError: no response was received.
        """


class HttpConfirmationGateway(IConfirmationGateway):
    """JSON-over-HTTP gateway using ``requests``.

    URL and timeout default to ``ORDER_CONFIRMATION_URL`` and
    ``ORDER_CONFIRMATION_TIMEOUT``.
    """

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self._url = url
        self._timeout = timeout

    @property
    def url(self) -> str:
        return self._url or settings.ORDER_CONFIRMATION_URL

    @property
    def timeout(self) -> float:
        return self._timeout if self._timeout is not None else settings.ORDER_CONFIRMATION_TIMEOUT

    def send(self, payload: ConfirmationPayload) -> int:
        log = logger.bind(
            order_number=payload.order_number,
            line_count=len(payload.order_products),
            url=self.url,
        )
        log.info("order.confirmation.sending")
        try:
            response = requests.post(
                self.url,
                data=payload.to_json(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.warning("order.confirmation.transport_failed", error=str(exc))
            raise ConfirmationTransportError(str(exc)) from exc

        log.info("order.confirmation.responded", status_code=response.status_code)
        return response.status_code
