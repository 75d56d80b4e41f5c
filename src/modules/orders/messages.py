"""Messages exchanged between the order workspace panels.

Both panels of one order workspace share a bus channel.  The product picker
publishes ``FetchOrderLines`` after adding lines; the order lines panel
publishes ``DeactivateOrder`` after a successful confirmation.  Each message
carries the order it concerns, so panels of other orders ignore it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict
from uuid import UUID


@dataclass(frozen=True)
class ChannelMessage:
    order_id: UUID

    def as_payload(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class FetchOrderLines(ChannelMessage):
    """The order's lines changed; reload them."""

    def as_payload(self) -> Dict[str, Any]:
        return {"fetch": True}


@dataclass(frozen=True)
class DeactivateOrder(ChannelMessage):
    """The order was activated; stop accepting new lines."""

    def as_payload(self) -> Dict[str, Any]:
        return {"deactivate": True}
