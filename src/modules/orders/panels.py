"""Headless view-models for the order workspace.

Two panels sit side by side on an order record:

- ``ProductPickerPanel`` lists the catalog, lets the user select rows and
  adds them to the order.
- ``OrderLinesPanel`` lists the order's lines and confirms the order.

Both run the same lifecycle: ``loading`` on mount, then ``ready`` or
``error``; an Activated order moves them to ``disabled`` for good.  They
talk to each other only through the session's bus channel (see
``modules.orders.messages``) and report outcomes as ``Notification``
objects for the front end to render as toasts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, List, Optional, Sequence, TypeVar
from uuid import UUID

import structlog
from django.conf import settings

from modules.catalog.dtos import CatalogEntryDTO
from modules.core.authorization import AccessDenied
from modules.orders.dtos import AddToOrderDTO, OrderLineDTO
from modules.orders.exceptions import OrderNotFound
from modules.orders.messages import ChannelMessage, DeactivateOrder, FetchOrderLines

if TYPE_CHECKING:
    from modules.catalog.services import CatalogService
    from modules.core.authorization import IAuthorizationContext
    from modules.orders.services import OrderService
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ACTIVATED_MESSAGE = (
    "This Order is Activated and you cannot add new Order Items or confirm "
    "the Order for a second time."
)
NO_PRODUCTS_MESSAGE = "No Products found."
EMPTY_ORDER_MESSAGE = "Order is currently empty."


class PanelState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
    DISABLED = "disabled"


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    variant: str  # "success" | "warning" | "error"


class InfiniteWindow(Generic[T]):
    """Client-side window over a fully fetched list.

    Shows ``window_size`` rows at first and appends the next slice on each
    ``load_more``; once everything is visible the next call turns loading
    off.
    """

    def __init__(self, window_size: Optional[int] = None) -> None:
        self.window_size = window_size or settings.PANEL_WINDOW_SIZE
        self._rows: List[T] = []
        self.visible: List[T] = []
        self.enabled = True

    def load(self, rows: Sequence[T]) -> None:
        self._rows = list(rows)
        self.visible = self._rows[: self.window_size]
        self.enabled = True

    def load_more(self) -> bool:
        if len(self.visible) >= len(self._rows):
            self.enabled = False
            return False
        end = len(self.visible) + self.window_size
        self.visible = self._rows[:end]
        return True

    @property
    def total(self) -> int:
        return len(self._rows)


class _OrderPanel:
    """Shared lifecycle of the two workspace panels."""

    subscriptions: tuple = ()

    def __init__(
        self,
        order_id: UUID,
        auth: IAuthorizationContext,
        order_service: OrderService,
        channel: IEventBus,
        window_size: Optional[int] = None,
    ) -> None:
        self.order_id = order_id
        self._auth = auth
        self._orders = order_service
        self._channel = channel
        self.window = InfiniteWindow(window_size)
        self.state = PanelState.LOADING
        self.message: Optional[str] = None
        self.notifications: List[Notification] = []
        self._log = logger.bind(panel=type(self).__name__, order_id=str(order_id))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> None:
        for message_class in self.subscriptions:
            self._channel.subscribe(message_class, self)
        self._read_status()
        if self.state is not PanelState.ERROR:
            self.refresh()

    def unmount(self) -> None:
        for message_class in self.subscriptions:
            self._channel.unsubscribe(message_class, self)

    def handle(self, message: ChannelMessage) -> None:
        if message.order_id != self.order_id:
            return
        self._log.debug(
            "panel.message_received",
            message=type(message).__name__,
            payload=message.as_payload(),
        )
        self.on_message(message)

    def on_message(self, message: ChannelMessage) -> None:
        raise NotImplementedError

    def refresh(self) -> None:
        raise NotImplementedError

    def load_more(self) -> bool:
        return self.window.load_more()

    @property
    def rows(self) -> list:
        return self.window.visible

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_status(self) -> None:
        try:
            order = self._orders.get_order(self.order_id, self._auth)
        except (AccessDenied, OrderNotFound) as exc:
            self._fail(str(exc))
            return
        if order.is_activated:
            self._disable()

    def _disable(self) -> None:
        self.state = PanelState.DISABLED
        self.message = ACTIVATED_MESSAGE

    def _fail(self, message: str) -> None:
        self._log.warning("panel.load_failed", error=message)
        self.state = PanelState.ERROR
        self.message = message

    def _settle(self, empty_message: str) -> None:
        """Move out of ``loading`` after rows were (re)loaded."""
        if self.state is PanelState.DISABLED:
            return
        self.state = PanelState.READY
        self.message = empty_message if not self.window.total else None

    def _notify(self, title: str, message: str, variant: str) -> None:
        self.notifications.append(Notification(title, message, variant))


class ProductPickerPanel(_OrderPanel):
    """Catalog list with selection and an "Add to Order" action."""

    subscriptions = (DeactivateOrder,)

    def __init__(
        self,
        order_id: UUID,
        auth: IAuthorizationContext,
        order_service: OrderService,
        catalog_service: CatalogService,
        channel: IEventBus,
        window_size: Optional[int] = None,
    ) -> None:
        super().__init__(order_id, auth, order_service, channel, window_size)
        self._catalog = catalog_service
        self.selected: List[CatalogEntryDTO] = []

    def refresh(self) -> None:
        try:
            entries = self._catalog.list_available_entries(self._auth)
        except AccessDenied as exc:
            self._fail(str(exc))
            return
        self.window.load([CatalogEntryDTO.from_entity(entry) for entry in entries])
        self._settle(NO_PRODUCTS_MESSAGE)

    def on_message(self, message: ChannelMessage) -> None:
        if isinstance(message, DeactivateOrder):
            self._disable()

    def select(self, entries: Sequence[CatalogEntryDTO]) -> None:
        self.selected = list(entries)

    @property
    def can_add(self) -> bool:
        return self.state is PanelState.READY and bool(self.selected)

    def add_selected(self) -> bool:
        if not self.can_add:
            return False

        count = len(self.selected)
        added = self._orders.add_to_order(
            AddToOrderDTO.from_entries(self.selected), self.order_id, self._auth
        )
        if not added:
            self._notify(
                "Error!",
                "An error occurred while adding Products to Order, please try again later!",
                "error",
            )
            return False

        self.selected = []
        self._channel.publish(FetchOrderLines(order_id=self.order_id))
        noun = "Product was" if count == 1 else "Products were"
        self._notify("Success!", f"{count} {noun} added to your Order!", "success")
        return True


class OrderLinesPanel(_OrderPanel):
    """Order line list with a "Confirm Order" action."""

    subscriptions = (FetchOrderLines,)

    def refresh(self) -> None:
        try:
            items = self._orders.list_order_lines(self.order_id, self._auth)
        except (AccessDenied, OrderNotFound) as exc:
            self._fail(str(exc))
            return
        self.window.load([OrderLineDTO.from_entity(item) for item in items])
        self._settle(EMPTY_ORDER_MESSAGE)

    def on_message(self, message: ChannelMessage) -> None:
        if isinstance(message, FetchOrderLines):
            self.refresh()

    @property
    def can_confirm(self) -> bool:
        return self.state is PanelState.READY

    def confirm(self) -> bool:
        if not self.can_confirm:
            return False

        count = self.window.total
        plural = "" if count == 1 else "s"
        self._notify(
            f"Confirming {count} Product{plural}.",
            "Waiting for confirmation of external system...",
            "warning",
        )
        confirmed = self._orders.confirm_order(self.order_id, self._auth)
        if not confirmed:
            self._notify(
                "Error!",
                "An error occurred while confirming Products, please try again later!",
                "error",
            )
            return False

        self._disable()
        self._channel.publish(DeactivateOrder(order_id=self.order_id))
        noun = "Product was" if count == 1 else "Products were"
        self._notify("Success!", f"{count} {noun} confirmed!", "success")
        self._notify(
            "Order Status",
            "Order is now Activated and cannot be further edited!",
            "success",
        )
        return True
