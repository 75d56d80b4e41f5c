from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.orders"
    label = "orders"

    def ready(self) -> None:
        from modules.orders.events import OrderActivated, OrderItemsAdded
        from modules.orders.handlers import (
            order_activated_handler,
            order_items_added_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(OrderItemsAdded, order_items_added_handler)
        event_bus.subscribe(OrderActivated, order_activated_handler)
