from django.apps import AppConfig


class CartsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.carts"
    label = "carts"

    def ready(self) -> None:
        from modules.carts.events import CartAbandoned, CartCheckedOut
        from modules.carts.handlers import (
            cart_abandoned_handler,
            cart_checked_out_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(CartCheckedOut, cart_checked_out_handler)
        event_bus.subscribe(CartAbandoned, cart_abandoned_handler)
