from __future__ import annotations

from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import Case, IntegerField, Value, When

from modules.carts.models import Cart
from modules.orders.models import Order
from modules.products.catalog import BASELINE_STOCK, DEFAULT_BASELINE_STOCK
from modules.products.models import Product


class Command(BaseCommand):
    help = "Restore baseline stock per category and delete all orders and carts."

    @transaction.atomic
    def handle(self, *args, **options):
        restocked = Product.objects.update(
            stock=Case(
                *[
                    When(category=category, then=Value(stock))
                    for category, stock in BASELINE_STOCK.items()
                ],
                default=Value(DEFAULT_BASELINE_STOCK),
                output_field=IntegerField(),
            )
        )
        # Lines go with their parents (CASCADE).
        orders_deleted, _ = Order.objects.all().delete()
        carts_deleted, _ = Cart.objects.all().delete()

        self.stdout.write(
            self.style.SUCCESS(
                "Demo reset: "
                f"products_restocked={restocked}, "
                f"rows_deleted={orders_deleted + carts_deleted}"
            )
        )
