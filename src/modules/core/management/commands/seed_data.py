from __future__ import annotations

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.customers.models import Customer
from modules.products.catalog import CATALOG, DEMO_CUSTOMER
from modules.products.models import Product


class Command(BaseCommand):
    help = "Seed the demo customer and the apparel catalog (idempotent)."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding demo data...")

        customer_created = self._seed_customer()
        products_created = self._seed_products()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"customers_created={int(customer_created)}, "
                f"products_created={products_created}, "
                f"catalog_size={len(CATALOG)}"
            )
        )

    def _seed_customer(self) -> bool:
        name, email = DEMO_CUSTOMER
        _, created = Customer.objects.get_or_create(
            email=email, defaults={"name": name}
        )
        return created

    def _seed_products(self) -> int:
        self.stdout.write("Creating products...")
        created_count = 0
        for name, description, price_cents, stock, category in CATALOG:
            if Product.objects.filter(name__iexact=name).exists():
                continue
            Product.objects.create(
                name=name,
                description=description,
                price_cents=price_cents,
                stock=stock,
                category=category,
            )
            created_count += 1
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return created_count
