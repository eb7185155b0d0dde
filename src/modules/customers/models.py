"""Customer model.

The storefront has no sign-up or login flow: customers are seeded by the
``seed_data`` command and every cart/order operation names its customer
explicitly.  ``email`` is unique and treated as personal data (masked in
logs and in ``__str__``).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    """Customer that owns carts and orders."""

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)

    class Meta:
        db_table = "customers"
        ordering = ["name"]

    def save(self, *args, **kwargs) -> None:
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        local, _, domain = (self.email or "").partition("@")
        return f"{self.name} ({local[:1]}***@{domain})"
