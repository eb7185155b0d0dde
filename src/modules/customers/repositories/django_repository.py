"""Django ORM implementation of the Customer repository.

Follows the Null Object pattern: look-ups return ``None``/``False`` for
missing or malformed IDs and the Service Layer decides which error to raise.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.core.exceptions import ValidationError

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Customer]:
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def exists(self, id: str) -> bool:
        try:
            return Customer.objects.filter(id=id).exists()
        except (ValueError, ValidationError):
            return False
