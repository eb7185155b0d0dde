"""Cart DRF serializers for API input/output.

Business logic lives in ``CartService``, which receives Pydantic DTOs
from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.carts.models import CartLine

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class AddCartItemSerializer(serializers.Serializer):
    """Validates an add-to-cart request payload."""

    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class CartLineSerializer(serializers.ModelSerializer):
    """The line written by an add-to-cart request."""

    class Meta:
        model = CartLine
        fields = [
            "cart_id",
            "product_id",
            "quantity",
            "unit_price_cents",
            "line_total_cents",
        ]
        read_only_fields = fields


class CartViewLineSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    name = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price_cents = serializers.IntegerField()
    line_total_cents = serializers.IntegerField()


class CartViewSerializer(serializers.Serializer):
    """Serializes a ``CartViewDTO`` (or the empty view when there is no cart)."""

    cart_id = serializers.UUIDField(allow_null=True)
    customer_id = serializers.UUIDField()
    items = CartViewLineSerializer(many=True)
    total_cents = serializers.IntegerField()
