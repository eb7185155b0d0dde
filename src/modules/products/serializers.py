"""Product DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSearchSerializer(serializers.Serializer):
    """Validates catalog search query parameters."""

    q = serializers.CharField(required=False, default="", allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    max_price_cents = serializers.IntegerField(required=False, min_value=1)


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for catalog products."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price_cents",
            "stock",
            "category",
        ]
        read_only_fields = fields
