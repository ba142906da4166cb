"""Product DRF serializers for API output.

Input validation lives in the Pydantic DTOs (``dtos.py``); the
serializer only shapes the wire representation.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.core.serializers import NumberField
from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    price = NumberField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "category",
            "description",
            "price",
            "quantity_stock",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    """Request body schema for product creation (documentation only)."""

    name = serializers.CharField()
    category = serializers.CharField()
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    quantity_stock = serializers.IntegerField(min_value=0, required=False)
