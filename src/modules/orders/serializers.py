"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.core.serializers import NumberField
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderProduct

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    productId = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    products = CreateOrderItemSerializer(many=True, allow_empty=False)


class UpdateOrderSerializer(serializers.Serializer):
    """Validates the order update payload.  ``status`` is optional."""

    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderProductSerializer(serializers.ModelSerializer):
    """Read serializer for line items with their price snapshot."""

    orderId = serializers.UUIDField(source="order_id", read_only=True)
    productId = serializers.UUIDField(source="product_id", read_only=True)
    price_at_purchase = NumberField()

    class Meta:
        model = OrderProduct
        fields = [
            "id",
            "orderId",
            "productId",
            "quantity",
            "price_at_purchase",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested line items.

    ``total_order`` is the value attached by ``OrderService``.
    """

    total_order = NumberField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    orderProducts = OrderProductSerializer(
        source="order_products", many=True, read_only=True
    )

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "total_order",
            "createdAt",
            "updatedAt",
            "orderProducts",
        ]
        read_only_fields = fields
