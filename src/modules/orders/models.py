"""Order and OrderProduct models.

Business rules implemented:
- Orders start as PENDENTE; transitions are driven by the service layer.
- Orders are never deleted (no soft delete, no delete endpoint).
- ``total_order`` is not stored: it is derived from the line items on
  every read (see ``OrderDjangoRepository.compute_total``).
- OrderProduct snapshots the product price at creation time
  (``price_at_purchase``) and is immutable afterwards.
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import OrderStatus


class Order(BaseModel):
    """Order aggregate root."""

    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderProduct(BaseModel):
    """Line item linking an Order to a Product.

    ``price_at_purchase`` is a **snapshot** of the product price at the time
    the order was created; it never changes even if the product price is
    updated later.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="order_products",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_products",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    price_at_purchase: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )

    class Meta:
        db_table = "order_products"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_products_quantity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} @ {self.price_at_purchase}"
