"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Creation is wrapped in ``transaction.atomic()`` so the Order aggregate
(Order + OrderProducts) is persisted as one unit.  The order total is
computed by the database from the line items on demand; it is never
stored.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import DecimalField, ExpressionWrapper, F, Sum

from modules.orders.exceptions import OrderNotFound
from modules.orders.models import Order, OrderProduct
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

ZERO = Decimal("0.00")

_LINE_TOTAL = ExpressionWrapper(
    F("price_at_purchase") * F("quantity"),
    output_field=DecimalField(max_digits=14, decimal_places=2),
)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, status: str, items: List[Dict[str, Any]]) -> Order:
        order = Order(status=status)
        order.save()

        for item_data in items:
            OrderProduct(
                order=order,
                product_id=item_data["product_id"],
                quantity=item_data["quantity"],
                price_at_purchase=item_data["price_at_purchase"],
            ).save()

        logger.info("order.persisted", order_id=str(order.id), item_count=len(items))
        return self.get_by_id(str(order.id))

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded line items and products.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                Order.objects.prefetch_related("order_products__product")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Eager-loads line items (with product) so the caller can iterate
        over them while the row is locked.  Returns ``None`` for
        non-existent or invalid IDs.
        """
        try:
            return (
                Order.objects.select_for_update()
                .prefetch_related("order_products__product")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders, newest first, with eager-loaded line items.

        Supported filter keys: any Order look-up, e.g. ``status``.
        """
        queryset = Order.objects.prefetch_related("order_products__product").order_by(
            "-created_at", "-id"
        )
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    @transaction.atomic
    def update_status(self, id: Any, status: str) -> Order:
        order = self.get_for_update(str(id))
        if not order:
            raise OrderNotFound(f"Order with ID {id} not found")

        old_status = order.status
        order.status = status
        order.save(update_fields=["status"])
        logger.info(
            "order.status_persisted",
            order_id=str(id),
            old_status=old_status,
            new_status=status,
        )
        return self.get_by_id(str(id))

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    def compute_total(self, id: Any) -> Decimal:
        try:
            total = OrderProduct.objects.filter(order_id=id).aggregate(
                total=Sum(_LINE_TOTAL)
            )["total"]
        except (ValueError, ValidationError):
            return ZERO
        if total is None:
            return ZERO
        return Decimal(total).quantize(ZERO)
