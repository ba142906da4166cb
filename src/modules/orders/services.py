"""Order service layer (Use Cases).

Orchestrates order creation, reads with derived totals and the
status-driven stock reconciliation.  Write operations are atomic; the
service defines the unit-of-work boundary.

Business rules enforced:
- Every referenced product must exist; stock must cover each item.
- Line items snapshot the product price at creation; creation reserves
  no stock.
- PENDENTE -> CONCLUIDO deducts stock (all checks before any write).
- CONCLUIDO -> CANCELADO restores stock.
- PENDENTE -> CANCELADO changes the status only.
- Any other requested status leaves the order untouched.
- Orders cannot be deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog

from django.db import transaction

from modules.orders.constants import (
    ORDER_DELETION_MESSAGE,
    TRANSITION_EFFECTS,
    OrderStatus,
    StockEffect,
)
from modules.orders.exceptions import (
    InsufficientStock,
    OrderDeletionNotAllowed,
    OrderNotFound,
    ProductNotFound,
)

if TYPE_CHECKING:
    from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).  Holds no
    state between calls.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create a PENDENTE order from the requested products.

        Steps:
        1. Resolve all distinct product ids in one batch look-up.
        2. Fail if any requested product was not returned.
        3. Fail if any item asks for more than the current stock.
        4. Snapshot each product's current price into its line item.
        5. Persist order + line items atomically.
        6. Attach the derived total.

        Stock is **not** deducted here; only completion deducts.

        Raises:
            ProductNotFound: a product does not exist.
            InsufficientStock: an item exceeds the available stock.
        """
        log = logger.bind(item_count=len(dto.products))
        log.info("order.creation_started")

        product_ids = {item.product_id for item in dto.products}
        products = {
            product.id: product
            for product in self._product_repo.get_many_by_ids(product_ids)
        }

        for item in dto.products:
            if item.product_id not in products:
                log.warning("order.product_not_found", product_id=str(item.product_id))
                raise ProductNotFound(f"Product with ID {item.product_id} not found")

        for item in dto.products:
            product = products[item.product_id]
            if product.quantity_stock < item.quantity:
                log.warning(
                    "order.insufficient_stock",
                    product_id=str(product.id),
                    available=product.quantity_stock,
                    requested=item.quantity,
                )
                raise InsufficientStock(
                    f"Insufficient stock for product {product.name}. "
                    f"Available: {product.quantity_stock}, "
                    f"Requested: {item.quantity}"
                )

        line_items = [
            {
                "product_id": item.product_id,
                "quantity": item.quantity,
                "price_at_purchase": products[item.product_id].price,
            }
            for item in dto.products
        ]
        order = self._order_repo.create(status=OrderStatus.PENDING, items=line_items)

        log.info("order.created", order_id=str(order.id))
        return self._with_total(order)

    @transaction.atomic
    def update_order(self, order_id: str | UUID, dto: UpdateOrderDTO) -> Order:
        """Apply a status change and reconcile stock accordingly.

        The order row and the involved product rows are locked for the
        duration of the transaction.

        Raises:
            OrderNotFound: order does not exist.
            InsufficientStock: completion would drive a stock below zero.
        """
        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise OrderNotFound(f"Order with ID {order_id} not found")

        if dto.status is None:
            return self._with_total(order)

        new_status = dto.status
        log = logger.bind(
            order_id=str(order.id),
            current_status=order.status,
            new_status=new_status,
        )

        effect = TRANSITION_EFFECTS.get((order.status, new_status))
        if effect is None:
            log.warning("order.transition_ignored")
            return self._with_total(order)

        if effect == StockEffect.DEDUCT:
            self._deduct_stock(order, log)
        elif effect == StockEffect.RESTORE:
            self._restore_stock(order, log)

        self._order_repo.update_status(order.id, new_status)
        log.info("order.status_updated", stock_effect=str(effect))
        return self.get_order(str(order.id))

    def remove_order(self, order_id: str | UUID) -> None:
        """Orders are never deleted.

        Raises:
            OrderNotFound: order does not exist (checked first).
            OrderDeletionNotAllowed: always, for existing orders.
        """
        order = self.get_order(str(order_id))
        logger.warning("order.deletion_blocked", order_id=str(order.id))
        raise OrderDeletionNotAllowed(ORDER_DELETION_MESSAGE)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order with its derived total.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order with ID {order_id} not found")
        return self._with_total(order)

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """Return orders, newest first, each with its derived total."""
        return [self._with_total(order) for order in self._order_repo.list(filters)]

    # ------------------------------------------------------------------
    # Stock reconciliation
    # ------------------------------------------------------------------

    def _deduct_stock(self, order: Order, log: Any) -> None:
        """Deduct every line item from its product, or nothing at all.

        New stock levels are computed for all lines first (cumulatively
        when several lines share a product); writes happen only if none
        goes negative.
        """
        items = list(order.order_products.all())
        products = self._lock_products(items)

        new_stock: Dict[Any, int] = {}
        for item in items:
            product = products[item.product_id]
            available = new_stock.get(product.id, product.quantity_stock)
            remaining = available - item.quantity
            if remaining < 0:
                log.warning(
                    "order.completion_blocked",
                    product_id=str(product.id),
                    available=available,
                    requested=item.quantity,
                )
                raise InsufficientStock(
                    f"Cannot complete order: insufficient stock for product "
                    f"{product.name}. Available: {available}, "
                    f"Requested: {item.quantity}"
                )
            new_stock[product.id] = remaining

        for product_id, quantity in new_stock.items():
            self._product_repo.update_stock(product_id, quantity)
            log.info(
                "order.stock_deducted",
                product_id=str(product_id),
                remaining=quantity,
            )

    def _restore_stock(self, order: Order, log: Any) -> None:
        """Give every line item's quantity back to its product."""
        items = list(order.order_products.all())
        products = self._lock_products(items)

        new_stock: Dict[Any, int] = {}
        for item in items:
            product = products[item.product_id]
            current = new_stock.get(product.id, product.quantity_stock)
            new_stock[product.id] = current + item.quantity

        for product_id, quantity in new_stock.items():
            self._product_repo.update_stock(product_id, quantity)
            log.info(
                "order.stock_restored",
                product_id=str(product_id),
                restored_stock=quantity,
            )

    def _lock_products(self, items: List[Any]) -> Dict[Any, Any]:
        product_ids = {item.product_id for item in items}
        products = {
            product.id: product
            for product in self._product_repo.get_many_for_update(product_ids)
        }
        missing = product_ids - set(products)
        if missing:
            raise ProductNotFound(f"Product with ID {sorted(missing)[0]} not found")
        return products

    def _with_total(self, order: Order) -> Order:
        order.total_order = self._order_repo.compute_total(order.id)
        return order
