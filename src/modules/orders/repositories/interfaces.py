"""Order repository interface.

Extends ``IRepository[Order]`` with the operations required by the
order lifecycle: atomic creation with line items, status updates and
the derived order total.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderProduct children.
    Creation must be atomic.
    """

    @abstractmethod
    def create(self, status: str, items: List[Dict[str, Any]]) -> Order:
        """Create an order with its line items atomically.

        Each item is a dict with ``product_id``, ``quantity`` and
        ``price_at_purchase``.
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with prefetched line items and products."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders, most recent first, with optional filters."""

    @abstractmethod
    def update_status(self, id: Any, status: str) -> Order:
        """Persist a new status.  Raises ``OrderNotFound`` if absent."""

    @abstractmethod
    def compute_total(self, id: Any) -> Decimal:
        """Sum of ``price_at_purchase * quantity`` over the line items.

        Returns ``Decimal("0.00")`` for unknown or empty orders.
        """
