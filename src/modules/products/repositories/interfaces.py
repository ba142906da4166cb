"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups and the stock mutation
the order lifecycle depends on.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products with optional filters."""

    @abstractmethod
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Soft-delete a product; ``False`` when it does not exist."""

    @abstractmethod
    def get_many_by_ids(self, ids: Iterable[Any]) -> List[Product]:
        """Return the products matching *ids*.

        Unknown ids are silently omitted; callers detect omissions.
        """

    @abstractmethod
    def get_many_for_update(self, ids: Iterable[Any]) -> List[Product]:
        """Return the products matching *ids* with row-level locks.

        Rows are locked in primary-key order to avoid deadlocks.
        """

    @abstractmethod
    def update_stock(self, id: Any, quantity: int) -> Product:
        """Overwrite the stock counter of a product.

        Raises ``ProductNotFound`` for unknown ids and ``ValueError`` for a
        negative *quantity*.
        """
