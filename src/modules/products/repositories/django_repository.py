"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern: they return ``None`` (or omit
rows) instead of raising; the Service Layer decides how to translate a
missing entity.  ``update_stock`` is the exception: writing to an
unknown product raises ``ProductNotFound``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from modules.products.exceptions import ProductNotFound
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a live product by primary key.

        Returns ``None`` for non-existent, soft-deleted or invalid IDs.
        """
        try:
            return Product.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[Product]:
        """List live products with optional Django ORM look-ups.

        Examples of valid filters::

            {"category__iexact": "books"}
            {"name__icontains": "shirt"}
        """
        queryset = Product.objects.alive()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete a product by ID.

        Returns ``True`` if the product was found and soft-deleted,
        ``False`` if no live product exists with the given ID.
        """
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        logger.info("product.soft_deleted", product_id=str(id))
        return True

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    def get_many_by_ids(self, ids: Iterable[Any]) -> List[Product]:
        return list(Product.objects.alive().filter(id__in=list(ids)))

    def get_many_for_update(self, ids: Iterable[Any]) -> List[Product]:
        # Soft-deleted rows are included: stock of a product referenced by
        # existing orders must still be reconcilable.
        return list(
            Product.objects.select_for_update()
            .filter(id__in=list(ids))
            .order_by("id")
        )

    @transaction.atomic
    def update_stock(self, id: Any, quantity: int) -> Product:
        if quantity < 0:
            raise ValueError("Stock quantity cannot be negative.")

        try:
            updated = Product.objects.filter(id=id).update(
                quantity_stock=quantity, updated_at=timezone.now()
            )
        except (ValueError, ValidationError):
            updated = 0
        if not updated:
            raise ProductNotFound(f"Product with ID {id} not found")

        logger.info("product.stock_updated", product_id=str(id), quantity=quantity)
        return Product.objects.get(id=id)
