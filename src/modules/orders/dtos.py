"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``UpdateOrderDTO``: input for a status update (status optional).
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.orders.constants import OrderStatus

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request.

    The client sends ``productId`` and ``quantity``.
    ``price_at_purchase`` is resolved by the Service Layer from the catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    The same product may appear in several items; each becomes its own
    line item.
    """

    model_config = ConfigDict(frozen=True)

    products: List[CreateOrderItemDTO]

    @field_validator("products")
    @classmethod
    def products_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one product.")
        return v


class UpdateOrderDTO(BaseModel):
    """Immutable DTO for order updates.  ``status=None`` means no change."""

    model_config = ConfigDict(frozen=True)

    status: Optional[OrderStatus] = None
