from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO, UpdateOrderDTO

pytestmark = pytest.mark.unit


class TestCreateOrderItemDTO:
    def test_valid(self):
        product_id = uuid4()
        dto = CreateOrderItemDTO(product_id=str(product_id), quantity=2)
        assert dto.product_id == product_id
        assert dto.quantity == 2

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(ValidationError, match="Quantity must be at least 1"):
            CreateOrderItemDTO(product_id=uuid4(), quantity=quantity)

    def test_product_id_must_be_uuid(self):
        with pytest.raises(ValidationError):
            CreateOrderItemDTO(product_id="abc", quantity=1)

    def test_is_frozen(self):
        dto = CreateOrderItemDTO(product_id=uuid4(), quantity=1)
        with pytest.raises(ValidationError):
            dto.quantity = 5


class TestCreateOrderDTO:
    def test_requires_at_least_one_product(self):
        with pytest.raises(ValidationError, match="at least one product"):
            CreateOrderDTO(products=[])

    def test_accepts_duplicate_products(self):
        product_id = uuid4()
        dto = CreateOrderDTO(
            products=[
                {"product_id": product_id, "quantity": 1},
                {"product_id": product_id, "quantity": 2},
            ]
        )
        assert len(dto.products) == 2


class TestUpdateOrderDTO:
    def test_status_is_optional(self):
        assert UpdateOrderDTO().status is None

    def test_accepts_wire_value(self):
        assert UpdateOrderDTO(status="CONCLUIDO").status == OrderStatus.COMPLETED

    def test_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            UpdateOrderDTO(status="SHIPPED")
