"""Unit tests for OrderDjangoRepository.

Covers:
- Atomic creation of the order with its line items.
- Look-ups (unknown and malformed IDs), ordering and filters.
- Status persistence.
- Derived total computation.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from django.db import IntegrityError

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import OrderNotFound
from modules.orders.models import Order, OrderProduct
from modules.orders.repositories import IOrderRepository, OrderDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return OrderDjangoRepository()


@pytest.fixture()
def product(make_product):
    return make_product(price=Decimal("19.99"), quantity_stock=10)


def _items(product, *quantities):
    return [
        {
            "product_id": product.id,
            "quantity": quantity,
            "price_at_purchase": product.price,
        }
        for quantity in quantities
    ]


class TestInterface:
    def test_implements_interface(self, repo):
        assert isinstance(repo, IOrderRepository)


class TestCreate:
    def test_persists_order_and_lines(self, repo, product):
        order = repo.create(status=OrderStatus.PENDING, items=_items(product, 1, 2))

        assert order.status == OrderStatus.PENDING
        assert OrderProduct.objects.filter(order=order).count() == 2

    def test_rolls_back_when_a_line_fails(self, repo, product):
        items = _items(product, 1, 0)

        with pytest.raises(IntegrityError):
            repo.create(status=OrderStatus.PENDING, items=items)

        assert Order.objects.count() == 0
        assert OrderProduct.objects.count() == 0


class TestRead:
    def test_get_by_id_unknown_returns_none(self, repo):
        assert repo.get_by_id(str(uuid4())) is None

    def test_get_by_id_malformed_returns_none(self, repo):
        assert repo.get_by_id("not-a-uuid") is None

    def test_get_for_update_malformed_returns_none(self, repo):
        assert repo.get_for_update("not-a-uuid") is None

    def test_list_newest_first(self, repo, product):
        first = repo.create(status=OrderStatus.PENDING, items=_items(product, 1))
        second = repo.create(status=OrderStatus.PENDING, items=_items(product, 1))

        assert [o.id for o in repo.list()] == [second.id, first.id]

    def test_list_with_status_filter(self, repo, product):
        repo.create(status=OrderStatus.PENDING, items=_items(product, 1))
        done = repo.create(status=OrderStatus.COMPLETED, items=_items(product, 1))

        result = repo.list({"status": OrderStatus.COMPLETED})
        assert [o.id for o in result] == [done.id]


class TestUpdateStatus:
    def test_persists_status(self, repo, product):
        order = repo.create(status=OrderStatus.PENDING, items=_items(product, 1))

        updated = repo.update_status(order.id, OrderStatus.CANCELLED)

        assert updated.status == OrderStatus.CANCELLED
        assert Order.objects.get(id=order.id).status == OrderStatus.CANCELLED

    def test_refreshes_updated_at(self, repo, product):
        order = repo.create(status=OrderStatus.PENDING, items=_items(product, 1))

        updated = repo.update_status(order.id, OrderStatus.COMPLETED)
        assert updated.updated_at > order.updated_at

    def test_unknown_order_raises(self, repo):
        with pytest.raises(OrderNotFound):
            repo.update_status(uuid4(), OrderStatus.COMPLETED)


class TestComputeTotal:
    def test_sums_price_times_quantity(self, repo, product, make_product):
        other = make_product(name="Other", price=Decimal("0.10"))
        order = repo.create(
            status=OrderStatus.PENDING,
            items=_items(product, 3) + _items(other, 7),
        )

        assert repo.compute_total(order.id) == Decimal("60.67")

    def test_uses_snapshot_not_current_price(self, repo, product):
        order = repo.create(status=OrderStatus.PENDING, items=_items(product, 2))
        product.price = Decimal("1000.00")
        product.save()

        assert repo.compute_total(order.id) == Decimal("39.98")

    def test_unknown_order_is_zero(self, repo):
        assert repo.compute_total(uuid4()) == Decimal("0.00")

    def test_malformed_id_is_zero(self, repo):
        assert repo.compute_total("not-a-uuid") == Decimal("0.00")
