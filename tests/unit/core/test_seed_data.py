from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from modules.core.management.commands.seed_data import CATALOG
from modules.orders.models import Order
from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestSeedDataCommand:
    def test_seeds_catalog_and_orders(self):
        out = StringIO()

        call_command("seed_data", "--orders", "5", stdout=out)

        assert Product.objects.count() == len(CATALOG)
        assert 0 < Order.objects.count() <= 5
        assert "Seed completed" in out.getvalue()

    def test_is_idempotent_for_products(self):
        call_command("seed_data", "--orders", "0", stdout=StringIO())
        call_command("seed_data", "--orders", "0", stdout=StringIO())

        assert Product.objects.count() == len(CATALOG)
        assert Order.objects.count() == 0

    def test_stock_never_negative(self):
        call_command("seed_data", "--orders", "20", stdout=StringIO())
        assert not Product.objects.filter(quantity_stock__lt=0).exists()
