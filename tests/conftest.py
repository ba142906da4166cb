from __future__ import annotations

from decimal import Decimal

import pytest
from django.conf import settings
from rest_framework.test import APIClient

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient without credentials."""
    return APIClient()


@pytest.fixture()
def auth_client():
    """APIClient sending the configured API key as a Bearer token."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {settings.APP_CONFIG.api_key}")
    return client


@pytest.fixture()
def api_client_with_correlation(auth_client):
    """Authenticated APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    auth_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return auth_client, cid


@pytest.fixture()
def make_product():
    """Factory creating products through the ORM."""

    def _make(**overrides) -> Product:
        defaults = {
            "name": "Widget",
            "category": "Tools",
            "description": "",
            "price": Decimal("10.00"),
            "quantity_stock": 10,
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make


@pytest.fixture()
def order_service():
    return OrderService(
        order_repository=OrderDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )
