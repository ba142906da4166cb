"""Every error response shares the ``{statusCode, message, error}`` shape."""

from __future__ import annotations

from uuid import uuid4

import pytest

pytestmark = pytest.mark.integration


def test_method_not_allowed(auth_client):
    response = auth_client.put(f"/order/{uuid4()}", {}, format="json")

    assert response.status_code == 405
    body = response.json()
    assert body["statusCode"] == 405
    assert body["error"] == "Method Not Allowed"
    assert isinstance(body["message"], str)


def test_malformed_json(auth_client):
    response = auth_client.generic(
        "POST", "/order", "{not json", content_type="application/json"
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Bad Request"


def test_validation_errors_are_listed(auth_client):
    response = auth_client.post(
        "/order", {"products": [{"productId": "x", "quantity": 0}]}, format="json"
    )

    body = response.json()
    assert body["statusCode"] == 400
    assert len(body["message"]) == 2
    assert all(message.startswith("products.0.") for message in body["message"])
