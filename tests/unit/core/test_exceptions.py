from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError
from rest_framework import exceptions

from modules.core.exceptions import (
    api_exception_handler,
    error_body,
    error_response,
    flatten_errors,
    pydantic_messages,
)

pytestmark = pytest.mark.unit


class TestErrorBody:
    def test_shape(self):
        assert error_body(404, "Order with ID 1 not found") == {
            "statusCode": 404,
            "message": "Order with ID 1 not found",
            "error": "Not Found",
        }

    def test_response(self):
        response = error_response(400, ["a: b"])
        assert response.status_code == 400
        assert response.data["error"] == "Bad Request"
        assert response.data["message"] == ["a: b"]


class TestFlattenErrors:
    def test_nested(self):
        detail = {
            "products": [{}, {"quantity": ["Ensure this value is >= 1."]}],
            "non_field_errors": ["Broken."],
        }
        assert flatten_errors(detail) == [
            "products.1.quantity: Ensure this value is >= 1.",
            "Broken.",
        ]

    def test_plain_list(self):
        assert flatten_errors(["one", "two"]) == ["one", "two"]


class TestApiExceptionHandler:
    def test_detail_becomes_message(self):
        response = api_exception_handler(exceptions.NotFound("gone"), {})
        assert response.data == {
            "statusCode": 404,
            "message": "gone",
            "error": "Not Found",
        }

    def test_validation_errors_are_flattened(self):
        exc = exceptions.ValidationError({"status": ["Invalid choice."]})
        response = api_exception_handler(exc, {})
        assert response.status_code == 400
        assert response.data["message"] == ["status: Invalid choice."]

    def test_non_api_exceptions_are_left_to_django(self):
        assert api_exception_handler(RuntimeError("boom"), {}) is None


class TestPydanticMessages:
    def test_location_prefix(self):
        class Sample(BaseModel):
            price: int

        with pytest.raises(ValidationError) as exc_info:
            Sample(price="abc")

        messages = pydantic_messages(exc_info.value)
        assert len(messages) == 1
        assert messages[0].startswith("price: ")
