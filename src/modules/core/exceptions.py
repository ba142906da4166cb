"""Uniform error responses.

Every error leaving the API has the shape::

    {"statusCode": 404, "message": "Order with ID ... not found", "error": "Not Found"}

Views translate domain exceptions with ``error_response``; DRF's own
exceptions (validation, authentication, 404, 405) are reshaped by
``api_exception_handler``, registered as ``EXCEPTION_HANDLER``.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, List, Optional, Union

import structlog
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)

Message = Union[str, List[str]]


def error_body(status_code: int, message: Message) -> dict:
    return {
        "statusCode": status_code,
        "message": message,
        "error": HTTPStatus(status_code).phrase,
    }


def error_response(status_code: int, message: Message) -> Response:
    """Build an error ``Response`` in the project-wide format."""
    return Response(error_body(status_code, message), status=status_code)


def flatten_errors(detail: Any, prefix: str = "") -> List[str]:
    """Flatten a DRF/Pydantic-style error structure into readable strings.

    ``{"products": [{"quantity": ["Ensure ..."]}]}`` becomes
    ``["products.0.quantity: Ensure ..."]``.
    """
    if isinstance(detail, dict):
        messages: List[str] = []
        for key, value in detail.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            messages.extend(flatten_errors(value, path))
        return messages
    if isinstance(detail, (list, tuple)):
        messages = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list, tuple)):
                path = f"{prefix}.{index}" if prefix else str(index)
                messages.extend(flatten_errors(value, path))
            else:
                messages.extend(flatten_errors(value, prefix))
        return messages
    text = str(detail)
    if prefix and prefix != "non_field_errors":
        return [f"{prefix}: {text}"]
    return [text]


def api_exception_handler(exc: Exception, context: dict) -> Optional[Response]:
    """Reshape DRF exception responses into the project error format.

    Returns ``None`` for non-DRF exceptions so Django handles them (500).
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    message: Message
    if isinstance(data, dict) and set(data) == {"detail"}:
        message = str(data["detail"])
    else:
        message = flatten_errors(data)

    if response.status_code >= 500:
        logger.error("api.error", status_code=response.status_code)

    response.data = error_body(response.status_code, message)
    return response


def pydantic_messages(exc: Any) -> List[str]:
    """Readable messages for a ``pydantic.ValidationError``."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        text = error.get("msg", "Invalid value.")
        messages.append(f"{location}: {text}" if location else text)
    return messages
