"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.products.exceptions import ProductNotFound

__all__ = [
    "InsufficientStock",
    "OrderDeletionNotAllowed",
    "OrderNotFound",
    "ProductNotFound",
]


class OrderNotFound(Exception):
    """The requested order does not exist."""


class InsufficientStock(Exception):
    """Not enough stock to create or complete the order."""


class OrderDeletionNotAllowed(Exception):
    """Orders are append-only; cancellation is the only retraction path."""
