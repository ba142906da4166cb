"""Product domain exceptions.

Raised by the Service Layer (and the stock update of the repository) when
business rules are violated.  The API layer (Views) catches these and
translates them into appropriate HTTP responses.
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """The requested product does not exist or has been soft-deleted."""
