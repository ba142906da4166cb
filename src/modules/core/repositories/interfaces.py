"""Base repository contract.

Services receive repositories through their constructors and only ever
talk to these abstract types; the Django implementations are bound in the
views (and the seed command), and tests may substitute fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Read side every aggregate repository offers."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Return the entity, or ``None`` for unknown or malformed ids."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Iterable[T]:
        """Return entities matching ORM-style ``filters``."""
