"""Base repository contract.

Services receive repositories through their constructor and only see
these abstract interfaces, so policy and executor tests can run against
in-memory implementations instead of the ORM.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Persistence operations every aggregate repository offers.

    ``T`` is the model the repository manages (``Order``, ``Branch``, ...).
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Return the entity, or ``None`` for unknown or malformed IDs."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Iterable[T]:
        ...

    @abstractmethod
    def save(self, entity: T) -> T:
        ...

    @abstractmethod
    def delete(self, id: str) -> bool:
        """``False`` when nothing was removed (unknown ID or protected row)."""
