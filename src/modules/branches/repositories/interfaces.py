"""Branch repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.branches.models import Branch


class IBranchRepository(IRepository["Branch"]):
    """Repository contract for pickup branches."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Branch]:
        """List live branches ordered by name."""

    @abstractmethod
    def get_by_code(self, code: str) -> Optional[Branch]:
        """Retrieve a branch by its label code."""

    @abstractmethod
    def exists(self, id: str) -> bool:
        """Return ``True`` if a live branch with this ID exists."""
