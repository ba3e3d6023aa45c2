"""Employee repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.employees.models import Employee


class IEmployeeRepository(IRepository["Employee"]):
    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Employee:
        """Create the auth user and the employee profile atomically.

        ``data`` keys: ``name``, ``email``, ``password``, ``role``,
        ``phone``, ``branch_id``.
        """

    @abstractmethod
    def get_by_user_id(self, user_id: Any) -> Optional[Employee]:
        """Retrieve the active employee profile of an auth user."""

    @abstractmethod
    def email_taken(self, email: str) -> bool:
        """Return ``True`` if an employee or auth user already uses *email*."""
