"""Employee service layer (Use Cases).

Covers the admin user-management screens of the back-office and the
resolution of the *current actor* from an authenticated user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.db import transaction

from modules.branches.exceptions import BranchNotFound
from modules.employees.actor import ActorContext
from modules.employees.exceptions import (
    EmployeeAlreadyExists,
    EmployeeNotFound,
    NotAnEmployee,
)

if TYPE_CHECKING:
    from modules.branches.repositories.interfaces import IBranchRepository
    from modules.employees.dtos import CreateEmployeeDTO
    from modules.employees.models import Employee
    from modules.employees.repositories.interfaces import IEmployeeRepository

logger = structlog.get_logger(__name__)


class EmployeeService:
    """Application service for Employee use-cases."""

    def __init__(
        self,
        employee_repository: IEmployeeRepository,
        branch_repository: IBranchRepository,
    ) -> None:
        self._employee_repo = employee_repository
        self._branch_repo = branch_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_employee(self, dto: CreateEmployeeDTO) -> Employee:
        """Create the login and the employee profile.

        Raises:
            EmployeeAlreadyExists: the email is already in use.
            BranchNotFound: ``branch_id`` does not reference a live branch.
        """
        log = logger.bind(role=dto.role)

        if self._employee_repo.email_taken(dto.email):
            log.warning("employee.duplicate_email")
            raise EmployeeAlreadyExists("Email already registered.")

        if dto.branch_id is not None and not self._branch_repo.exists(
            str(dto.branch_id)
        ):
            raise BranchNotFound(f"Branch {dto.branch_id} not found.")

        employee = self._employee_repo.create(
            {
                "name": dto.name,
                "email": dto.email,
                "password": dto.password,
                "role": dto.role,
                "phone": dto.phone,
                "branch_id": dto.branch_id,
            }
        )
        log.info("employee.registered", employee_id=str(employee.id))
        return employee

    def deactivate_employee(self, id: str) -> None:
        """Raises ``EmployeeNotFound`` for unknown IDs."""
        if not self._employee_repo.delete(id):
            raise EmployeeNotFound(f"Employee {id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_employees(self):
        return self._employee_repo.list()

    def current_actor(self, user: Any) -> ActorContext:
        """Resolve the acting employee of an authenticated user.

        Raises:
            NotAnEmployee: anonymous user, or no active employee profile.
        """
        if user is None or not getattr(user, "is_authenticated", False):
            raise NotAnEmployee("Authentication required.")
        employee = self._employee_repo.get_by_user_id(user.pk)
        if employee is None:
            raise NotAnEmployee(f"User {user.pk} has no active employee profile.")
        return employee.to_actor()
