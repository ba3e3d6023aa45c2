"""Employee repositories package."""

from modules.employees.repositories.django_repository import EmployeeDjangoRepository
from modules.employees.repositories.interfaces import IEmployeeRepository

__all__ = ["IEmployeeRepository", "EmployeeDjangoRepository"]
