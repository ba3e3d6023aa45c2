"""Django ORM implementation of the Employee repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.employees.models import Employee
from modules.employees.repositories.interfaces import IEmployeeRepository

logger = structlog.get_logger(__name__)


class EmployeeDjangoRepository(IEmployeeRepository):
    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Employee:
        User = get_user_model()
        user = User.objects.create_user(
            username=data["email"],
            email=data["email"],
            password=data["password"],
        )
        employee = Employee(
            user=user,
            name=data["name"],
            email=data["email"],
            phone=data.get("phone", ""),
            role=data["role"],
            branch_id=data.get("branch_id"),
        )
        employee.save()
        logger.info(
            "employee.created", employee_id=str(employee.id), role=employee.role
        )
        return employee

    def get_by_id(self, id: str) -> Optional[Employee]:
        try:
            return (
                Employee.objects.alive()
                .select_related("branch", "user")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def get_by_user_id(self, user_id: Any) -> Optional[Employee]:
        return (
            Employee.objects.alive()
            .select_related("branch")
            .filter(user_id=user_id, is_active=True)
            .first()
        )

    def email_taken(self, email: str) -> bool:
        User = get_user_model()
        return (
            Employee.objects.filter(email__iexact=email).exists()
            or User.objects.filter(username__iexact=email).exists()
        )

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Employee.objects.alive().select_related("branch")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset.order_by("name")

    @transaction.atomic
    def save(self, entity: Employee) -> Employee:
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Deactivate the employee and its login; the row is soft-deleted."""
        employee = self.get_by_id(id)
        if not employee:
            return False
        employee.is_active = False
        employee.save(update_fields=["is_active"])
        employee.delete()
        user = employee.user
        user.is_active = False
        user.save(update_fields=["is_active"])
        logger.info("employee.deactivated", employee_id=str(id))
        return True
