"""Employee model: back-office staff linked one-to-one to an auth user.

Business rules implemented:
- The role decides which order transitions the employee may perform.
- Branch workers are scoped to the branch they are attached to.
- Deactivated employees keep their row (history and audit entries still
  reference them) but can no longer act.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import SoftDeleteModel
from modules.employees.actor import ActorContext
from modules.employees.constants import EmployeeRole


class Employee(SoftDeleteModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="employee",
    )
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    phone = models.CharField(max_length=32, blank=True, default="")
    role = models.CharField(max_length=20, choices=EmployeeRole.choices)
    branch = models.ForeignKey(
        "branches.Branch",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="employees",
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "employees"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["role"], name="employees_role_idx"),
        ]

    @property
    def is_admin(self) -> bool:
        return self.role == EmployeeRole.ADMIN

    def to_actor(self) -> ActorContext:
        return ActorContext.from_employee(self)

    def __str__(self) -> str:
        return f"{self.name} ({self.role})"
