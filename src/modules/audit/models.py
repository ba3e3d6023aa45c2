"""Audit log of privileged back-office actions.

Entries record what happened; nothing reads them back to drive
behaviour.  They are insert-only.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class AuditLogEntry(BaseModel):
    employee = models.ForeignKey(
        "employees.Employee",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_entries",
    )
    action = models.CharField(max_length=100)
    payload = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["action", "-created_at"], name="audit_action_idx"),
            models.Index(fields=["employee"], name="audit_employee_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.action} by {self.employee_id or 'system'}"
