"""Django ORM implementation of the audit log repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

from django.db import models

from modules.audit.models import AuditLogEntry
from modules.audit.repositories.interfaces import IAuditLogRepository


class AuditLogDjangoRepository(IAuditLogRepository):
    def record(
        self, employee_id: Optional[str], action: str, payload: Dict[str, Any]
    ) -> AuditLogEntry:
        return AuditLogEntry.objects.create(
            employee_id=employee_id,
            action=action,
            payload=payload,
        )

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = AuditLogEntry.objects.select_related("employee")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset.order_by("-created_at")
