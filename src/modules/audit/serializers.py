from __future__ import annotations

from rest_framework import serializers

from modules.audit.models import AuditLogEntry


class AuditLogEntrySerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(
        source="employee.name", read_only=True, default=None
    )

    class Meta:
        model = AuditLogEntry
        fields = [
            "id",
            "employee_id",
            "employee_name",
            "action",
            "payload",
            "created_at",
        ]
        read_only_fields = fields
