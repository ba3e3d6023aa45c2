from __future__ import annotations

from rest_framework import serializers

from modules.employees.constants import EmployeeRole
from modules.employees.models import Employee


class CreateEmployeeSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    role = serializers.ChoiceField(choices=EmployeeRole.choices)
    phone = serializers.CharField(
        max_length=32, required=False, allow_blank=True, default=""
    )
    branch_id = serializers.UUIDField(required=False, allow_null=True)


class EmployeeSerializer(serializers.ModelSerializer):
    branch_name = serializers.CharField(
        source="branch.name", read_only=True, default=None
    )
    role_display = serializers.CharField(source="get_role_display", read_only=True)

    class Meta:
        model = Employee
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "role",
            "role_display",
            "branch_id",
            "branch_name",
            "is_active",
            "created_at",
        ]
        read_only_fields = fields


class ActorSerializer(serializers.Serializer):
    id = serializers.CharField()
    role = serializers.CharField()
    branch_id = serializers.CharField(allow_null=True)
