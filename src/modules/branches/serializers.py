from __future__ import annotations

from rest_framework import serializers

from modules.branches.models import Branch


class CreateBranchSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=120)
    address = serializers.CharField()
    phone = serializers.CharField(max_length=32)
    code = serializers.CharField(
        max_length=20, required=False, allow_blank=True, allow_null=True
    )
    two_gis_link = serializers.URLField(
        max_length=500, required=False, allow_blank=True, default=""
    )


class BranchSerializer(serializers.ModelSerializer):
    class Meta:
        model = Branch
        fields = [
            "id",
            "name",
            "city",
            "address",
            "phone",
            "code",
            "two_gis_link",
            "created_at",
        ]
        read_only_fields = fields
