"""Audit log API (administrators only, read-only)."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.mixins import ListModelMixin
from rest_framework.viewsets import GenericViewSet

from modules.audit.filters import AuditLogFilter
from modules.audit.models import AuditLogEntry
from modules.audit.repositories.django_repository import AuditLogDjangoRepository
from modules.audit.serializers import AuditLogEntrySerializer
from modules.employees.permissions import IsAdminEmployee


class AuditLogViewSet(ListModelMixin, GenericViewSet):
    queryset = AuditLogEntry.objects.all()
    serializer_class = AuditLogEntrySerializer
    permission_classes = [IsAdminEmployee]
    filter_backends = [DjangoFilterBackend]
    filterset_class = AuditLogFilter

    def get_queryset(self):
        return AuditLogDjangoRepository().list()
