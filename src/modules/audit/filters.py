import django_filters

from modules.audit.models import AuditLogEntry


class AuditLogFilter(django_filters.FilterSet):
    action = django_filters.CharFilter(field_name="action", lookup_expr="exact")
    employee = django_filters.UUIDFilter(field_name="employee_id")
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = AuditLogEntry
        fields = ["action", "employee", "start_date", "end_date"]
