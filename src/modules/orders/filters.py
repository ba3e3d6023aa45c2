import django_filters

from modules.orders.constants import TERMINAL_STATES
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    """Query-string filters for the order list.

    ``start_date`` / ``end_date`` bound the registration date (inclusive);
    ``active=true`` hides issued, cancelled and problem parcels.
    """

    status = django_filters.CharFilter(lookup_expr="iexact")
    branch = django_filters.UUIDFilter(field_name="branch_id")
    client = django_filters.UUIDFilter(field_name="client_id")
    tracking_number = django_filters.CharFilter(lookup_expr="icontains")
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")
    active = django_filters.BooleanFilter(method="filter_active")

    class Meta:
        model = Order
        fields = ["status", "branch", "client", "tracking_number"]

    def filter_active(self, queryset, name, value):
        if value is None:
            return queryset
        if value:
            return queryset.exclude(status__in=TERMINAL_STATES)
        return queryset.filter(status__in=TERMINAL_STATES)
