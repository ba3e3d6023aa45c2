"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import (
    TRACKING_NUMBER_MAX_LENGTH,
    TRACKING_NUMBER_MIN_LENGTH,
)
from modules.orders.models import Order, OrderHistoryEntry
from modules.orders.policy import action_label, status_color, status_display_name

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderSerializer(serializers.Serializer):
    tracking_number = serializers.CharField(
        min_length=TRACKING_NUMBER_MIN_LENGTH,
        max_length=TRACKING_NUMBER_MAX_LENGTH,
        trim_whitespace=True,
    )
    client_id = serializers.UUIDField(required=False, allow_null=True)
    branch_id = serializers.UUIDField(required=False, allow_null=True)


class TransitionOrderSerializer(serializers.Serializer):
    """Validates a status change request.

    ``status`` is kept as a free string so that unknown values reach the
    domain and are reported as ``unknown_status``.
    """

    status = serializers.CharField()
    version = serializers.IntegerField()
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    branch_id = serializers.UUIDField(required=False, allow_null=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class HistoryEntrySerializer(serializers.ModelSerializer):
    status_display = serializers.SerializerMethodField()
    changed_by_name = serializers.CharField(
        source="changed_by.name", read_only=True, default=None
    )

    class Meta:
        model = OrderHistoryEntry
        fields = [
            "id",
            "status",
            "status_display",
            "changed_by_id",
            "changed_by_name",
            "note",
            "created_at",
        ]
        read_only_fields = fields

    def get_status_display(self, obj: OrderHistoryEntry) -> str:
        return status_display_name(obj.status)


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order list (no nested relations)."""

    status_display = serializers.SerializerMethodField()
    status_color = serializers.SerializerMethodField()
    branch_name = serializers.CharField(source="branch.name", read_only=True, default=None)
    client_name = serializers.CharField(source="client.name", read_only=True, default=None)

    class Meta:
        model = Order
        fields = [
            "id",
            "tracking_number",
            "status",
            "status_display",
            "status_color",
            "version",
            "branch_id",
            "branch_name",
            "client_id",
            "client_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_status_display(self, obj: Order) -> str:
        return status_display_name(obj.status)

    def get_status_color(self, obj: Order) -> str:
        return status_color(obj.status)


class OrderSerializer(OrderListSerializer):
    """Read serializer for an order with its history.

    Pass ``available_actions`` (a list of statuses) in the serializer
    context to expose the actions the requesting actor may take.
    """

    history = HistoryEntrySerializer(many=True, read_only=True)
    available_actions = serializers.SerializerMethodField()

    class Meta(OrderListSerializer.Meta):
        fields = OrderListSerializer.Meta.fields + [
            "created_by_id",
            "history",
            "available_actions",
        ]
        read_only_fields = fields

    def get_available_actions(self, obj: Order) -> list[dict]:
        return [
            {"status": str(target), "label": action_label(target)}
            for target in self.context.get("available_actions", [])
        ]
