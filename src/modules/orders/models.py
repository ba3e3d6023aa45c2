"""Order and OrderHistoryEntry models.

Business rules implemented:
- Tracking numbers are unique and stored normalised (stripped, uppercased).
- ``version`` starts at 1 and grows by exactly one per committed status
  change; status writes are guarded by it (optimistic locking).
- Every status change appends one ``OrderHistoryEntry``; entries are never
  edited and outlive any attempt to remove the order (``PROTECT``).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import (
    TERMINAL_STATES,
    TRACKING_NUMBER_MAX_LENGTH,
    OrderStatus,
)


class Order(BaseModel):
    """A parcel tracked from the China warehouse to a Kazakhstan branch.

    ``status`` and ``version`` are only written through the repository's
    conditional update; never ``save()`` a stale instance over them.
    """

    tracking_number = models.CharField(
        max_length=TRACKING_NUMBER_MAX_LENGTH, unique=True
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.CREATED,
    )
    branch = models.ForeignKey(
        "branches.Branch",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
    )
    client = models.ForeignKey(
        "clients.Client",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    version = models.PositiveIntegerField(default=1)
    created_by = models.ForeignKey(
        "employees.Employee",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_orders",
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["branch", "status"], name="orders_branch_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(version__gte=1),
                name="orders_version_positive",
            ),
        ]

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    def __str__(self) -> str:
        return f"{self.tracking_number} ({self.status})"


class OrderHistoryEntry(BaseModel):
    """Append-only record of one status change.

    ``status`` is the status transitioned *to*; ``created_at`` is the moment
    of the change.  ``changed_by`` is nullable so that deactivating or
    removing an employee never erases the trail.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="history",
    )
    status = models.CharField(max_length=20, choices=OrderStatus.choices)
    changed_by = models.ForeignKey(
        "employees.Employee",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_changes",
    )
    note = models.TextField(null=True, blank=True)  # noqa: DJ01

    class Meta:
        db_table = "order_history"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["order", "created_at"], name="order_history_order_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.order_id} -> {self.status}"
