"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.

Concurrency control on status updates is optimistic: the status write is
a single ``UPDATE ... WHERE id = ? AND version = ?`` that also bumps
``version``.  No row lock is taken and no transaction spans the status
write and the history append.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count, F, Q, QuerySet
from django.db.models.deletion import ProtectedError
from django.utils import timezone

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import DuplicateTrackingNumber
from modules.orders.models import Order, OrderHistoryEntry
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


def branch_scope(queryset: QuerySet, branch_id: Any) -> QuerySet:
    """Restrict *queryset* to a branch's orders plus inbound in-transit ones."""
    return queryset.filter(Q(branch_id=branch_id) | Q(status=OrderStatus.IN_TRANSIT))


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def _base_queryset(self) -> QuerySet:
        return Order.objects.select_related(
            "branch", "client", "created_by"
        ).prefetch_related("history__changed_by")

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order and its ``created`` history entry atomically.

        ``data`` keys:
        - ``tracking_number`` (required, already normalised)
        - ``client_id``, ``branch_id``, ``created_by_id`` (optional)
        """
        try:
            with transaction.atomic():
                order = Order.objects.create(
                    tracking_number=data["tracking_number"],
                    client_id=data.get("client_id"),
                    branch_id=data.get("branch_id"),
                    created_by_id=data.get("created_by_id"),
                    status=OrderStatus.CREATED,
                    version=1,
                )
                OrderHistoryEntry.objects.create(
                    order=order,
                    status=OrderStatus.CREATED,
                    changed_by_id=data.get("created_by_id"),
                )
        except IntegrityError as exc:
            # Lost the race against a concurrent registration.
            if self.tracking_number_exists(data["tracking_number"]):
                raise DuplicateTrackingNumber(
                    f"Tracking number {data['tracking_number']} already exists."
                ) from exc
            raise

        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return self._base_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_tracking_number(self, tracking_number: str) -> Optional[Order]:
        return self._base_queryset().filter(tracking_number=tracking_number).first()

    def tracking_number_exists(self, tracking_number: str) -> bool:
        return Order.objects.filter(tracking_number=tracking_number).exists()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional filters.

        Supported filter keys are any ``Order`` lookups plus
        ``scope_branch_id`` (see ``branch_scope``).
        """
        return list(self.queryset(filters))

    def queryset(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet:
        """Lazy variant of ``list`` for paginated and filtered API views."""
        filters = dict(filters or {})
        queryset = Order.objects.select_related("branch", "client")
        scope_branch_id = filters.pop("scope_branch_id", None)
        if scope_branch_id is not None:
            queryset = branch_scope(queryset, scope_branch_id)
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def status_counts(self, branch_id: Optional[Any] = None) -> Dict[str, int]:
        queryset = Order.objects.all()
        if branch_id is not None:
            queryset = branch_scope(queryset, branch_id)
        rows = queryset.order_by().values("status").annotate(total=Count("id"))
        counts = {status.value: 0 for status in OrderStatus}
        for row in rows:
            counts[row["status"]] = row["total"]
        return counts

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def conditional_update_status(
        self,
        id: Any,
        expected_version: int,
        new_status: str,
        new_branch_id: Optional[Any] = None,
    ) -> bool:
        """Compare-and-set on ``version``; one SQL statement, no lock."""
        changes: Dict[str, Any] = {
            "status": new_status,
            "version": F("version") + 1,
            "updated_at": timezone.now(),
        }
        if new_branch_id is not None:
            changes["branch_id"] = new_branch_id

        updated = Order.objects.filter(id=id, version=expected_version).update(
            **changes
        )
        logger.info(
            "order.conditional_update",
            order_id=str(id),
            expected_version=expected_version,
            new_status=str(new_status),
            updated=bool(updated),
        )
        return updated == 1

    def add_history(
        self,
        order_id: Any,
        status: str,
        changed_by_id: Optional[Any] = None,
        note: Optional[str] = None,
    ) -> OrderHistoryEntry:
        # Savepoint: a failed insert must not poison an enclosing transaction.
        with transaction.atomic():
            entry = OrderHistoryEntry.objects.create(
                order_id=order_id,
                status=status,
                changed_by_id=changed_by_id,
                note=note,
            )
        logger.info(
            "order.history_added",
            order_id=str(order_id),
            status=str(status),
        )
        return entry

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist non-status fields (client, branch) of an order."""
        entity.save(update_fields=["client", "branch"])
        logger.info("order.saved", order_id=str(entity.id))
        return entity

    def delete(self, id: str) -> bool:
        """Orders with history are protected; returns ``False`` when blocked."""
        order = self.get_by_id(id)
        if not order:
            return False
        try:
            with transaction.atomic():
                order.delete()
        except ProtectedError:
            logger.warning("order.delete_blocked", order_id=str(id))
            return False
        logger.info("order.deleted", order_id=str(id))
        return True
