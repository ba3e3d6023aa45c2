"""Order service layer (Use Cases).

Orchestrates parcel registration, lookups and the status transition
executor.  The acting employee is always passed in explicitly as an
``ActorContext``.

Business rules enforced:
- Transitions follow the table in ``constants`` unless an admin overrides.
- Each role may only set the statuses it owns; branch workers are scoped
  to their own branch.
- Status writes are optimistic: a stale ``version`` is rejected, never
  retried behind the caller's back.
- The history append and the audit record follow a committed status
  change; their failure is logged and does not undo the change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import DatabaseError

from modules.branches.exceptions import BranchNotFound
from modules.clients.exceptions import ClientNotFound
from modules.employees.constants import EmployeeRole
from modules.orders.constants import (
    ORDER_CREATED_ACTION,
    ORDER_STATUS_UPDATE_ACTION,
    OrderStatus,
)
from modules.orders.dtos import normalize_tracking_number
from modules.orders.exceptions import (
    DuplicateTrackingNumber,
    MissingBranch,
    MissingReason,
    OrderError,
    OrderNotFound,
    RoleNotPermitted,
    StaleVersion,
)
from modules.orders.policy import authorize_transition, get_available_actions
from modules.orders.transitions import parse_status

if TYPE_CHECKING:
    from modules.audit.services import AuditTrail
    from modules.branches.repositories.interfaces import IBranchRepository
    from modules.clients.repositories.interfaces import IClientRepository
    from modules.employees.actor import ActorContext
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

ORDER_CREATOR_ROLES = frozenset({EmployeeRole.ADMIN, EmployeeRole.CHINA_WORKER})


class OrderService:
    """Application service for Order use-cases.

    Receives repositories and the audit trail via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        branch_repository: IBranchRepository,
        client_repository: IClientRepository,
        audit_trail: AuditTrail,
    ) -> None:
        self._order_repo = order_repository
        self._branch_repo = branch_repository
        self._client_repo = client_repository
        self._audit = audit_trail

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO, actor: ActorContext) -> Order:
        """Register a parcel received at the China warehouse.

        The order starts in ``created`` at version 1 with exactly one
        history entry.

        Raises:
            RoleNotPermitted: the actor is a branch worker.
            DuplicateTrackingNumber: the tracking number is already registered.
            BranchNotFound: ``branch_id`` does not reference a live branch.
            ClientNotFound: ``client_id`` does not reference a client.
        """
        log = logger.bind(actor_id=actor.id, tracking_number=dto.tracking_number)

        if actor.role not in ORDER_CREATOR_ROLES:
            log.warning("order.creation_forbidden", role=actor.role)
            raise RoleNotPermitted(f"Role '{actor.role}' may not register orders.")

        if self._order_repo.tracking_number_exists(dto.tracking_number):
            log.warning("order.duplicate_tracking_number")
            raise DuplicateTrackingNumber(
                f"Tracking number {dto.tracking_number} already exists."
            )

        if dto.branch_id is not None and not self._branch_repo.exists(
            str(dto.branch_id)
        ):
            raise BranchNotFound(f"Branch {dto.branch_id} not found.")

        if dto.client_id is not None and not self._client_repo.get_by_id(
            str(dto.client_id)
        ):
            raise ClientNotFound(f"Client {dto.client_id} not found.")

        order = self._order_repo.create(
            {
                "tracking_number": dto.tracking_number,
                "client_id": dto.client_id,
                "branch_id": dto.branch_id,
                "created_by_id": actor.id,
            }
        )

        self._audit.record(
            actor.id,
            ORDER_CREATED_ACTION,
            {
                "order_id": order.id,
                "tracking_number": order.tracking_number,
                "branch_id": order.branch_id,
                "client_id": order.client_id,
            },
        )
        log.info("order.created", order_id=str(order.id))
        return order

    def attempt_transition(
        self,
        order: Order,
        target_status: Any,
        actor: ActorContext,
        note: Optional[str] = "",
        branch_choice: Optional[Any] = None,
    ) -> Order:
        """Move *order* to *target_status* on behalf of *actor*.

        *order* is the snapshot the actor is looking at; its ``version`` is
        the one the change is conditioned on.

        Steps:
        1. Parse current and target status.
        2. Evaluate the role policy.
        3. Check preconditions: a reason for ``problem``, a destination
           branch for ``arrived_branch``.
        4. Conditionally update status (and branch) if the version still
           matches, bumping the version by one.
        5. Append the history entry.
        6. Record the audit entry.

        Raises:
            UnknownStatus: either status is not one of the known values.
            IllegalTransition: the table does not allow the move.
            RoleNotPermitted: the actor's role does not own the target.
            BranchMismatch: a branch worker readied or issued another branch's order.
            MissingReason: ``problem`` without a note.
            MissingBranch: ``arrived_branch`` without a destination.
            BranchNotFound: the destination branch does not exist.
            StaleVersion: the order was changed since the snapshot.
        """
        current = parse_status(order.status)
        target = parse_status(target_status)
        expected_version = order.version

        log = logger.bind(
            order_id=str(order.id),
            actor_id=actor.id,
            role=actor.role,
            old_status=current.value,
            new_status=target.value,
            expected_version=expected_version,
        )

        try:
            authorize_transition(
                actor.role,
                current,
                target,
                actor_branch_id=actor.branch_id,
                order_branch_id=order.branch_id,
            )
        except OrderError as exc:
            log.info("order.transition_rejected", reason=type(exc).__name__)
            raise

        note = note or ""
        if target == OrderStatus.PROBLEM and not note.strip():
            raise MissingReason("A reason is required to flag a problem.")

        new_branch_id = None
        if target == OrderStatus.ARRIVED_BRANCH:
            new_branch_id = self._resolve_destination_branch(actor, branch_choice)

        # Compare-and-set; the version check happens in the UPDATE itself.
        if not self._order_repo.conditional_update_status(
            order.id, expected_version, target, new_branch_id
        ):
            log.warning("order.stale_version")
            raise StaleVersion(
                "The order was modified by someone else. Reload it and try again."
            )

        try:
            self._order_repo.add_history(
                order.id, target, changed_by_id=actor.id, note=note or None
            )
        except DatabaseError:
            log.exception("order.history_append_failed")

        branch_id = new_branch_id if new_branch_id is not None else order.branch_id
        self._audit.record(
            actor.id,
            ORDER_STATUS_UPDATE_ACTION,
            {
                "order_id": order.id,
                "tracking_number": order.tracking_number,
                "old_status": current.value,
                "new_status": target.value,
                "note": note or None,
                "branch_id": branch_id,
            },
        )
        log.info("order.status_changed", new_version=expected_version + 1)

        refreshed = self._order_repo.get_by_id(str(order.id))
        if refreshed is None:
            raise OrderNotFound(f"Order {order.id} not found.")
        return refreshed

    def transition_order(
        self,
        order_id: str,
        target_status: Any,
        expected_version: int,
        actor: ActorContext,
        note: Optional[str] = "",
        branch_choice: Optional[Any] = None,
    ) -> Order:
        """Load the order and run ``attempt_transition`` against *expected_version*.

        The HTTP client sends the version it rendered.  If the row has
        already moved past it, the client's view of the status is outdated
        too, so the request is rejected as stale before the policy runs.
        A change landing after this check is still caught by the
        conditional update.

        Raises:
            OrderNotFound: unknown order ID.
            StaleVersion: *expected_version* is not the current version.
        """
        order = self.get_order(order_id)
        if order.version != expected_version:
            logger.warning(
                "order.stale_version",
                order_id=str(order.id),
                expected_version=expected_version,
                current_version=order.version,
            )
            raise StaleVersion(
                "The order was modified by someone else. Reload it and try again."
            )
        return self.attempt_transition(
            order, target_status, actor, note=note, branch_choice=branch_choice
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Raises ``OrderNotFound`` for unknown or malformed IDs."""
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def get_by_tracking_number(self, tracking_number: str) -> Order:
        value = normalize_tracking_number(tracking_number)
        order = self._order_repo.get_by_tracking_number(value)
        if not order:
            raise OrderNotFound(f"Order with tracking number {value} not found.")
        return order

    def visibility_filters(self, actor: ActorContext) -> Dict[str, Any]:
        """Repository filters limiting what *actor* may see.

        Branch workers see their branch's orders plus inbound in-transit
        parcels; other roles see everything.
        """
        if actor.role == EmployeeRole.BRANCH_WORKER and actor.branch_id:
            return {"scope_branch_id": actor.branch_id}
        return {}

    def list_orders(
        self, actor: ActorContext, filters: Optional[Dict[str, Any]] = None
    ) -> List[Order]:
        return self._order_repo.list({**(filters or {}), **self.visibility_filters(actor)})

    def status_summary(self, actor: ActorContext) -> Dict[str, int]:
        """Order count per status (all statuses present, zero-filled)."""
        scope = self.visibility_filters(actor)
        return self._order_repo.status_counts(branch_id=scope.get("scope_branch_id"))

    def available_actions(self, order: Order, actor: ActorContext) -> List[OrderStatus]:
        return get_available_actions(
            actor.role,
            order.status,
            actor_branch_id=actor.branch_id,
            order_branch_id=order.branch_id,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_destination_branch(
        self, actor: ActorContext, branch_choice: Optional[Any]
    ) -> str:
        """The chosen branch, else the acting branch worker's own branch."""
        if branch_choice is not None:
            branch_id = str(branch_choice)
        elif actor.role == EmployeeRole.BRANCH_WORKER and actor.branch_id:
            branch_id = actor.branch_id
        else:
            raise MissingBranch("A destination branch is required.")

        if not self._branch_repo.exists(branch_id):
            raise BranchNotFound(f"Branch {branch_id} not found.")
        return branch_id
