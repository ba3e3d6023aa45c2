"""Role authorization policy for order status transitions.

Evaluation order is fixed:

1. Admins may move any order to any status (table and branch scoping
   are bypassed).
2. Anyone may flag an order as ``problem``.
3. Otherwise the transition table must allow the target.
4. The actor's role must own the target; branch workers may only make
   parcels ready or hand them out at their own branch.

The policy reads nothing from request state: callers pass the role and
branch identifiers explicitly.
"""

from __future__ import annotations

from typing import Any, List, Optional

from modules.employees.constants import EmployeeRole
from modules.orders.constants import (
    ACTION_LABELS,
    BRANCH_SCOPED_TARGETS,
    BRANCH_WORKER_TARGETS,
    CHINA_WORKER_TARGETS,
    DEFAULT_STATUS_COLOR,
    STATUS_COLORS,
    OrderStatus,
)
from modules.orders.exceptions import (
    BranchMismatch,
    IllegalTransition,
    OrderError,
    RoleNotPermitted,
)
from modules.orders.transitions import allowed_targets, parse_status


def authorize_transition(
    role: str,
    current: Any,
    target: Any,
    actor_branch_id: Optional[Any] = None,
    order_branch_id: Optional[Any] = None,
) -> None:
    """Reject the transition for this role, or return ``None``.

    Raises:
        UnknownStatus: *current* or *target* is not a known status.
        IllegalTransition: The table does not allow *current* -> *target*.
        RoleNotPermitted: The role does not own *target*.
        BranchMismatch: A branch worker acted on another branch's order.
    """
    current = parse_status(current)
    target = parse_status(target)

    if role == EmployeeRole.ADMIN:
        return
    if target == OrderStatus.PROBLEM:
        return
    if target not in allowed_targets(current):
        raise IllegalTransition(
            f"Cannot transition from '{current}' to '{target}'."
        )

    if role == EmployeeRole.CHINA_WORKER:
        if target in CHINA_WORKER_TARGETS:
            return
        raise RoleNotPermitted(
            f"Role '{role}' may not set status '{target}'."
        )

    if role == EmployeeRole.BRANCH_WORKER:
        if target not in BRANCH_WORKER_TARGETS:
            raise RoleNotPermitted(
                f"Role '{role}' may not set status '{target}'."
            )
        if target in BRANCH_SCOPED_TARGETS and not _same_branch(
            actor_branch_id, order_branch_id
        ):
            raise BranchMismatch("The order belongs to a different branch.")
        return

    raise RoleNotPermitted(f"Unknown role '{role}'.")


def can_transition(
    role: str,
    current: Any,
    target: Any,
    actor_branch_id: Optional[Any] = None,
    order_branch_id: Optional[Any] = None,
) -> bool:
    try:
        authorize_transition(role, current, target, actor_branch_id, order_branch_id)
    except OrderError:
        return False
    return True


def get_available_actions(
    role: str,
    current: Any,
    actor_branch_id: Optional[Any] = None,
    order_branch_id: Optional[Any] = None,
) -> List[OrderStatus]:
    """Targets from the table that this actor may pick, in enum order.

    Advisory only: the executor evaluates the policy again when the
    transition is committed.  ``problem`` and admin overrides are not
    listed because they are not part of the table.
    """
    targets = allowed_targets(current)
    return [
        status
        for status in OrderStatus
        if status in targets
        and can_transition(role, current, status, actor_branch_id, order_branch_id)
    ]


def _same_branch(actor_branch_id: Optional[Any], order_branch_id: Optional[Any]) -> bool:
    # An unassigned worker or an unassigned order never matches.
    if actor_branch_id is None or order_branch_id is None:
        return False
    return str(actor_branch_id) == str(order_branch_id)


# ---------------------------------------------------------------------------
# Presentation lookups
# ---------------------------------------------------------------------------


def status_display_name(status: Any) -> str:
    """Russian label of *status*; unknown values are echoed back unchanged."""
    try:
        return parse_status(status).label
    except OrderError:
        return str(status)


def status_color(status: Any) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def action_label(status: Any) -> str:
    return ACTION_LABELS.get(status, str(status))
