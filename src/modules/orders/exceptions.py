"""Order domain exceptions.

Raised by the transition table, the role policy and the Service Layer.
Each carries a stable machine ``code`` that the API layer returns next to
the human-readable message, so the UI can show the precise reason.
"""

from __future__ import annotations


class OrderError(Exception):
    """Base class for order-domain rejections."""

    code = "order_error"


class OrderNotFound(OrderError):
    """The requested order does not exist."""

    code = "order_not_found"


class UnknownStatus(OrderError):
    """A status value outside the ten known statuses."""

    code = "unknown_status"


class IllegalTransition(OrderError):
    """The target is not reachable from the current status."""

    code = "illegal_transition"


class RoleNotPermitted(OrderError):
    """The actor's role forbids this (structurally legal) transition."""

    code = "role_not_permitted"


class BranchMismatch(OrderError):
    """A branch worker acted on an order outside their branch."""

    code = "branch_mismatch"


class MissingReason(OrderError):
    """Flagging a problem requires a non-empty note."""

    code = "missing_reason"


class MissingBranch(OrderError):
    """Arrival at a branch requires a destination branch."""

    code = "missing_branch"


class StaleVersion(OrderError):
    """Another writer advanced the order since the actor loaded it.

    Re-fetch the order and retry explicitly; never retry blindly.
    """

    code = "stale_version"


class DuplicateTrackingNumber(OrderError):
    """An order with the same tracking number already exists."""

    code = "duplicate_tracking_number"
