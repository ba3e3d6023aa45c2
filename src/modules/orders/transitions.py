"""Status taxonomy helpers over the static transition table.

Pure functions, no I/O.  Everything that decides *which* status may follow
which goes through here, so the table in ``constants`` stays the single
source of truth.
"""

from __future__ import annotations

from typing import Any

from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus
from modules.orders.exceptions import UnknownStatus


def parse_status(value: Any) -> OrderStatus:
    """Coerce *value* to an ``OrderStatus``.

    Raises:
        UnknownStatus: *value* is not one of the ten known statuses.
    """
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise UnknownStatus(f"Unknown order status: {value!r}.") from None


def allowed_targets(status: Any) -> frozenset[str]:
    return VALID_TRANSITIONS[parse_status(status)]


def is_structurally_legal(current: Any, target: Any) -> bool:
    return parse_status(target) in allowed_targets(current)


def is_terminal(status: Any) -> bool:
    return parse_status(status) in TERMINAL_STATES
