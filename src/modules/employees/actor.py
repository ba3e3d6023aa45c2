"""The acting employee, passed explicitly into order operations.

Order policies and the transition executor never read the authenticated
user from request or global state; the HTTP layer resolves it once and
hands an ``ActorContext`` down.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from modules.employees.models import Employee


@dataclass(frozen=True)
class ActorContext:
    id: str
    role: str
    branch_id: Optional[str] = None

    @classmethod
    def from_employee(cls, employee: Employee) -> ActorContext:
        return cls(
            id=str(employee.id),
            role=str(employee.role),
            branch_id=str(employee.branch_id) if employee.branch_id else None,
        )
