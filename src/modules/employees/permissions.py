"""DRF permissions and actor resolution for back-office endpoints.

A request is allowed when the JWT user owns an active ``Employee``
profile.  The resolved ``ActorContext`` is cached on the request so views
can thread it explicitly into service calls.
"""

from __future__ import annotations

from rest_framework.permissions import BasePermission
from rest_framework.request import Request

from modules.branches.repositories.django_repository import BranchDjangoRepository
from modules.employees.actor import ActorContext
from modules.employees.constants import EmployeeRole
from modules.employees.exceptions import NotAnEmployee
from modules.employees.repositories.django_repository import EmployeeDjangoRepository
from modules.employees.services import EmployeeService

_ACTOR_ATTR = "_employee_actor"


def get_request_actor(request: Request) -> ActorContext:
    """Return the acting employee for *request*.

    Raises:
        NotAnEmployee: the user is anonymous or has no active profile.
    """
    actor = getattr(request, _ACTOR_ATTR, None)
    if actor is None:
        service = EmployeeService(
            employee_repository=EmployeeDjangoRepository(),
            branch_repository=BranchDjangoRepository(),
        )
        actor = service.current_actor(request.user)
        setattr(request, _ACTOR_ATTR, actor)
    return actor


class IsEmployee(BasePermission):
    message = "An active employee profile is required."

    def has_permission(self, request, view) -> bool:
        if not (request.user and request.user.is_authenticated):
            return False
        try:
            get_request_actor(request)
        except NotAnEmployee:
            return False
        return True


class IsAdminEmployee(IsEmployee):
    message = "Administrator role required."

    def has_permission(self, request, view) -> bool:
        if not super().has_permission(request, view):
            return False
        return get_request_actor(request).role == EmployeeRole.ADMIN
