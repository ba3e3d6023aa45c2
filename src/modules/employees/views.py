"""Employee API views.

Employee management is restricted to administrators.  ``/api/v1/me``
lets any employee read their own actor context (role and branch), which
the front-end uses to decide which screens to show.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from modules.branches.exceptions import BranchNotFound
from modules.branches.repositories.django_repository import BranchDjangoRepository
from modules.core.exceptions import error_response
from modules.employees.dtos import CreateEmployeeDTO
from modules.employees.exceptions import EmployeeAlreadyExists, EmployeeNotFound
from modules.employees.models import Employee
from modules.employees.permissions import (
    IsAdminEmployee,
    IsEmployee,
    get_request_actor,
)
from modules.employees.repositories.django_repository import EmployeeDjangoRepository
from modules.employees.serializers import (
    ActorSerializer,
    CreateEmployeeSerializer,
    EmployeeSerializer,
)
from modules.employees.services import EmployeeService


def _employee_service() -> EmployeeService:
    return EmployeeService(
        employee_repository=EmployeeDjangoRepository(),
        branch_repository=BranchDjangoRepository(),
    )


class EmployeeViewSet(ListModelMixin, GenericViewSet):
    queryset = Employee.objects.alive()
    serializer_class = EmployeeSerializer
    permission_classes = [IsAdminEmployee]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _employee_service()

    def get_queryset(self):
        return self._service.list_employees()

    def create(self, request: Request) -> Response:
        """POST /api/v1/employees/"""
        serializer = CreateEmployeeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = CreateEmployeeDTO(**serializer.validated_data)
        except ValueError as exc:
            return error_response("invalid", str(exc))

        try:
            employee = self._service.create_employee(dto)
        except EmployeeAlreadyExists as exc:
            return error_response(
                "employee_already_exists", str(exc), status.HTTP_409_CONFLICT
            )
        except BranchNotFound as exc:
            return error_response(
                "branch_not_found", str(exc), status.HTTP_404_NOT_FOUND
            )
        return Response(
            EmployeeSerializer(employee).data, status=status.HTTP_201_CREATED
        )

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/employees/{pk}/ deactivates the employee."""
        if pk == get_request_actor(request).id:
            return error_response(
                "cannot_deactivate_self", "Administrators cannot deactivate themselves."
            )
        try:
            self._service.deactivate_employee(str(pk))
        except EmployeeNotFound:
            return error_response(
                "employee_not_found", "Employee not found.", status.HTTP_404_NOT_FOUND
            )
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(APIView):
    """Current actor: ``{id, role, branch_id}``."""

    permission_classes = [IsEmployee]

    def get(self, request: Request) -> Response:
        actor = get_request_actor(request)
        return Response(ActorSerializer(actor).data)
