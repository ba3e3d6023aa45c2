"""Branch API views.

Any active employee may browse branches (the destination picker of the
``arrived_branch`` transition); only administrators register new ones.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.filters import SearchFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.branches.dtos import CreateBranchDTO
from modules.branches.exceptions import BranchAlreadyExists, BranchNotFound
from modules.branches.models import Branch
from modules.branches.repositories.django_repository import BranchDjangoRepository
from modules.branches.serializers import BranchSerializer, CreateBranchSerializer
from modules.branches.services import BranchService
from modules.core.exceptions import error_response
from modules.employees.permissions import IsAdminEmployee, IsEmployee


class BranchViewSet(GenericViewSet):
    queryset = Branch.objects.alive()
    serializer_class = BranchSerializer
    filter_backends = [SearchFilter]
    search_fields = ["name", "city", "code"]
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = BranchService(repository=BranchDjangoRepository())

    def get_permissions(self):
        if self.action == "create":
            return [IsAdminEmployee()]
        return [IsEmployee()]

    def get_queryset(self):
        return Branch.objects.alive().order_by("name")

    def list(self, request: Request) -> Response:
        """GET /api/v1/branches/"""
        queryset = self.filter_queryset(self.get_queryset())
        return Response(BranchSerializer(queryset, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/branches/{pk}/"""
        try:
            branch = self._service.get_branch(str(pk))
        except BranchNotFound:
            return error_response(
                "branch_not_found", "Branch not found.", status.HTTP_404_NOT_FOUND
            )
        return Response(BranchSerializer(branch).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/branches/"""
        serializer = CreateBranchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            dto = CreateBranchDTO(**data)
        except ValueError as exc:
            return error_response("invalid", str(exc))

        try:
            branch = self._service.create_branch(dto)
        except BranchAlreadyExists as exc:
            return error_response(
                "branch_already_exists", str(exc), status.HTTP_409_CONFLICT
            )
        return Response(BranchSerializer(branch).data, status=status.HTTP_201_CREATED)
