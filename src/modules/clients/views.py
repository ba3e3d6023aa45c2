"""Client API views (read-only for employees)."""

from __future__ import annotations

from rest_framework import status
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.clients.exceptions import ClientNotFound
from modules.clients.models import Client
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.clients.serializers import ClientSerializer
from modules.clients.services import ClientService
from modules.core.exceptions import error_response
from modules.employees.permissions import IsEmployee


class ClientViewSet(ListModelMixin, GenericViewSet):
    queryset = Client.objects.all()
    serializer_class = ClientSerializer
    permission_classes = [IsEmployee]
    filter_backends = [SearchFilter, OrderingFilter]
    search_fields = ["name", "phone", "client_code"]
    ordering_fields = ["created_at", "client_code", "name"]
    ordering = ["-created_at", "-id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ClientService(repository=ClientDjangoRepository())

    def get_queryset(self):
        return self._service.list_clients()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/clients/{pk}/"""
        try:
            client = self._service.get_client(str(pk))
        except ClientNotFound:
            return error_response(
                "client_not_found", "Client not found.", status.HTTP_404_NOT_FOUND
            )
        return Response(ClientSerializer(client).data)
