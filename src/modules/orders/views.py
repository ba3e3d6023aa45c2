"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into the standard error
format with a precise ``code``; the view never swallows generic
exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.audit.services import AuditTrail
from modules.branches.exceptions import BranchNotFound
from modules.branches.repositories.django_repository import BranchDjangoRepository
from modules.clients.exceptions import ClientNotFound
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.core.exceptions import error_response
from modules.core.pagination import StandardResultsSetPagination
from modules.employees.permissions import IsEmployee, get_request_actor
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, TransitionOrderDTO
from modules.orders.exceptions import (
    BranchMismatch,
    DuplicateTrackingNumber,
    IllegalTransition,
    MissingBranch,
    MissingReason,
    OrderError,
    OrderNotFound,
    RoleNotPermitted,
    StaleVersion,
    UnknownStatus,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.policy import action_label, status_color, status_display_name
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
    TransitionOrderSerializer,
)
from modules.orders.services import OrderService
from modules.orders.transitions import allowed_targets

ORDER_ERROR_STATUS = {
    UnknownStatus: status.HTTP_400_BAD_REQUEST,
    IllegalTransition: status.HTTP_409_CONFLICT,
    RoleNotPermitted: status.HTTP_403_FORBIDDEN,
    BranchMismatch: status.HTTP_403_FORBIDDEN,
    MissingReason: status.HTTP_400_BAD_REQUEST,
    MissingBranch: status.HTTP_400_BAD_REQUEST,
    StaleVersion: status.HTTP_409_CONFLICT,
    DuplicateTrackingNumber: status.HTTP_409_CONFLICT,
    OrderNotFound: status.HTTP_404_NOT_FOUND,
}


def order_error_response(exc: OrderError) -> Response:
    http_status = ORDER_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return error_response(exc.code, str(exc), http_status)


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: status is only ever written
    through the ``transition`` action.
    """

    queryset = Order.objects.all()
    permission_classes = [IsEmployee]
    filterset_class = OrderFilter
    search_fields = ["tracking_number", "client__name", "client__phone"]
    ordering_fields = ["created_at", "updated_at", "status", "tracking_number"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repository = OrderDjangoRepository()
        self._service = OrderService(
            order_repository=self._repository,
            branch_repository=BranchDjangoRepository(),
            client_repository=ClientDjangoRepository(),
            audit_trail=AuditTrail(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action == "transition":
            throttle_scope = "order_transition"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def get_queryset(self):
        actor = get_request_actor(self.request)
        return self._repository.queryset(self._service.visibility_filters(actor))

    def _detail_response(self, request: Request, order: Order, **kwargs) -> Response:
        actor = get_request_actor(request)
        serializer = OrderSerializer(
            order,
            context={
                "request": request,
                "available_actions": self._service.available_actions(order, actor),
            },
        )
        return Response(serializer.data, **kwargs)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            dto = CreateOrderDTO(
                tracking_number=data["tracking_number"],
                client_id=data.get("client_id"),
                branch_id=data.get("branch_id"),
            )
        except ValueError as exc:
            return error_response("invalid_tracking_number", str(exc))

        try:
            order = self._service.create_order(dto, get_request_actor(request))
        except OrderError as exc:
            return order_error_response(exc)
        except BranchNotFound as exc:
            return error_response(
                "branch_not_found", str(exc), status.HTTP_404_NOT_FOUND
            )
        except ClientNotFound as exc:
            return error_response(
                "client_not_found", str(exc), status.HTTP_404_NOT_FOUND
            )

        order = self._service.get_order(str(order.id))
        return self._detail_response(request, order, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Branch workers only see their own branch plus in-transit parcels.
        Filtering, search and ordering are handled by ``filter_backends``.
        """
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = OrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(str(pk))
        except OrderNotFound as exc:
            return order_error_response(exc)
        return self._detail_response(request, order)

    @action(detail=False, methods=["get"], url_path=r"track/(?P<tracking_number>[^/]+)")
    def track(self, request: Request, tracking_number: str | None = None) -> Response:
        """GET /api/v1/orders/track/{tracking_number}/"""
        try:
            order = self._service.get_by_tracking_number(tracking_number or "")
        except OrderNotFound as exc:
            return order_error_response(exc)
        return self._detail_response(request, order)

    @action(detail=False, methods=["get"])
    def summary(self, request: Request) -> Response:
        """GET /api/v1/orders/summary/"""
        counts = self._service.status_summary(get_request_actor(request))
        return Response(
            {
                "total": sum(counts.values()),
                "by_status": [
                    {
                        "status": value,
                        "label": status_display_name(value),
                        "color": status_color(value),
                        "count": count,
                    }
                    for value, count in counts.items()
                ],
            }
        )

    @action(detail=False, methods=["get"], pagination_class=None)
    def statuses(self, request: Request) -> Response:
        """GET /api/v1/orders/statuses/"""
        return Response(
            [
                {
                    "value": value.value,
                    "label": value.label,
                    "color": status_color(value),
                    "action_label": action_label(value),
                    "allowed_targets": [
                        target.value
                        for target in OrderStatus
                        if target in allowed_targets(value)
                    ],
                }
                for value in OrderStatus
            ]
        )

    # ------------------------------------------------------------------
    # Status transition
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def transition(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/transition/

        Body: ``{"status", "version", "note"?, "branch_id"?}``.  ``version``
        is the version the client rendered; a newer order is rejected with
        ``stale_version`` (409) and must be reloaded.
        """
        serializer = TransitionOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            dto = TransitionOrderDTO(
                status=data["status"],
                version=data["version"],
                note=data.get("note"),
                branch_id=data.get("branch_id"),
            )
        except PydanticValidationError as exc:
            raise ValidationError(
                {
                    ".".join(str(part) for part in error["loc"]): [error["msg"]]
                    for error in exc.errors()
                }
            ) from exc

        try:
            order = self._service.transition_order(
                str(pk),
                dto.status,
                dto.version,
                get_request_actor(request),
                note=dto.note or "",
                branch_choice=dto.branch_id,
            )
        except OrderError as exc:
            return order_error_response(exc)
        except BranchNotFound as exc:
            return error_response(
                "branch_not_found", str(exc), status.HTTP_404_NOT_FOUND
            )

        return self._detail_response(request, order)
