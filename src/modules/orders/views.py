"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.  Read endpoints
translate domain exceptions into HTTP status codes.  The two workflow
endpoints always answer 200 with the workflow result: ``success`` carries
the boolean outcome and ``reason`` says why it failed.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.catalog.repositories.django_repository import CatalogDjangoRepository
from modules.core.authorization import AccessDenied, UserAuthorizationContext
from modules.orders.dtos import AddToOrderDTO, WorkflowResult
from modules.orders.exceptions import OrderNotFound
from modules.orders.gateways import HttpConfirmationGateway
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    AddItemsSerializer,
    OrderItemSerializer,
    OrderSerializer,
    WorkflowResultSerializer,
)
from modules.orders.services import OrderService


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).  All ORM access
    goes through the service/repository layer.
    """

    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            catalog_repository=CatalogDjangoRepository(),
            confirmation_gateway=HttpConfirmationGateway(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        self.throttle_scope = "order_confirmation" if self.action == "confirm" else None
        return super().get_throttles()

    def retrieve(self, request: Request, pk: str = None) -> Response:
        """GET /api/v1/orders/{id}/"""
        try:
            order = self._service.get_order(pk, self._auth(request))
        except AccessDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except OrderNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["get"])
    def lines(self, request: Request, pk: str = None) -> Response:
        """GET /api/v1/orders/{id}/lines/"""
        try:
            items = self._service.list_order_lines(pk, self._auth(request))
        except AccessDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except OrderNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(OrderItemSerializer(items, many=True).data)

    @action(detail=True, methods=["post"], url_path="add-items")
    def add_items(self, request: Request, pk: str = None) -> Response:
        """POST /api/v1/orders/{id}/add-items/"""
        serializer = AddItemsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = AddToOrderDTO(
            entry_ids=tuple(entry["id"] for entry in serializer.validated_data["entries"])
        )
        result = self._service.add_to_order_with_result(dto, pk, self._auth(request))
        return self._result_response(result)

    @action(detail=True, methods=["post"])
    def confirm(self, request: Request, pk: str = None) -> Response:
        """POST /api/v1/orders/{id}/confirm/"""
        result = self._service.confirm_order_with_result(pk, self._auth(request))
        return self._result_response(result)

    @staticmethod
    def _auth(request: Request) -> UserAuthorizationContext:
        return UserAuthorizationContext(request.user)

    @staticmethod
    def _result_response(result: WorkflowResult) -> Response:
        data = {"success": result.success, **result.model_dump(mode="json")}
        return Response(WorkflowResultSerializer(data).data, status=status.HTTP_200_OK)
