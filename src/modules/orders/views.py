"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes.  Generic exceptions propagate.
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO, UpdateOrderDTO
from modules.orders.exceptions import (
    InsufficientStock,
    OrderDeletionNotAllowed,
    OrderNotFound,
    ProductNotFound,
)
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderSerializer,
    UpdateOrderSerializer,
)
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository

_NOT_FOUND = OpenApiResponse(description="Pedido não encontrado")


@extend_schema_view(
    create=extend_schema(
        summary="Criar pedido",
        description="Valida disponibilidade de estoque antes de criar o pedido.",
        request=CreateOrderSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(description="Dados inválidos ou estoque insuficiente"),
            404: OpenApiResponse(description="Produto não encontrado"),
        },
    ),
    list=extend_schema(
        summary="Listar pedidos",
        parameters=[OpenApiParameter("status", enum=OrderStatus.values)],
        responses={200: OrderSerializer(many=True)},
    ),
    retrieve=extend_schema(
        summary="Buscar pedido por ID",
        responses={200: OrderSerializer, 404: _NOT_FOUND},
    ),
    partial_update=extend_schema(
        summary="Atualizar status do pedido",
        description=(
            "CONCLUIDO baixa o estoque; CANCELADO de um pedido concluído "
            "devolve o estoque."
        ),
        request=UpdateOrderSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(description="Estoque insuficiente"),
            404: _NOT_FOUND,
        },
    ),
    destroy=extend_schema(
        summary="Remover pedido (bloqueado)",
        responses={
            400: OpenApiResponse(description="Operação não permitida"),
            404: _NOT_FOUND,
        },
    ),
)
class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    serializer_class = OrderSerializer
    queryset = Order.objects.none()  # schema introspection only

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /order"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        dto = CreateOrderDTO(
            products=[
                CreateOrderItemDTO(
                    product_id=item["productId"],
                    quantity=item["quantity"],
                )
                for item in create_serializer.validated_data["products"]
            ]
        )

        try:
            order = self._service.create_order(dto)
        except ProductNotFound as exc:
            return error_response(status.HTTP_404_NOT_FOUND, str(exc))
        except InsufficientStock as exc:
            return error_response(status.HTTP_400_BAD_REQUEST, str(exc))

        out = OrderSerializer(order)
        return Response(out.data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /order

        Optional ``?status=`` narrows the result to one status.
        """
        filters = {}
        status_value = request.query_params.get("status")
        if status_value:
            if status_value not in OrderStatus.values:
                return error_response(
                    status.HTTP_400_BAD_REQUEST,
                    [f"status: \"{status_value}\" is not a valid choice."],
                )
            filters["status"] = status_value

        orders = self._service.list_orders(filters)
        return Response(OrderSerializer(orders, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /order/{pk}"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound as exc:
            return error_response(status.HTTP_404_NOT_FOUND, str(exc))
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /order/{pk}

        Without ``status`` the order is returned unchanged.
        """
        update_serializer = UpdateOrderSerializer(data=request.data)
        update_serializer.is_valid(raise_exception=True)

        dto = UpdateOrderDTO(status=update_serializer.validated_data.get("status"))

        try:
            order = self._service.update_order(pk, dto)
        except OrderNotFound as exc:
            return error_response(status.HTTP_404_NOT_FOUND, str(exc))
        except ProductNotFound as exc:
            return error_response(status.HTTP_404_NOT_FOUND, str(exc))
        except InsufficientStock as exc:
            return error_response(status.HTTP_400_BAD_REQUEST, str(exc))

        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Delete (always blocked)
    # ------------------------------------------------------------------

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /order/{pk}"""
        try:
            self._service.remove_order(pk)
        except OrderNotFound as exc:
            return error_response(status.HTTP_404_NOT_FOUND, str(exc))
        except OrderDeletionNotAllowed as exc:
            return error_response(status.HTTP_400_BAD_REQUEST, str(exc))
