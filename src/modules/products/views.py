"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes.  Generic exceptions propagate.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response, pydantic_messages
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductNotFound
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer, ProductWriteSerializer
from modules.products.services import ProductService

_UPDATE_FIELDS = ("name", "category", "description", "price", "quantity_stock")

_NOT_FOUND = OpenApiResponse(description="Produto não encontrado")
_INVALID = OpenApiResponse(description="Dados inválidos")


@extend_schema_view(
    list=extend_schema(summary="Listar produtos", tags=["Products"]),
    retrieve=extend_schema(
        summary="Buscar produto por ID",
        tags=["Products"],
        responses={200: ProductSerializer, 404: _NOT_FOUND},
    ),
    create=extend_schema(
        summary="Criar produto",
        tags=["Products"],
        request=ProductWriteSerializer,
        responses={201: ProductSerializer, 400: _INVALID},
    ),
    partial_update=extend_schema(
        summary="Atualizar produto",
        tags=["Products"],
        request=ProductWriteSerializer(partial=True),
        responses={200: ProductSerializer, 400: _INVALID, 404: _NOT_FOUND},
    ),
    destroy=extend_schema(
        summary="Remover produto",
        tags=["Products"],
        responses={204: None, 404: _NOT_FOUND},
    ),
)
class ProductViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    filterset_class = ProductFilter
    ordering_fields = ["name", "price", "quantity_stock", "created_at"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    queryset = Product.objects.alive()
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_products()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /product/{pk}"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound as exc:
            return error_response(status.HTTP_404_NOT_FOUND, str(exc))
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /product"""
        data = request.data
        if not isinstance(data, dict):
            return error_response(
                status.HTTP_400_BAD_REQUEST, "Request body must be a JSON object."
            )

        try:
            dto = CreateProductDTO(
                name=data.get("name", ""),
                category=data.get("category", ""),
                description=data.get("description") or "",
                price=data.get("price"),
                quantity_stock=data.get("quantity_stock", 0),
            )
        except PydanticValidationError as exc:
            return error_response(status.HTTP_400_BAD_REQUEST, pydantic_messages(exc))

        product = self._service.create_product(dto)
        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /product/{pk}"""
        data = request.data
        if not isinstance(data, dict):
            return error_response(
                status.HTTP_400_BAD_REQUEST, "Request body must be a JSON object."
            )

        try:
            dto = UpdateProductDTO(**{field: data.get(field) for field in _UPDATE_FIELDS})
        except PydanticValidationError as exc:
            return error_response(status.HTTP_400_BAD_REQUEST, pydantic_messages(exc))

        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound as exc:
            return error_response(status.HTTP_404_NOT_FOUND, str(exc))

        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /product/{pk}"""
        try:
            self._service.delete_product(pk)
        except ProductNotFound as exc:
            return error_response(status.HTTP_404_NOT_FOUND, str(exc))
        return Response(status=status.HTTP_204_NO_CONTENT)
