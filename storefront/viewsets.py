"""
Django REST Framework ViewSets for the storefront API.

Reads are public; every write goes through the catalog services and requires
a staff user.
"""

import logging
import math

from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response

from .models import Product
from .serializers import (
    ProductSerializer,
    ProductWriteSerializer,
    ReorderSerializer,
    VariantSerializer,
)
from .services.catalog import (
    EmptyUpdateError,
    create_product,
    delete_product,
    move_product,
    update_product,
)

logger = logging.getLogger(__name__)


class ProductPagination(PageNumberPagination):
    """
    `?page=&limit=` pagination answering `{products, pagination}`.

    A page past the end is an empty list, not a 404.
    """
    page_size = 20
    page_size_query_param = 'limit'

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.limit = self.get_page_size(request)
        try:
            self.page_number = max(int(request.query_params.get(self.page_query_param, 1)), 1)
        except (TypeError, ValueError):
            self.page_number = 1
        self.total = queryset.count()
        offset = (self.page_number - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data):
        return Response({
            'products': data,
            'pagination': {
                'page': self.page_number,
                'limit': self.limit,
                'total': self.total,
                'pages': math.ceil(self.total / self.limit),
            },
        })


def _storage_error(message, exc):
    logger.error("%s: %s", message, exc, exc_info=exc)
    return Response({'error': message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class ProductViewSet(viewsets.GenericViewSet):
    """
    ViewSet для товаров.

    Предоставляет:
        - list: GET /api/products/?page=&limit= - список в порядке показа
        - retrieve: GET /api/products/{id}/
        - by_slug: GET /api/products/slug/{slug}/
        - variants: GET /api/products/{id}/variants/
        - create: POST /api/products/ (admin)
        - partial_update: PATCH /api/products/{id}/ (admin)
        - destroy: DELETE /api/products/{id}/ (admin)
        - reorder: POST /api/products/reorder/ (admin)
    """
    queryset = Product.objects.order_by('-display_order', '-created_at')
    serializer_class = ProductSerializer
    pagination_class = ProductPagination

    ADMIN_ACTIONS = ('create', 'partial_update', 'destroy', 'reorder')

    def get_permissions(self):
        if self.action in self.ADMIN_ACTIONS:
            return [IsAdminUser()]
        return [AllowAny()]

    def list(self, request):
        page = self.paginate_queryset(self.get_queryset())
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request, pk=None):
        return Response(self.get_serializer(self.get_object()).data)

    @action(detail=False, methods=['get'], url_path=r'slug/(?P<slug>[^/.]+)')
    def by_slug(self, request, slug=None):
        product = get_object_or_404(Product, slug=slug)
        return Response(self.get_serializer(product).data)

    @action(detail=True, methods=['get'])
    def variants(self, request, pk=None):
        """
        Варианты товара с данными цвета.

        Order: display_order, size, colour name.
        """
        product = self.get_object()
        variants = (
            product.variants.select_related('color')
            .order_by('display_order', 'size', 'color__name')
        )
        return Response({'variants': VariantSerializer(variants, many=True).data})

    def create(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            product = create_product(serializer.validated_data)
        except DatabaseError as exc:
            return _storage_error("Failed to create product", exc)
        return Response(self.get_serializer(product).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        product = self.get_object()
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            product = update_product(product, serializer.validated_data)
        except EmptyUpdateError as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except DatabaseError as exc:
            return _storage_error("Failed to update product", exc)
        product.refresh_from_db()
        return Response(self.get_serializer(product).data)

    def destroy(self, request, pk=None):
        product = self.get_object()
        try:
            delete_product(product)
        except DatabaseError as exc:
            return _storage_error("Failed to delete product", exc)
        return Response({'ok': True})

    @action(detail=False, methods=['post'])
    def reorder(self, request):
        """
        Move a product one step up or down.

        Request Body:
            - productId: ID товара
            - direction: "up" | "down"

        Returns {"ok": true} also when the product is already at the edge.
        """
        serializer = ReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            move_product(data['product_id'], data['direction'])
        except Product.DoesNotExist:
            return Response({'error': 'Product not found'}, status=status.HTTP_404_NOT_FOUND)
        except DatabaseError as exc:
            return _storage_error("Failed to reorder products", exc)
        return Response({'ok': True})
