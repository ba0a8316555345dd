# apps/ecommerce/views/products.py

import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, status, viewsets
from rest_framework.response import Response

from apps.auth.permissions import IsAdminRoleOrReadOnly
from ..filters import ProductFilter
from ..models import Product
from ..serializers import ProductSerializer

logger = logging.getLogger(__name__)


class ProductViewSet(viewsets.ModelViewSet):
    """
    Public catalogue; writes are restricted to admins.

    Supports ``category``, ``min_price``, ``max_price`` and ``in_stock``
    filters plus ``search`` and ``ordering`` (price, created_at, title).
    """
    queryset = Product.objects.prefetch_related('images').all()
    serializer_class = ProductSerializer
    permission_classes = [IsAdminRoleOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = ProductFilter
    search_fields = ['title', 'description', 'category']
    ordering_fields = ['price', 'created_at', 'title']
    ordering = ['-created_at']

    def perform_create(self, serializer):
        product = serializer.save()
        logger.info(f"Admin {self.request.user.id} created product {product.id}")

    def perform_update(self, serializer):
        product = serializer.save()
        logger.info(f"Admin {self.request.user.id} updated product {product.id}")

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        product_id = product.id
        product.delete()
        logger.info(f"Admin {request.user.id} deleted product {product_id}")
        return Response({'message': 'Product deleted successfully'}, status=status.HTTP_200_OK)
