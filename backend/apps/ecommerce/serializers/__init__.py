# apps/ecommerce/serializers/__init__.py

from .products import ProductImageSerializer, ProductSerializer
from .cart import (
    AddToCartSerializer, CartItemSerializer, MergeCartSerializer, UpdateCartItemSerializer,
)
from .orders import (
    AdminOrderSerializer, CheckoutSerializer, OrderItemSerializer, OrderSerializer,
    OrderStatusUpdateSerializer,
)

__all__ = [
    'ProductImageSerializer', 'ProductSerializer',
    'AddToCartSerializer', 'CartItemSerializer', 'MergeCartSerializer', 'UpdateCartItemSerializer',
    'AdminOrderSerializer', 'CheckoutSerializer', 'OrderItemSerializer', 'OrderSerializer',
    'OrderStatusUpdateSerializer',
]
