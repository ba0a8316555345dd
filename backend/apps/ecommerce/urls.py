# apps/ecommerce/urls.py

"""
URL configuration for the storefront
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import cart, checkout, orders, products
from .webhooks.stripe import StripeWebhookView

app_name = 'ecommerce'

# API Router for DRF ViewSets
router = DefaultRouter()
router.register('products', products.ProductViewSet, basename='products')

urlpatterns = [
    # Catalogue
    path('', include(router.urls)),

    # Cart
    path('cart/', cart.CartView.as_view(), name='cart'),
    path('cart/items/<int:product_id>/', cart.CartItemView.as_view(), name='cart_item'),
    path('cart/merge/', cart.MergeCartView.as_view(), name='cart_merge'),

    # Checkout and payment events
    path('checkout/', checkout.CheckoutView.as_view(), name='checkout'),
    path('webhooks/stripe/', StripeWebhookView.as_view(), name='stripe_webhook'),

    # Orders
    path('orders/', orders.OrderHistoryView.as_view(), name='order_list'),
    path('orders/<int:pk>/', orders.OrderDetailView.as_view(), name='order_detail'),
    path('admin/orders/', orders.AdminOrderListView.as_view(), name='admin_order_list'),
    path('admin/orders/<int:pk>/', orders.AdminOrderDetailView.as_view(), name='admin_order_detail'),
]
