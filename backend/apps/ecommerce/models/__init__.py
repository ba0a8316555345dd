# apps/ecommerce/models/__init__.py

"""
Storefront models: catalogue, per-user carts and Stripe-backed orders
"""

from .products import Product, ProductImage
from .cart import CartItem
from .orders import Order, OrderItem

__all__ = [
    # Catalogue
    'Product', 'ProductImage',

    # Cart
    'CartItem',

    # Orders
    'Order', 'OrderItem',
]
