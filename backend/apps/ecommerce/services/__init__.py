# apps/ecommerce/services/__init__.py

from .cart import CartService
from .checkout import CheckoutService
from .order import OrderService

__all__ = ['CartService', 'CheckoutService', 'OrderService']
