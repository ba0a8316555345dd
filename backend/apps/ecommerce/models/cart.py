# apps/ecommerce/models/cart.py

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import TimeStampedModel
from .products import Product


class CartItem(TimeStampedModel):
    """
    One product line in a user's server-side cart.

    A user has at most one line per product; adding the same product again
    increments the quantity of the existing line.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='cart_items'
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='cart_items'
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])

    class Meta:
        db_table = 'ecommerce_cart_items'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'product'], name='unique_cart_line_per_product'),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.product.title}"

    @property
    def line_total(self):
        return self.product.price * self.quantity
