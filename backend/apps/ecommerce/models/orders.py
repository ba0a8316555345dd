# apps/ecommerce/models/orders.py

from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedModel


class Order(TimeStampedModel):
    """
    A completed (or pending) Stripe checkout.

    Orders are only ever created from payment processor events, keyed on
    the checkout session id so a redelivered event cannot create a second
    order. Line prices are frozen at purchase time in OrderItem.
    """

    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        PAID = 'PAID', 'Paid'
        SHIPPED = 'SHIPPED', 'Shipped'
        DELIVERED = 'DELIVERED', 'Delivered'
        CANCELLED = 'CANCELLED', 'Cancelled'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='orders'
    )
    address = models.ForeignKey(
        'custom_auth.Address',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )
    # Copy of the address as it was at checkout
    shipping_address = models.JSONField(default=dict, blank=True)

    total = models.PositiveIntegerField(default=0)
    amount_paid = models.PositiveIntegerField(default=0)
    currency = models.CharField(max_length=3, default='usd')

    stripe_session_id = models.CharField(max_length=255, unique=True)
    payment_intent_id = models.CharField(max_length=255, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)

    tracking_number = models.CharField(max_length=100, blank=True)
    tracking_url = models.URLField(max_length=500, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    shipped_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'ecommerce_orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status']),
        ]

    def __str__(self):
        return f"Order {self.reference}"

    @property
    def reference(self):
        """Short human readable order number"""
        return f"RMF-{self.pk:06d}" if self.pk else 'RMF-PENDING'

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items.all())

    @property
    def shipping_address_lines(self):
        address = self.shipping_address or {}
        return [
            line for line in [
                address.get('line1'),
                address.get('line2'),
                f"{address.get('postal', '')} {address.get('city', '')}".strip(),
                address.get('state'),
                address.get('country'),
            ] if line
        ]


class OrderItem(models.Model):
    """Purchased line with the title and unit price frozen at payment time"""
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items'
    )
    product = models.ForeignKey(
        'ecommerce.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items'
    )
    title = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField()
    unit_price = models.PositiveIntegerField()

    class Meta:
        db_table = 'ecommerce_order_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.title}"

    @property
    def line_total(self):
        return self.unit_price * self.quantity
