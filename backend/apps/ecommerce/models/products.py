# apps/ecommerce/models/products.py

from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import TimeStampedModel


class Product(TimeStampedModel):
    """
    Catalogue entry.

    Prices are integers in the store currency's minor units (cents).
    Stock is shown to shoppers but never reserved or decremented.
    """
    title = models.CharField(max_length=200)
    description = models.TextField()
    price = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    category = models.CharField(max_length=100, db_index=True)
    stock = models.PositiveIntegerField(default=0)

    hero_image = models.URLField(max_length=500, blank=True)
    model_url = models.URLField(max_length=500, blank=True, help_text="3D model shown on the product page")

    class Meta:
        db_table = 'ecommerce_products'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['category', 'price']),
        ]

    def __str__(self):
        return self.title

    @property
    def in_stock(self):
        return self.stock > 0


class ProductImage(models.Model):
    """Gallery media for a product"""

    class MediaType(models.TextChoices):
        IMAGE = 'image', 'Image'
        VIDEO = 'video', 'Video'

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='images'
    )
    url = models.URLField(max_length=500)
    media_type = models.CharField(max_length=10, choices=MediaType.choices, default=MediaType.IMAGE)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'ecommerce_product_images'
        ordering = ['product', 'order']

    def __str__(self):
        return f"{self.get_media_type_display()} for {self.product.title}"
