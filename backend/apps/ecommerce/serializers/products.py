"""
Product serializers for the storefront catalogue
"""

from django.db import transaction
from rest_framework import serializers

from ..models import Product, ProductImage


class ProductImageSerializer(serializers.ModelSerializer):
    """Serializer for product gallery media"""

    class Meta:
        model = ProductImage
        fields = ['id', 'url', 'media_type', 'order']
        read_only_fields = ['id']


class ProductSerializer(serializers.ModelSerializer):
    """
    Catalogue product.

    ``images`` may be sent on create/update; when present it replaces the
    whole gallery.
    """
    title = serializers.CharField(min_length=3, max_length=200)
    description = serializers.CharField(min_length=10)
    price = serializers.IntegerField(min_value=1)
    category = serializers.CharField(min_length=2, max_length=100)
    stock = serializers.IntegerField(min_value=0, default=0)
    images = ProductImageSerializer(many=True, required=False)
    in_stock = serializers.ReadOnlyField()

    class Meta:
        model = Product
        fields = [
            'id', 'title', 'description', 'price', 'category', 'stock', 'in_stock',
            'hero_image', 'model_url', 'images', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    @transaction.atomic
    def create(self, validated_data):
        images = validated_data.pop('images', [])
        product = Product.objects.create(**validated_data)
        self._replace_images(product, images)
        return product

    @transaction.atomic
    def update(self, instance, validated_data):
        images = validated_data.pop('images', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        if images is not None:
            self._replace_images(instance, images)
        return instance

    def _replace_images(self, product, images):
        product.images.all().delete()
        ProductImage.objects.bulk_create([
            ProductImage(product=product, **image) for image in images
        ])
