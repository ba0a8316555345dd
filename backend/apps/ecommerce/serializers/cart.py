"""
Cart serializers
"""

from django.conf import settings
from rest_framework import serializers

from ..models import CartItem


class CartItemSerializer(serializers.ModelSerializer):
    """Cart line priced from the current catalogue"""
    product_id = serializers.IntegerField(source='product.id', read_only=True)
    title = serializers.CharField(source='product.title', read_only=True)
    unit_price = serializers.IntegerField(source='product.price', read_only=True)
    hero_image = serializers.CharField(source='product.hero_image', read_only=True)
    line_total = serializers.ReadOnlyField()

    class Meta:
        model = CartItem
        fields = [
            'id', 'product_id', 'title', 'unit_price', 'hero_image',
            'quantity', 'line_total', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class AddToCartSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemSerializer(serializers.Serializer):
    # Zero or less removes the line
    quantity = serializers.IntegerField()


class MergeCartItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class MergeCartSerializer(serializers.Serializer):
    items = MergeCartItemSerializer(many=True, allow_empty=True)


def cart_payload(summary):
    """Response body for every cart endpoint"""
    return {
        'items': CartItemSerializer(summary['items'], many=True).data,
        'item_count': summary['item_count'],
        'subtotal': summary['subtotal'],
        'currency': summary.get('currency', settings.STORE_CURRENCY),
    }
