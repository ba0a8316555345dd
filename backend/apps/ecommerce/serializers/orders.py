"""
Order and checkout serializers
"""

from rest_framework import serializers

from ..models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    line_total = serializers.ReadOnlyField()

    class Meta:
        model = OrderItem
        fields = ['id', 'product', 'title', 'quantity', 'unit_price', 'line_total']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order as shown in the customer's order history"""
    reference = serializers.ReadOnlyField()
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'reference', 'status', 'total', 'amount_paid', 'currency',
            'shipping_address', 'tracking_number', 'tracking_url', 'items',
            'paid_at', 'shipped_at', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class AdminOrderSerializer(OrderSerializer):
    """Order with the customer and payment references for the back office"""
    customer = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['customer', 'stripe_session_id', 'payment_intent_id']
        read_only_fields = fields

    def get_customer(self, obj):
        return {
            'id': obj.user_id,
            'email': obj.user.email,
            'name': obj.user.full_name,
        }


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices)
    tracking_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    tracking_url = serializers.URLField(max_length=500, required=False, allow_blank=True)


class CheckoutItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class CheckoutSerializer(serializers.Serializer):
    """Checkout request; without ``items`` the server cart is used"""
    items = CheckoutItemSerializer(many=True, required=False)
    address_id = serializers.IntegerField(min_value=1, required=False)
