# apps/ecommerce/admin.py

"""
Django admin configuration for storefront models
"""

from django.contrib import admin

from apps.core.utils import format_minor_units
from .models import CartItem, Order, OrderItem, Product, ProductImage


# ============================================================================
# PRODUCTS ADMIN
# ============================================================================

class ProductImageInline(admin.TabularInline):
    """Inline for product gallery media"""
    model = ProductImage
    extra = 1
    fields = ('url', 'media_type', 'order')


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'price_display', 'stock', 'created_at')
    list_filter = ('category',)
    search_fields = ('title', 'description')
    inlines = [ProductImageInline]

    def price_display(self, obj):
        return format_minor_units(obj.price)
    price_display.short_description = 'Price'


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ('user', 'product', 'quantity', 'updated_at')
    search_fields = ('user__email', 'product__title')
    raw_id_fields = ('user', 'product')


# ============================================================================
# ORDERS ADMIN
# ============================================================================

class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ('product', 'title', 'quantity', 'unit_price')
    readonly_fields = fields
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for Stripe-backed orders"""

    list_display = ('reference', 'user', 'status', 'total_display', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('user__email', 'stripe_session_id', 'tracking_number')
    readonly_fields = (
        'stripe_session_id', 'payment_intent_id', 'total', 'amount_paid',
        'currency', 'shipping_address', 'paid_at', 'created_at', 'updated_at',
    )
    inlines = [OrderItemInline]

    fieldsets = (
        ('Order Information', {
            'fields': ('user', 'status', 'created_at', 'updated_at')
        }),
        ('Financial Summary', {
            'fields': ('total', 'amount_paid', 'currency', 'paid_at')
        }),
        ('Payment Information', {
            'fields': ('stripe_session_id', 'payment_intent_id')
        }),
        ('Shipping Information', {
            'fields': ('address', 'shipping_address', 'tracking_number', 'tracking_url', 'shipped_at')
        }),
    )

    def total_display(self, obj):
        return format_minor_units(obj.total, obj.currency)
    total_display.short_description = 'Total'
