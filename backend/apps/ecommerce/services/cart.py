"""
Cart service for the storefront
"""

from collections import OrderedDict
from typing import Dict, Iterable, List

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.core.exceptions import NotFound, ValidationFailed
from .base import BaseEcommerceService
from ..exceptions import ProductNotFound
from ..models import CartItem, Product


class CartService(BaseEcommerceService):
    """Service for managing a user's server-side cart"""

    def get_items(self, user):
        return CartItem.objects.filter(user=user).select_related('product').order_by('created_at', 'id')

    def get_summary(self, user) -> Dict:
        """Cart lines with subtotal computed from current catalogue prices"""
        items = list(self.get_items(user))
        return {
            'items': items,
            'item_count': sum(item.quantity for item in items),
            'subtotal': sum(item.line_total for item in items),
            'currency': settings.STORE_CURRENCY,
        }

    def add_to_cart(self, user, product_id: int, quantity: int = 1) -> CartItem:
        """
        Add ``quantity`` of a product, creating the line or incrementing it.

        The increment is a single UPDATE with an F() expression, so two
        concurrent adds of the same product both land.
        """
        self._validate_quantity(quantity)
        product = self._get_product(product_id)

        with transaction.atomic():
            cart_item, created = CartItem.objects.get_or_create(
                user=user,
                product=product,
                defaults={'quantity': quantity},
            )
            if not created:
                CartItem.objects.filter(pk=cart_item.pk).update(
                    quantity=F('quantity') + quantity,
                    updated_at=timezone.now(),
                )
                cart_item.refresh_from_db(fields=['quantity', 'updated_at'])

        self.log_info(f"Added {quantity}x product {product.id} to cart of user {user.id}")
        return cart_item

    def update_quantity(self, user, product_id: int, quantity: int):
        """
        Set a line's quantity. Anything below 1 removes the line.

        Returns the updated CartItem, or None when the line was removed.
        """
        if quantity < 1:
            self.remove_from_cart(user, product_id)
            return None

        updated = CartItem.objects.filter(user=user, product_id=product_id).update(
            quantity=quantity,
            updated_at=timezone.now(),
        )
        if not updated:
            raise NotFound('Item not in cart')

        self.log_info(f"Set product {product_id} quantity to {quantity} for user {user.id}")
        return CartItem.objects.select_related('product').get(user=user, product_id=product_id)

    def remove_from_cart(self, user, product_id: int) -> bool:
        """Remove a line. Removing a line that is not there is a no-op."""
        deleted, _ = CartItem.objects.filter(user=user, product_id=product_id).delete()
        if deleted:
            self.log_info(f"Removed product {product_id} from cart of user {user.id}")
        return bool(deleted)

    def remove_products(self, user, product_ids: Iterable[int]) -> int:
        """Drop purchased products from the cart after a successful checkout"""
        product_ids = [pid for pid in product_ids if pid]
        if not product_ids:
            return 0
        deleted, _ = CartItem.objects.filter(user=user, product_id__in=product_ids).delete()
        return deleted

    def clear_cart(self, user) -> int:
        deleted, _ = CartItem.objects.filter(user=user).delete()
        self.log_info(f"Cleared cart of user {user.id}")
        return deleted

    def merge(self, user, items: List[Dict]) -> List[CartItem]:
        """
        Merge a cart collected before sign-in into the user's cart.

        Lines are unioned by product id and quantities summed. Products that
        no longer exist are skipped.
        """
        wanted = OrderedDict()
        for item in items or []:
            product_id = int(item['product_id'])
            quantity = int(item.get('quantity', 1))
            if quantity < 1:
                continue
            wanted[product_id] = wanted.get(product_id, 0) + quantity

        known = set(Product.objects.filter(pk__in=wanted.keys()).values_list('pk', flat=True))
        merged = []
        for product_id, quantity in wanted.items():
            if product_id not in known:
                self.log_warning(f"Skipping unknown product {product_id} while merging guest cart")
                continue
            merged.append(self.add_to_cart(user, product_id, quantity))

        self.log_info(f"Merged {len(merged)} guest cart lines for user {user.id}")
        return merged

    def _get_product(self, product_id: int) -> Product:
        try:
            return Product.objects.get(pk=product_id)
        except Product.DoesNotExist:
            raise ProductNotFound(product_id)

    def _validate_quantity(self, quantity: int):
        if quantity is None or quantity < 1:
            raise ValidationFailed('Quantity must be at least 1')
