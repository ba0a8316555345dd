"""
Stripe Checkout session creation
"""

from collections import OrderedDict
from typing import Dict, List, Optional

import stripe
from django.conf import settings

from apps.auth.models import Address
from apps.core.exceptions import NotFound
from apps.core.utils import build_frontend_url
from .base import BaseEcommerceService
from .cart import CartService
from ..exceptions import EmptyCheckout, MissingShippingAddress, PaymentProcessingException, ProductNotFound
from ..models import Product

# Configure Stripe
stripe.api_key = settings.STRIPE_SECRET_KEY


class CheckoutService(BaseEcommerceService):
    """
    Builds a hosted Stripe Checkout session for the caller's cart.

    No order is written here. The order only exists once Stripe reports the
    session as completed through the webhook.
    """

    def create_session(self, user, items: Optional[List[Dict]] = None, address_id: Optional[int] = None) -> Dict:
        address = self._resolve_address(user, address_id)
        lines = self._resolve_lines(user, items)

        line_items = [
            {
                'price_data': {
                    'currency': settings.STORE_CURRENCY,
                    'unit_amount': product.price,
                    'product_data': self._product_data(product),
                },
                'quantity': quantity,
            }
            for product, quantity in lines
        ]

        success_url = build_frontend_url('checkout/success') + '?session_id={CHECKOUT_SESSION_ID}'
        try:
            session = stripe.checkout.Session.create(
                mode='payment',
                payment_method_types=list(settings.STRIPE_PAYMENT_METHOD_TYPES),
                line_items=line_items,
                success_url=success_url,
                cancel_url=build_frontend_url('cart'),
                customer_email=user.email,
                client_reference_id=str(user.id),
                metadata={
                    'user_id': str(user.id),
                    'address_id': str(address.id),
                },
                locale='auto',
            )
        except stripe.StripeError as e:
            self.log_error(f"Stripe checkout session creation failed for user {user.id}", e)
            raise PaymentProcessingException('Checkout failed')

        self.log_info(f"Created checkout session {session.id} for user {user.id}", {
            'lines': len(line_items),
            'address_id': address.id,
        })
        return {'id': session.id, 'url': session.url}

    def _resolve_address(self, user, address_id: Optional[int]) -> Address:
        if address_id is not None:
            address = Address.objects.filter(pk=address_id, user=user).first()
            if address is None:
                raise NotFound('Address not found')
            return address

        address = Address.objects.filter(user=user).order_by('-updated_at').first()
        if address is None:
            raise MissingShippingAddress()
        return address

    def _resolve_lines(self, user, items: Optional[List[Dict]]):
        """(product, quantity) pairs from the request body, or the server cart"""
        if items is None:
            lines = [(item.product, item.quantity) for item in CartService().get_items(user)]
            if not lines:
                raise EmptyCheckout()
            return lines

        wanted = OrderedDict()
        for item in items:
            product_id = int(item['product_id'])
            wanted[product_id] = wanted.get(product_id, 0) + int(item['quantity'])
        if not wanted:
            raise EmptyCheckout()

        products = Product.objects.in_bulk(list(wanted.keys()))
        lines = []
        for product_id, quantity in wanted.items():
            product = products.get(product_id)
            if product is None:
                raise ProductNotFound(product_id)
            lines.append((product, quantity))
        return lines

    def _product_data(self, product: Product) -> Dict:
        data = {
            'name': product.title,
            'metadata': {'product_id': str(product.id)},
        }
        if product.description:
            data['description'] = product.description[:500]
        if product.hero_image:
            data['images'] = [product.hero_image]
        return data
