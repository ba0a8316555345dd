"""
E-Commerce Order Service
Records paid Stripe checkouts as orders and handles fulfilment updates
"""

from typing import Dict, List, Optional

import stripe
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.auth.models import Address
from apps.core import emails
from apps.core.exceptions import ValidationFailed
from .base import BaseEcommerceService
from .cart import CartService
from ..models import Order, OrderItem, Product

User = get_user_model()

# Configure Stripe
stripe.api_key = settings.STRIPE_SECRET_KEY


class OrderService(BaseEcommerceService):
    """Service for managing order operations"""

    def orders_for_user(self, user):
        return Order.objects.filter(user=user).prefetch_related('items').order_by('-created_at', '-id')

    def sync_checkout_session(self, session: Dict, status: str) -> Optional[Order]:
        """
        Create or update the order for a Stripe checkout session.

        The session id is the idempotency key: redelivered events find the
        existing order and at most move it out of PENDING. Returns None when
        the session carries no usable user or address metadata.
        """
        session_id = session.get('id')
        metadata = session.get('metadata') or {}

        user = self._resolve_user(metadata.get('user_id'))
        if user is None:
            self.log_warning(f"Checkout session {session_id} has no known user in metadata, ignoring", {
                'metadata': dict(metadata),
            })
            return None

        existing = Order.objects.filter(stripe_session_id=session_id).first()
        if existing:
            return self.apply_payment_status(existing, status)

        address = self._resolve_address(user, metadata.get('address_id'))
        if address is None:
            self.log_warning(f"Checkout session {session_id} has no address of user {user.id} in metadata, ignoring", {
                'metadata': dict(metadata),
            })
            return None

        lines = self.fetch_line_items(session_id)
        now = timezone.now()

        try:
            with transaction.atomic():
                order = Order.objects.create(
                    user=user,
                    address=address,
                    shipping_address=address.snapshot(),
                    total=sum(line['unit_price'] * line['quantity'] for line in lines),
                    amount_paid=session.get('amount_total') or 0,
                    currency=(session.get('currency') or settings.STORE_CURRENCY).lower(),
                    stripe_session_id=session_id,
                    payment_intent_id=self._payment_intent_id(session),
                    status=status,
                    paid_at=now if status == Order.Status.PAID else None,
                )
                OrderItem.objects.bulk_create([
                    OrderItem(
                        order=order,
                        product_id=line['product_id'],
                        title=line['title'],
                        quantity=line['quantity'],
                        unit_price=line['unit_price'],
                    )
                    for line in lines
                ])
        except IntegrityError:
            # A concurrent delivery of the same session created it first
            order = Order.objects.get(stripe_session_id=session_id)
            return self.apply_payment_status(order, status)

        self.log_info(f"Order {order.reference} created from checkout session {session_id}", {
            'order_id': order.id,
            'user_id': user.id,
            'status': status,
            'total': order.total,
        })

        if status != Order.Status.CANCELLED:
            CartService().remove_products(user, [line['product_id'] for line in lines])
            emails.send_order_confirmation_email(order)
            emails.send_admin_order_notification(order)

        return order

    def apply_payment_status(self, order: Order, status: str) -> Order:
        """Resolve a PENDING order once the delayed payment settles"""
        if order.status == status or order.status != Order.Status.PENDING:
            self.log_info(f"Order {order.reference} already {order.status}, ignoring {status}")
            return order

        order.status = status
        update_fields = ['status', 'updated_at']
        if status == Order.Status.PAID and order.paid_at is None:
            order.paid_at = timezone.now()
            update_fields.append('paid_at')
        order.save(update_fields=update_fields)

        self.log_info(f"Order {order.reference} moved from PENDING to {status}")
        return order

    def fetch_line_items(self, session_id: str) -> List[Dict]:
        """
        Read the purchased lines back from Stripe.

        Unit prices come from Stripe, not the catalogue, so the order keeps
        what the customer actually paid even if a price changes later.
        """
        response = stripe.checkout.Session.list_line_items(
            session_id,
            limit=100,
            expand=['data.price.product'],
        )

        lines = []
        for item in response.auto_paging_iter():
            # SDK objects are not dicts; parse a plain copy of the expanded line
            line = item.to_dict()
            price = line.get('price') or {}
            product = price.get('product') or {}
            if isinstance(product, str):
                product = {}
            quantity = line.get('quantity') or 1
            unit_price = price.get('unit_amount')
            if unit_price is None:
                unit_price = (line.get('amount_total') or 0) // quantity

            lines.append({
                'product_id': self._parse_id((product.get('metadata') or {}).get('product_id')),
                'title': line.get('description') or product.get('name') or 'Item',
                'quantity': quantity,
                'unit_price': unit_price,
            })

        # Products deleted since checkout keep their line without a link
        known = set(
            Product.objects.filter(
                pk__in=[line['product_id'] for line in lines if line['product_id']]
            ).values_list('pk', flat=True)
        )
        for line in lines:
            if line['product_id'] not in known:
                line['product_id'] = None

        return lines

    def update_status(self, order: Order, status: str, tracking_number: Optional[str] = None,
                      tracking_url: Optional[str] = None) -> Order:
        """Back-office status change; any of the five statuses may be set"""
        if status not in Order.Status.values:
            raise ValidationFailed(f"Invalid status '{status}'")

        previous = order.status
        now = timezone.now()
        order.status = status
        if tracking_number is not None:
            order.tracking_number = tracking_number
        if tracking_url is not None:
            order.tracking_url = tracking_url
        if status == Order.Status.PAID and order.paid_at is None:
            order.paid_at = now
        if status == Order.Status.SHIPPED and previous != Order.Status.SHIPPED:
            order.shipped_at = now
        order.save()

        self.log_info(f"Order {order.reference} status {previous} -> {status}")

        if status == Order.Status.SHIPPED and previous != Order.Status.SHIPPED:
            emails.send_shipping_notification_email(order)

        return order

    def _resolve_user(self, user_id):
        user_id = self._parse_id(user_id)
        if user_id is None:
            return None
        return User.objects.filter(pk=user_id).first()

    def _resolve_address(self, user, address_id) -> Optional[Address]:
        address_id = self._parse_id(address_id)
        if address_id is None:
            return None
        return Address.objects.filter(pk=address_id, user=user).first()

    @staticmethod
    def _parse_id(value) -> Optional[int]:
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _payment_intent_id(session: Dict) -> str:
        payment_intent = session.get('payment_intent')
        if isinstance(payment_intent, dict):
            return payment_intent.get('id') or ''
        return payment_intent or ''
