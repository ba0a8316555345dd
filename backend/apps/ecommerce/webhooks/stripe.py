import logging
import stripe
from django.conf import settings

from apps.ecommerce.models import Order
from apps.ecommerce.services import OrderService
from .base import BaseWebhookView

logger = logging.getLogger(__name__)

PAID_PAYMENT_STATUSES = ('paid', 'no_payment_required')


class StripeWebhookView(BaseWebhookView):
    """Handle Stripe Checkout webhooks"""

    def verify_event(self, request):
        payload = request.body
        sig_header = request.META.get('HTTP_STRIPE_SIGNATURE')
        endpoint_secret = settings.STRIPE_WEBHOOK_SECRET

        if not endpoint_secret:
            logger.error("STRIPE_WEBHOOK_SECRET is not configured, rejecting webhook")
            return None
        if not sig_header:
            logger.warning("Stripe webhook without signature header")
            return None

        try:
            stripe.Webhook.construct_event(payload, sig_header, endpoint_secret)
        except ValueError as e:
            logger.error(f"Invalid payload: {e}")
            return None
        except stripe.SignatureVerificationError as e:
            logger.error(f"Invalid signature: {e}")
            return None

        # The payload is authentic; work on plain dicts from here on
        return self.parse_payload(payload)

    def process_webhook(self, event):
        """Route events to appropriate handlers"""
        event_type = event.get('type')

        handlers = {
            'checkout.session.completed': self.handle_checkout_completed,
            'checkout.session.async_payment_succeeded': self.handle_async_payment_succeeded,
            'checkout.session.async_payment_failed': self.handle_async_payment_failed,
        }

        handler = handlers.get(event_type)
        if handler:
            handler((event.get('data') or {}).get('object') or {})
        else:
            logger.info(f"Unhandled Stripe event type: {event_type}")

    def handle_checkout_completed(self, session):
        """Checkout finished; delayed payment methods may still be unpaid"""
        if session.get('payment_status') in PAID_PAYMENT_STATUSES:
            status = Order.Status.PAID
        else:
            status = Order.Status.PENDING
        OrderService().sync_checkout_session(session, status)

    def handle_async_payment_succeeded(self, session):
        OrderService().sync_checkout_session(session, Order.Status.PAID)

    def handle_async_payment_failed(self, session):
        OrderService().sync_checkout_session(session, Order.Status.CANCELLED)
