"""
Transactional email for the storefront.

Every customer-facing email goes through ``queue_email``, which renders the
text and HTML templates and hands them to the Celery mail task. Delivery
problems are logged and swallowed there so that signup, password reset and
payment confirmation never fail because the mail provider is down.
"""

import logging
from typing import Dict, Iterable

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string
from django.utils import timezone

from .tasks import send_email_task
from .utils import build_frontend_url, format_minor_units

logger = logging.getLogger(__name__)


def queue_email(subject: str, template_name: str, context: Dict, recipients: Iterable[str]) -> bool:
    """Render an email and queue it for delivery. Returns False if it could not be sent."""
    recipients = [address for address in recipients if address]
    if not recipients:
        logger.warning(f"Email '{subject}' has no recipients, skipping")
        return False

    context = {'store_name': settings.STORE_NAME, 'year': timezone.now().year, **context}
    try:
        message = render_to_string(f'emails/{template_name}.txt', context)
        html_message = render_to_string(f'emails/{template_name}.html', context)
        send_email_task.delay(subject, message, recipients, html_message)
        return True
    except Exception as e:
        logger.error(f"Failed to send '{subject}' to {', '.join(recipients)}: {e}")
        return False


def send_verification_email(user, token: str) -> bool:
    verify_link = build_frontend_url('verify', token=token)
    return queue_email(
        subject=f'Verify your {settings.STORE_NAME} account',
        template_name='verification',
        context={'name': user.full_name or user.email, 'verify_link': verify_link},
        recipients=[user.email],
    )


def send_password_reset_email(user, token: str) -> bool:
    reset_link = build_frontend_url('reset-password', token=token)
    return queue_email(
        subject=f'Reset your {settings.STORE_NAME} password',
        template_name='password_reset',
        context={
            'name': user.full_name or user.email,
            'reset_link': reset_link,
            'ttl_minutes': settings.PASSWORD_RESET_TOKEN_TTL_MINUTES,
        },
        recipients=[user.email],
    )


def _order_context(order) -> Dict:
    items = [
        {
            'title': item.title,
            'quantity': item.quantity,
            'unit_price': format_minor_units(item.unit_price, order.currency),
            'line_total': format_minor_units(item.line_total, order.currency),
        }
        for item in order.items.all()
    ]
    return {
        'order': order,
        'order_reference': order.reference,
        'items': items,
        'total': format_minor_units(order.total, order.currency),
        'address_lines': order.shipping_address_lines,
        'customer_name': order.user.full_name if order.user else '',
        'customer_email': order.user.email if order.user else '',
    }


def send_order_confirmation_email(order) -> bool:
    if not order.user:
        return False
    return queue_email(
        subject=f'Your {settings.STORE_NAME} order {order.reference} is confirmed',
        template_name='order_confirmation',
        context=_order_context(order),
        recipients=[order.user.email],
    )


def send_admin_order_notification(order) -> bool:
    if not settings.ADMIN_NOTIFICATION_EMAIL:
        logger.debug("ADMIN_NOTIFICATION_EMAIL not set, skipping admin order notification")
        return False
    return queue_email(
        subject=f'New order {order.reference}',
        template_name='admin_order_notification',
        context=_order_context(order),
        recipients=[settings.ADMIN_NOTIFICATION_EMAIL],
    )


def send_shipping_notification_email(order) -> bool:
    if not order.user:
        return False
    return queue_email(
        subject=f'Your {settings.STORE_NAME} order {order.reference} has shipped',
        template_name='shipping_notification',
        context={
            **_order_context(order),
            'tracking_number': order.tracking_number,
            'tracking_url': order.tracking_url,
        },
        recipients=[order.user.email],
    )


def send_test_email(address: str) -> int:
    """
    Send a configuration test email synchronously.

    Unlike the customer emails this one raises on failure, it exists to
    surface provider problems to an admin.
    """
    context = {
        'store_name': settings.STORE_NAME,
        'year': timezone.now().year,
        'recipient': address,
        'sent_at': timezone.now(),
        'from_email': settings.DEFAULT_FROM_EMAIL,
    }
    return send_mail(
        subject=f'{settings.STORE_NAME} email test',
        message=render_to_string('emails/test_email.txt', context),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[address],
        html_message=render_to_string('emails/test_email.html', context),
        fail_silently=False,
    )
