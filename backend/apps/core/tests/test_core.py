# apps/core/tests/test_core.py
import smtplib
from unittest.mock import patch

import pytest
from django.core import mail
from django.http import Http404
from django.test import override_settings
from django.urls import reverse
from rest_framework import serializers, status

from apps.core import emails
from apps.core.exceptions import Conflict, UpstreamError, api_exception_handler
from apps.core.utils import build_frontend_url, format_minor_units
from apps.ecommerce.tests.factories import OrderFactory


class TestExceptionHandler:
    """Every API error renders as a message and a code."""

    def test_custom_exception(self):
        response = api_exception_handler(Conflict('Email already registered'), {})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data == {'message': 'Email already registered', 'code': 'conflict'}

    def test_upstream_error_is_502(self):
        response = api_exception_handler(UpstreamError(), {})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['code'] == 'upstream_error'

    def test_validation_error_keeps_field_errors(self):
        exc = serializers.ValidationError({'email': ['Enter a valid email address.']})

        response = api_exception_handler(exc, {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'email: Enter a valid email address.'
        assert response.data['code'] == 'validation_failed'
        assert response.data['errors']['email'] == ['Enter a valid email address.']

    def test_non_field_error_message(self):
        exc = serializers.ValidationError({'non_field_errors': ['Invalid credentials']})

        response = api_exception_handler(exc, {})

        assert response.data['message'] == 'Invalid credentials'

    def test_http404_is_mapped(self):
        response = api_exception_handler(Http404(), {})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_unknown_exception_is_left_to_django(self):
        assert api_exception_handler(RuntimeError('boom'), {}) is None


class TestUtils:

    @pytest.mark.parametrize('amount, currency, expected', [
        (129900, 'usd', '$1,299.00'),
        (4900, 'EUR', '€49.00'),
        (0, 'usd', '$0.00'),
        (12345, 'sek', '123.45 SEK'),
    ])
    def test_format_minor_units(self, amount, currency, expected):
        assert format_minor_units(amount, currency) == expected

    @override_settings(APP_BASE_URL='https://shop.remoof.bike/')
    def test_build_frontend_url(self):
        assert build_frontend_url('verify', token='abc123') == 'https://shop.remoof.bike/verify?token=abc123'
        assert build_frontend_url('/cart') == 'https://shop.remoof.bike/cart'


@pytest.mark.django_db
class TestTransactionalEmail:
    """Mail problems never break the caller."""

    def test_queue_email_sends_text_and_html(self, user):
        assert emails.send_verification_email(user, 'tok-123') is True

        [message] = mail.outbox
        assert message.to == [user.email]
        assert 'http://testserver.local/verify?token=tok-123' in message.body
        assert message.alternatives[0][1] == 'text/html'

    def test_queue_email_swallows_delivery_failure(self, user):
        with patch('apps.core.emails.send_email_task.delay', side_effect=smtplib.SMTPException('relay down')):
            assert emails.send_password_reset_email(user, 'tok-123') is False

    def test_queue_email_without_recipients(self):
        assert emails.queue_email('Hello', 'verification', {}, ['']) is False
        assert mail.outbox == []

    @override_settings(ADMIN_NOTIFICATION_EMAIL='')
    def test_admin_notification_skipped_when_unconfigured(self):
        assert emails.send_admin_order_notification(OrderFactory()) is False
        assert mail.outbox == []


@pytest.mark.django_db
class TestCoreEndpoints:

    def test_health_check(self, api_client):
        response = api_client.get(reverse('health:health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'healthy'
        assert response.data['services']['database'] == 'ok'

    def test_api_root_is_public(self, api_client):
        response = api_client.get(reverse('api-root'))

        assert response.status_code == status.HTTP_200_OK

    def test_admin_sends_test_email(self, admin_client):
        response = admin_client.post(reverse('core:test_email'), {'email': 'ops@remoof.bike'})

        assert response.status_code == status.HTTP_200_OK
        assert mail.outbox[0].to == ['ops@remoof.bike']

    def test_test_email_requires_valid_address(self, admin_client):
        response = admin_client.post(reverse('core:test_email'), {'email': 'nope'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Enter a valid email address'

    def test_test_email_failure_is_502(self, admin_client):
        with patch('apps.core.views.send_test_email', side_effect=smtplib.SMTPException('auth failed')):
            response = admin_client.post(reverse('core:test_email'), {'email': 'ops@remoof.bike'})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    def test_customer_cannot_send_test_email(self, authenticated_client):
        response = authenticated_client.post(reverse('core:test_email'), {'email': 'ops@remoof.bike'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
