# conftest.py
import hashlib
import hmac
import json
import time

import pytest
from django.conf import settings
from rest_framework.test import APIClient

from apps.auth.tests.factories import AddressFactory, AdminUserFactory, UnverifiedUserFactory, UserFactory
from apps.auth.tokens import create_tokens_for_user


@pytest.fixture
def api_client():
    """Create API client."""
    return APIClient()


@pytest.fixture
def user():
    """Verified customer."""
    return UserFactory()


@pytest.fixture
def unverified_user():
    return UnverifiedUserFactory()


@pytest.fixture
def admin_user():
    """Verified account with the ADMIN role."""
    return AdminUserFactory()


@pytest.fixture
def address(user):
    return AddressFactory(user=user)


@pytest.fixture
def authenticated_client(api_client, user):
    """Create authenticated API client."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def jwt_client():
    """Client that authenticates through a real Bearer token."""
    def _client(account):
        client = APIClient()
        tokens = create_tokens_for_user(account)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        return client
    return _client


@pytest.fixture
def stripe_signature():
    """Build a valid Stripe-Signature header for a payload."""
    def _sign(payload, secret=None, timestamp=None):
        secret = secret or settings.STRIPE_WEBHOOK_SECRET
        timestamp = timestamp or int(time.time())
        signed_payload = f"{timestamp}.{payload}"
        signature = hmac.new(secret.encode('utf-8'), signed_payload.encode('utf-8'), hashlib.sha256).hexdigest()
        return f"t={timestamp},v1={signature}"
    return _sign


@pytest.fixture
def stripe_event():
    """Serialize a Stripe event envelope around a data object."""
    def _event(event_type, data_object, event_id='evt_test_1'):
        return json.dumps({
            'id': event_id,
            'object': 'event',
            'type': event_type,
            'data': {'object': data_object},
        })
    return _event
