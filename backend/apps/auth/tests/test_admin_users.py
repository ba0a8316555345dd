# apps/auth/tests/test_admin_users.py
import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext
from django.urls import reverse
from rest_framework import status

from apps.ecommerce.tests.factories import OrderFactory
from ..models import User
from .factories import DEFAULT_PASSWORD, AddressFactory, AdminUserFactory, UserFactory


@pytest.mark.django_db
class TestAdminUserAccess:
    """Only callers with the ADMIN role reach user management."""

    def test_anonymous_is_401(self, api_client):
        response = api_client.get(reverse('accounts:admin_user_list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_customer_is_403(self, authenticated_client):
        response = authenticated_client.get(reverse('accounts:admin_user_list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['message'] == 'Forbidden'

    def test_demoted_admin_loses_access_immediately(self, jwt_client):
        admin = AdminUserFactory()
        client = jwt_client(admin)
        assert client.get(reverse('accounts:admin_user_list')).status_code == status.HTTP_200_OK

        User.objects.filter(pk=admin.pk).update(role=User.Role.USER)

        response = client.get(reverse('accounts:admin_user_list'))
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestAdminUserManagement:
    """Test listing, creating, updating and deleting accounts."""

    def test_list_never_exposes_passwords(self, admin_client, user):
        response = admin_client.get(reverse('accounts:admin_user_list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        for entry in response.data['users']:
            assert 'password' not in entry

    def test_list_counts_orders_without_a_query_per_user(self, admin_client, user):
        OrderFactory.create_batch(2, user=user)

        with CaptureQueriesContext(connection) as few:
            admin_client.get(reverse('accounts:admin_user_list'))

        for customer in UserFactory.create_batch(4):
            OrderFactory(user=customer)
        with CaptureQueriesContext(connection) as many:
            response = admin_client.get(reverse('accounts:admin_user_list'))

        assert len(many.captured_queries) == len(few.captured_queries)
        counts = {entry['email']: entry['order_count'] for entry in response.data['users']}
        assert counts[user.email] == 2
        assert sorted(counts.values()) == [0, 1, 1, 1, 1, 2]

    def test_list_filters_by_role(self, admin_client, user):
        response = admin_client.get(reverse('accounts:admin_user_list'), {'role': 'admin'})

        assert [entry['role'] for entry in response.data['users']] == [User.Role.ADMIN]

    def test_create_user_hashes_password(self, admin_client):
        response = admin_client.post(reverse('accounts:admin_user_list'), {
            'email': 'Mechanic@Remoof.bike',
            'first_name': 'Shop',
            'last_name': 'Mechanic',
            'password': DEFAULT_PASSWORD,
            'role': User.Role.ADMIN,
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert 'password' not in response.data['user']
        created = User.objects.get(email='mechanic@remoof.bike')
        assert created.check_password(DEFAULT_PASSWORD)
        assert created.password != DEFAULT_PASSWORD
        assert created.is_email_verified
        assert created.is_admin

    def test_create_requires_password(self, admin_client):
        response = admin_client.post(reverse('accounts:admin_user_list'), {
            'email': 'nopass@example.com',
            'first_name': 'No',
            'last_name': 'Pass',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data['errors']

    def test_create_duplicate_email_is_409(self, admin_client, user):
        response = admin_client.post(reverse('accounts:admin_user_list'), {
            'email': user.email,
            'first_name': 'Copy',
            'last_name': 'Cat',
            'password': DEFAULT_PASSWORD,
        })

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_detail_includes_addresses_and_orders(self, admin_client, user):
        AddressFactory(user=user)
        order = OrderFactory(user=user)

        response = admin_client.get(reverse('accounts:admin_user_detail', kwargs={'pk': user.pk}))

        assert response.status_code == status.HTTP_200_OK
        payload = response.data['user']
        assert len(payload['addresses']) == 1
        assert payload['orders'][0]['reference'] == order.reference
        assert payload['order_count'] == 1
        assert 'password' not in payload

    def test_update_role_and_password(self, admin_client, user):
        response = admin_client.patch(
            reverse('accounts:admin_user_detail', kwargs={'pk': user.pk}),
            {'role': User.Role.ADMIN, 'password': 'Brand-New-Pedals-9'},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'User updated successfully'
        user.refresh_from_db()
        assert user.is_admin
        assert user.check_password('Brand-New-Pedals-9')

    def test_update_to_taken_email_is_409(self, admin_client, user):
        other = UserFactory()

        response = admin_client.patch(
            reverse('accounts:admin_user_detail', kwargs={'pk': user.pk}),
            {'email': other.email},
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_delete_user(self, admin_client, user):
        response = admin_client.delete(reverse('accounts:admin_user_detail', kwargs={'pk': user.pk}))

        assert response.status_code == status.HTTP_200_OK
        assert not User.objects.filter(pk=user.pk).exists()

    def test_cannot_delete_self(self, admin_client, admin_user):
        response = admin_client.delete(reverse('accounts:admin_user_detail', kwargs={'pk': admin_user.pk}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert User.objects.filter(pk=admin_user.pk).exists()

    def test_cannot_delete_user_with_orders(self, admin_client, user):
        OrderFactory(user=user)

        response = admin_client.delete(reverse('accounts:admin_user_detail', kwargs={'pk': user.pk}))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert User.objects.filter(pk=user.pk).exists()

    def test_missing_user_is_404(self, admin_client):
        response = admin_client.get(reverse('accounts:admin_user_detail', kwargs={'pk': 999999}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
