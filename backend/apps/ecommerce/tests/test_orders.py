# apps/ecommerce/tests/test_orders.py
import pytest
from django.core import mail
from django.urls import reverse
from rest_framework import status

from apps.auth.tests.factories import UserFactory
from ..models import Order
from .factories import OrderFactory, OrderItemFactory


@pytest.mark.django_db
class TestOrderHistory:
    """Customers only ever see their own orders."""

    def test_history_lists_own_orders_newest_first(self, authenticated_client, user):
        older = OrderFactory(user=user)
        newer = OrderFactory(user=user)
        OrderFactory(user=UserFactory())

        response = authenticated_client.get(reverse('ecommerce:order_list'))

        assert response.status_code == status.HTTP_200_OK
        assert [order['id'] for order in response.data] == [newer.id, older.id]

    def test_history_includes_items_and_reference(self, authenticated_client, user):
        item = OrderItemFactory(order=OrderFactory(user=user), quantity=2, unit_price=18900)

        response = authenticated_client.get(reverse('ecommerce:order_list'))

        [order] = response.data
        assert order['reference'] == item.order.reference
        assert order['items'][0]['line_total'] == 37800

    def test_other_users_order_is_404(self, authenticated_client):
        foreign = OrderFactory(user=UserFactory())

        response = authenticated_client.get(reverse('ecommerce:order_detail', kwargs={'pk': foreign.pk}))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestAdminOrders:
    """Test the back-office order endpoints."""

    def test_customer_cannot_list_all_orders(self, authenticated_client):
        response = authenticated_client.get(reverse('ecommerce:admin_order_list'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_lists_and_filters_by_status(self, admin_client):
        OrderFactory(status=Order.Status.PAID)
        shipped = OrderFactory(status=Order.Status.SHIPPED)

        response = admin_client.get(reverse('ecommerce:admin_order_list'), {'status': 'SHIPPED'})

        assert response.status_code == status.HTTP_200_OK
        assert [order['id'] for order in response.data] == [shipped.id]
        assert response.data[0]['customer']['email'] == shipped.user.email

    def test_marking_shipped_notifies_customer(self, admin_client):
        order = OrderFactory(status=Order.Status.PAID)
        OrderItemFactory(order=order)

        response = admin_client.patch(
            reverse('ecommerce:admin_order_detail', kwargs={'pk': order.pk}),
            {
                'status': Order.Status.SHIPPED,
                'tracking_number': '1Z999AA10123456784',
                'tracking_url': 'https://track.example.com/1Z999AA10123456784',
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['order']['status'] == Order.Status.SHIPPED
        order.refresh_from_db()
        assert order.shipped_at is not None
        assert order.tracking_number == '1Z999AA10123456784'
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == [order.user.email]
        assert '1Z999AA10123456784' in mail.outbox[0].body

    def test_repeating_shipped_does_not_email_again(self, admin_client):
        order = OrderFactory(status=Order.Status.SHIPPED)

        admin_client.patch(
            reverse('ecommerce:admin_order_detail', kwargs={'pk': order.pk}),
            {'status': Order.Status.SHIPPED, 'tracking_number': 'NEW-NUMBER'},
        )

        assert mail.outbox == []

    def test_admin_may_move_status_backwards(self, admin_client):
        order = OrderFactory(status=Order.Status.DELIVERED)

        response = admin_client.patch(
            reverse('ecommerce:admin_order_detail', kwargs={'pk': order.pk}),
            {'status': Order.Status.PENDING},
        )

        assert response.status_code == status.HTTP_200_OK
        order.refresh_from_db()
        assert order.status == Order.Status.PENDING

    def test_invalid_status_is_400(self, admin_client):
        order = OrderFactory()

        response = admin_client.patch(
            reverse('ecommerce:admin_order_detail', kwargs={'pk': order.pk}),
            {'status': 'LOST_IN_TRANSIT'},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'status' in response.data['errors']
