# apps/ecommerce/tests/test_seed_store.py
import pytest
from django.core.management import call_command

from apps.auth.models import Address, User
from ..models import Product


@pytest.mark.django_db
class TestSeedStore:

    def test_seeds_accounts_and_catalogue(self):
        call_command('seed_store', '--password', 'Sprocket-Chain-42')

        admin = User.objects.get(email='admin@remoof.bike')
        rider = User.objects.get(email='rider@remoof.bike')
        assert admin.is_admin and admin.is_email_verified
        assert rider.check_password('Sprocket-Chain-42')
        assert Address.objects.filter(user=rider).count() == 1
        assert Product.objects.count() == 3
        assert Product.objects.get(title='Remoof Carbon Wheelset').images.count() == 2

    def test_is_rerunnable(self):
        call_command('seed_store')
        call_command('seed_store', '--extra-products', '2')

        assert User.objects.filter(email__endswith='@remoof.bike').count() == 2
        assert Product.objects.count() == 5
