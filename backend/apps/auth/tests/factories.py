# apps/auth/tests/factories.py
import factory
from factory.django import DjangoModelFactory
from django.utils import timezone

from ..models import AccountToken, Address, User

DEFAULT_PASSWORD = 'Sprocket-Chain-42'


class UserFactory(DjangoModelFactory):
    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"rider{n}@example.com")
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    role = User.Role.USER
    is_active = True
    email_verified_at = factory.LazyFunction(timezone.now)

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        obj.set_password(extracted or DEFAULT_PASSWORD)
        if create:
            obj.save(update_fields=['password'])


class UnverifiedUserFactory(UserFactory):
    email_verified_at = None


class AdminUserFactory(UserFactory):
    email = factory.Sequence(lambda n: f"admin{n}@remoof.bike")
    role = User.Role.ADMIN


class AddressFactory(DjangoModelFactory):
    class Meta:
        model = Address

    user = factory.SubFactory(UserFactory)
    line1 = factory.Faker('street_address')
    line2 = ''
    city = factory.Faker('city')
    state = 'Capital'
    postal = factory.Sequence(lambda n: f"{2100 + n}")
    country = 'Denmark'


class AccountTokenFactory(DjangoModelFactory):
    class Meta:
        model = AccountToken

    user = factory.SubFactory(UnverifiedUserFactory)
    purpose = AccountToken.Purpose.VERIFY_EMAIL
