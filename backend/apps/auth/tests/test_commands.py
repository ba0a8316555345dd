# apps/auth/tests/test_commands.py
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from ..models import User
from .factories import UserFactory


@pytest.mark.django_db
class TestMakeAdmin:

    def test_promotes_user(self, user):
        call_command('make_admin', user.email.upper(), stdout=StringIO())

        user.refresh_from_db()
        assert user.role == User.Role.ADMIN

    def test_unknown_email(self):
        with pytest.raises(CommandError):
            call_command('make_admin', 'ghost@example.com', stdout=StringIO())

    def test_lists_users_without_email(self):
        UserFactory(email='listed@example.com')
        out = StringIO()

        call_command('make_admin', stdout=out)

        assert 'listed@example.com - Role: USER' in out.getvalue()
