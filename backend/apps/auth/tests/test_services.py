# apps/auth/tests/test_services.py
import pytest
from datetime import timedelta
from django.core import mail
from django.utils import timezone

from apps.core.exceptions import Conflict, NotFound, ValidationFailed
from ..models import AccountToken, User
from ..services import (
    PASSWORD_RESET_REQUESTED_MESSAGE,
    AccountFlowService,
    AccountTokenService,
)
from .factories import DEFAULT_PASSWORD, UnverifiedUserFactory, UserFactory


@pytest.mark.django_db
class TestAccountTokenService:
    """Test single-use token issue and redemption."""

    def test_consume_succeeds_once(self):
        user = UnverifiedUserFactory()
        issued = AccountTokenService.issue(user, AccountToken.Purpose.VERIFY_EMAIL)

        redeemed = AccountTokenService.consume(issued.token, AccountToken.Purpose.VERIFY_EMAIL)
        assert redeemed.user == user
        assert redeemed.consumed_at is not None

        with pytest.raises(NotFound):
            AccountTokenService.consume(issued.token, AccountToken.Purpose.VERIFY_EMAIL)

    def test_consume_rejects_wrong_purpose(self):
        user = UnverifiedUserFactory()
        issued = AccountTokenService.issue(user, AccountToken.Purpose.VERIFY_EMAIL)

        with pytest.raises(NotFound):
            AccountTokenService.consume(issued.token, AccountToken.Purpose.PASSWORD_RESET)

    def test_consume_rejects_expired_token(self):
        user = UserFactory()
        issued = AccountTokenService.issue(user, AccountToken.Purpose.PASSWORD_RESET)
        AccountToken.objects.filter(pk=issued.pk).update(expires_at=timezone.now() - timedelta(minutes=1))

        with pytest.raises(NotFound):
            AccountTokenService.consume(issued.token, AccountToken.Purpose.PASSWORD_RESET)

    def test_consume_rejects_unknown_and_empty_token(self):
        with pytest.raises(NotFound):
            AccountTokenService.consume('does-not-exist', AccountToken.Purpose.AUTO_LOGIN)
        with pytest.raises(NotFound):
            AccountTokenService.consume('', AccountToken.Purpose.AUTO_LOGIN)

    def test_issue_revokes_previous_token_of_same_purpose(self):
        user = UserFactory()
        first = AccountTokenService.issue(user, AccountToken.Purpose.PASSWORD_RESET)
        second = AccountTokenService.issue(user, AccountToken.Purpose.PASSWORD_RESET)

        with pytest.raises(NotFound):
            AccountTokenService.consume(first.token, AccountToken.Purpose.PASSWORD_RESET)
        assert AccountTokenService.consume(second.token, AccountToken.Purpose.PASSWORD_RESET).user == user

    def test_issue_keeps_tokens_of_other_purposes(self):
        user = UnverifiedUserFactory()
        verification = AccountTokenService.issue(user, AccountToken.Purpose.VERIFY_EMAIL)
        AccountTokenService.issue(user, AccountToken.Purpose.PASSWORD_RESET)

        assert AccountTokenService.consume(verification.token, AccountToken.Purpose.VERIFY_EMAIL).user == user

    def test_require_verified_blocks_unverified_user(self):
        user = UnverifiedUserFactory()
        issued = AccountTokenService.issue(user, AccountToken.Purpose.AUTO_LOGIN)

        with pytest.raises(NotFound):
            AccountTokenService.consume(issued.token, AccountToken.Purpose.AUTO_LOGIN, require_verified=True)


@pytest.mark.django_db
class TestAccountFlowService:
    """Test signup, verification and password reset flows."""

    def test_signup_creates_unverified_user_and_sends_link(self):
        user, token = AccountFlowService.signup(
            email='New.Rider@Example.com',
            password=DEFAULT_PASSWORD,
            first_name='New',
            last_name='Rider',
        )

        assert user.email == 'new.rider@example.com'
        assert not user.is_email_verified
        assert token.purpose == AccountToken.Purpose.VERIFY_EMAIL
        assert len(mail.outbox) == 1
        assert f"verify?token={token.token}" in mail.outbox[0].body
        assert mail.outbox[0].to == ['new.rider@example.com']

    def test_signup_duplicate_email_conflicts(self):
        UserFactory(email='taken@example.com')

        with pytest.raises(Conflict):
            AccountFlowService.signup('TAKEN@example.com', DEFAULT_PASSWORD, 'Ta', 'Ken')
        assert User.objects.filter(email__iexact='taken@example.com').count() == 1

    def test_verify_email_issues_auto_login_token(self):
        user, token = AccountFlowService.signup('flow@example.com', DEFAULT_PASSWORD, 'Flow', 'Rider')

        verified_user, auto_login = AccountFlowService.verify_email(token.token)

        assert verified_user.pk == user.pk
        assert verified_user.is_email_verified
        assert auto_login.purpose == AccountToken.Purpose.AUTO_LOGIN
        assert auto_login.token != token.token
        assert AccountFlowService.auto_login(auto_login.token).pk == user.pk

    def test_password_reset_message_is_identical_for_unknown_email(self):
        UserFactory(email='known@example.com')

        known = AccountFlowService.request_password_reset('known@example.com')
        unknown = AccountFlowService.request_password_reset('nobody@example.com')

        assert known == unknown == PASSWORD_RESET_REQUESTED_MESSAGE
        assert len(mail.outbox) == 1

    def test_reset_password_changes_password_once(self):
        user = UserFactory(email='reset@example.com')
        AccountFlowService.request_password_reset('reset@example.com')
        token = AccountToken.objects.get(user=user, purpose=AccountToken.Purpose.PASSWORD_RESET)

        AccountFlowService.reset_password(token.token, 'Brand-New-Pedals-9')
        user.refresh_from_db()
        assert user.check_password('Brand-New-Pedals-9')

        with pytest.raises(ValidationFailed):
            AccountFlowService.reset_password(token.token, 'Another-Pedal-Set-1')

    def test_reset_password_rejects_expired_token(self):
        user = UserFactory()
        token = AccountTokenService.issue(user, AccountToken.Purpose.PASSWORD_RESET)
        AccountToken.objects.filter(pk=token.pk).update(expires_at=timezone.now() - timedelta(seconds=1))

        with pytest.raises(ValidationFailed):
            AccountFlowService.reset_password(token.token, 'Brand-New-Pedals-9')

        user.refresh_from_db()
        assert user.check_password(DEFAULT_PASSWORD)

    def test_resend_verification_only_for_unverified(self):
        UserFactory(email='done@example.com')
        UnverifiedUserFactory(email='pending@example.com')

        AccountFlowService.resend_verification('done@example.com')
        AccountFlowService.resend_verification('pending@example.com')

        assert [message.to for message in mail.outbox] == [['pending@example.com']]
