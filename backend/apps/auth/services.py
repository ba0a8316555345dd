"""
Account token flows: signup verification, auto-login and password reset.

Tokens are redeemed with a conditional UPDATE so that two concurrent
redemptions of the same value cannot both succeed.
"""

import logging
from typing import Optional, Tuple

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from apps.core import emails
from apps.core.exceptions import Conflict, NotFound, ValidationFailed
from .models import AccountToken

User = get_user_model()
logger = logging.getLogger(__name__)

PASSWORD_RESET_REQUESTED_MESSAGE = 'If that email is registered, you will receive a password reset link.'
VERIFICATION_RESENT_MESSAGE = 'If that account exists and is not verified yet, a new verification link is on its way.'


class AccountTokenService:
    """Issue and redeem single-use account tokens"""

    @staticmethod
    def issue(user, purpose: str) -> AccountToken:
        """
        Create a fresh token for ``purpose``.

        Outstanding tokens of the same purpose are revoked first so only the
        most recent link works.
        """
        now = timezone.now()
        AccountToken.objects.filter(
            user=user, purpose=purpose, consumed_at__isnull=True
        ).update(consumed_at=now)
        return AccountToken.objects.create(user=user, purpose=purpose)

    @staticmethod
    def consume(token: str, purpose: str, require_verified: bool = False) -> AccountToken:
        """
        Redeem ``token`` exactly once.

        Raises NotFound if the token is unknown, already used, expired, or
        (with ``require_verified``) belongs to an unverified user.
        """
        if not token:
            raise NotFound('Invalid or expired token')

        now = timezone.now()
        live = AccountToken.objects.filter(
            token=token,
            purpose=purpose,
            consumed_at__isnull=True,
        ).filter(Q(expires_at__isnull=True) | Q(expires_at__gt=now))
        if require_verified:
            live = live.filter(user__email_verified_at__isnull=False)

        claimed = live.update(consumed_at=now)
        if claimed != 1:
            raise NotFound('Invalid or expired token')

        return AccountToken.objects.select_related('user').get(token=token)


class AccountFlowService:
    """The user-facing flows built on top of account tokens"""

    @staticmethod
    def signup(email: str, password: str, first_name: str, last_name: str) -> Tuple[User, AccountToken]:
        email = User.objects.normalize_email(email)
        if User.objects.filter(email__iexact=email).exists():
            raise Conflict('Email already registered')

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    email=email,
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                    role=User.Role.USER,
                )
                token = AccountTokenService.issue(user, AccountToken.Purpose.VERIFY_EMAIL)
        except IntegrityError:
            raise Conflict('Email already registered')

        logger.info(f"Created unverified account {user.id} for {email}")
        emails.send_verification_email(user, token.token)
        return user, token

    @staticmethod
    def verify_email(token: str) -> Tuple[User, AccountToken]:
        """Consume a verification token and hand back a one-time auto-login token"""
        with transaction.atomic():
            verification = AccountTokenService.consume(token, AccountToken.Purpose.VERIFY_EMAIL)
            user = verification.user
            user.mark_email_verified()
            auto_login = AccountTokenService.issue(user, AccountToken.Purpose.AUTO_LOGIN)

        logger.info(f"Email verified for user {user.id}")
        return user, auto_login

    @staticmethod
    def auto_login(token: str) -> User:
        redeemed = AccountTokenService.consume(
            token, AccountToken.Purpose.AUTO_LOGIN, require_verified=True
        )
        logger.info(f"Auto-login token redeemed for user {redeemed.user_id}")
        return redeemed.user

    @staticmethod
    def request_password_reset(email: str) -> str:
        """
        Issue a reset token if the account exists.

        Always returns the same message so callers cannot probe which
        addresses are registered.
        """
        user = User.objects.filter(email__iexact=User.objects.normalize_email(email), is_active=True).first()
        if user is None:
            logger.info("Password reset requested for unknown email")
            return PASSWORD_RESET_REQUESTED_MESSAGE

        token = AccountTokenService.issue(user, AccountToken.Purpose.PASSWORD_RESET)
        emails.send_password_reset_email(user, token.token)
        logger.info(f"Password reset token issued for user {user.id}")
        return PASSWORD_RESET_REQUESTED_MESSAGE

    @staticmethod
    def reset_password(token: str, password: str) -> User:
        with transaction.atomic():
            try:
                redeemed = AccountTokenService.consume(token, AccountToken.Purpose.PASSWORD_RESET)
            except NotFound:
                raise ValidationFailed('Invalid or expired reset token')
            user = redeemed.user
            user.set_password(password)
            user.save(update_fields=['password', 'updated_at'])

        logger.info(f"Password reset completed for user {user.id}")
        return user

    @staticmethod
    def resend_verification(email: str) -> str:
        user: Optional[User] = User.objects.filter(
            email__iexact=User.objects.normalize_email(email),
            email_verified_at__isnull=True,
            is_active=True,
        ).first()
        if user is not None:
            token = AccountTokenService.issue(user, AccountToken.Purpose.VERIFY_EMAIL)
            emails.send_verification_email(user, token.token)
            logger.info(f"Verification email re-sent for user {user.id}")
        return VERIFICATION_RESENT_MESSAGE
