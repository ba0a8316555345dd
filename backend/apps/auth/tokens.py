# apps/auth/tokens.py

import logging

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

logger = logging.getLogger(__name__)


def create_tokens_for_user(user):
    """
    Create a JWT pair for ``user``.

    The role claim is informational for clients; authorization re-reads the
    role from the database on every request.
    """
    refresh = RefreshToken.for_user(user)

    # Add custom claims
    refresh['email'] = user.email
    refresh['role'] = user.role
    refresh['full_name'] = user.full_name

    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


def blacklist_token(refresh_token):
    """
    Blacklist a refresh token
    """
    try:
        token = RefreshToken(refresh_token)
        token.blacklist()
        return True
    except TokenError as e:
        logger.info(f"Refresh token could not be blacklisted: {e}")
        return False
