# apps/auth/authentication.py

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed


class VerifiedJWTAuthentication(JWTAuthentication):
    """JWT authentication that refuses accounts whose email is not verified"""

    def get_user(self, validated_token):
        user = super().get_user(validated_token)
        if not user.is_email_verified:
            raise AuthenticationFailed('Please verify your email before signing in.', code='email_not_verified')
        return user
