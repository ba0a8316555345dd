# apps/auth/views.py

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from django.db import transaction
from django.db.models import Count, ProtectedError
from django.shortcuts import get_object_or_404
from rest_framework import status, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.exceptions import Conflict, Forbidden, ValidationFailed
from apps.ecommerce.services.cart import CartService
from .models import Address
from .permissions import IsAdminRole
from .serializers import (
    AddressSerializer,
    AdminUserDetailSerializer,
    AdminUserSerializer,
    LoginSerializer,
    LogoutSerializer,
    PasswordResetRequestSerializer,
    PasswordResetSerializer,
    SignupSerializer,
    TokenSerializer,
    UserProfileSerializer,
)
from .services import AccountFlowService
from .tokens import blacklist_token, create_tokens_for_user

User = get_user_model()
logger = logging.getLogger(__name__)


def _session_payload(user, guest_cart=None):
    """Tokens plus the user summary returned by every sign-in route"""
    if guest_cart:
        CartService().merge(user, guest_cart)

    return {
        'tokens': create_tokens_for_user(user),
        'user': {
            'id': user.id,
            'email': user.email,
            'name': user.full_name,
            'role': user.role,
        },
    }


class SignupView(APIView):
    """Create an unverified account and email a verification link"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        AccountFlowService.signup(
            email=data['email'],
            password=data['password'],
            first_name=data['first_name'],
            last_name=data['last_name'],
        )

        return Response({
            'message': 'Account created. Check your email to verify.'
        }, status=status.HTTP_201_CREATED)


class VerifyEmailView(APIView):
    """Redeem a verification token; answers with a one-time auto-login token"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = TokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, auto_login = AccountFlowService.verify_email(serializer.validated_data['token'])

        return Response({
            'message': 'Email verified',
            'email': user.email,
            'auto_login_token': auto_login.token,
        }, status=status.HTTP_200_OK)


class AutoLoginView(APIView):
    """Exchange an auto-login token for a session"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = TokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = AccountFlowService.auto_login(serializer.validated_data['token'])

        return Response({
            'success': True,
            **_session_payload(user, serializer.validated_data.get('guest_cart')),
        }, status=status.HTTP_200_OK)


class LoginView(APIView):
    """Email + password login for verified accounts"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']

        if not user.is_email_verified:
            logger.info(f"Login refused for unverified user {user.id}")
            raise Forbidden('Please verify your email before signing in.')

        update_last_login(None, user)

        return Response({
            'message': 'Login successful',
            **_session_payload(user, serializer.validated_data.get('guest_cart')),
        }, status=status.HTTP_200_OK)


class ForgotPasswordView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = AccountFlowService.request_password_reset(serializer.validated_data['email'])
        return Response({'message': message}, status=status.HTTP_200_OK)


class ResetPasswordView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        AccountFlowService.reset_password(
            serializer.validated_data['token'],
            serializer.validated_data['password'],
        )
        return Response({'message': 'Password has been reset'}, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([permissions.AllowAny])
def resend_verification(request):
    """Send a fresh verification link to an unverified account"""
    serializer = PasswordResetRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    message = AccountFlowService.resend_verification(serializer.validated_data['email'])
    return Response({'message': message}, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([permissions.IsAuthenticated])
def logout(request):
    """Logout by blacklisting the refresh token"""
    serializer = LogoutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    blacklist_token(serializer.validated_data['refresh'])
    return Response({'message': 'Logout successful'}, status=status.HTTP_200_OK)


class UserProfileView(APIView):
    """Get and update the caller's profile"""

    def get(self, request):
        serializer = UserProfileSerializer(request.user)
        return Response(serializer.data)

    def put(self, request):
        serializer = UserProfileSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    patch = put


class AddressView(APIView):
    """The caller's shipping address; POST replaces the current one"""

    def get(self, request):
        addresses = Address.objects.filter(user=request.user)
        return Response(AddressSerializer(addresses, many=True).data)

    def post(self, request):
        serializer = AddressSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            existing = (
                Address.objects.select_for_update()
                .filter(user=request.user)
                .order_by('-updated_at')
                .first()
            )
            if existing:
                address = serializer.update(existing, serializer.validated_data)
                return Response(AddressSerializer(address).data, status=status.HTTP_200_OK)

            address = serializer.save(user=request.user)

        return Response(AddressSerializer(address).data, status=status.HTTP_201_CREATED)


class AdminUserListView(APIView):
    """List and create accounts"""
    permission_classes = [IsAdminRole]

    def get(self, request):
        users = User.objects.annotate(order_count=Count('orders')).order_by('-created_at')
        role = request.query_params.get('role')
        if role:
            users = users.filter(role=role.upper())

        serializer = AdminUserSerializer(users, many=True)
        return Response({'users': serializer.data, 'count': len(serializer.data)})

    def post(self, request):
        serializer = AdminUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(f"Admin {request.user.id} created user {user.id}")
        return Response({
            'user': AdminUserSerializer(user).data,
            'message': 'User created successfully',
        }, status=status.HTTP_201_CREATED)


class AdminUserDetailView(APIView):
    """Read, update or delete a single account"""
    permission_classes = [IsAdminRole]

    def get_object(self, pk):
        return get_object_or_404(User.objects.prefetch_related('addresses', 'orders'), pk=pk)

    def get(self, request, pk):
        serializer = AdminUserDetailSerializer(self.get_object(pk))
        return Response({'user': serializer.data})

    def put(self, request, pk):
        user = self.get_object(pk)
        serializer = AdminUserSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(f"Admin {request.user.id} updated user {user.id}")
        return Response({
            'user': AdminUserSerializer(user).data,
            'message': 'User updated successfully',
        })

    patch = put

    def delete(self, request, pk):
        user = self.get_object(pk)
        if user.pk == request.user.pk:
            raise ValidationFailed('Cannot delete your own account')

        try:
            user.delete()
        except ProtectedError:
            raise Conflict('User has orders and cannot be deleted')

        logger.info(f"Admin {request.user.id} deleted user {pk}")
        return Response({'message': 'User deleted successfully'})
