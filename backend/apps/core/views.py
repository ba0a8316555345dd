# apps/core/views.py

import logging

from django.core.validators import validate_email
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import connection
from django.utils import timezone
from rest_framework import status, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .emails import send_test_email
from .exceptions import UpstreamError, ValidationFailed
from apps.auth.permissions import IsAdminRole

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health_check(request):
    """Health check endpoint"""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return Response({
            'status': 'healthy',
            'timestamp': timezone.now().isoformat(),
            'version': '1.0.0',
            'services': {
                'database': 'ok',
            }
        })

    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return Response({
            'status': 'unhealthy',
            'timestamp': timezone.now().isoformat(),
            'error': str(e)
        }, status=status.HTTP_503_SERVICE_UNAVAILABLE)


@api_view(['POST'])
@permission_classes([IsAdminRole])
def send_test_email_view(request):
    """Send a test email so an admin can check the mail configuration"""
    email = (request.data.get('email') or '').strip()
    if not email:
        raise ValidationFailed('Email is required')
    try:
        validate_email(email)
    except DjangoValidationError:
        raise ValidationFailed('Enter a valid email address')

    try:
        send_test_email(email)
    except Exception as e:
        logger.error(f"Test email to {email} failed: {e}")
        raise UpstreamError(f'Failed to send test email: {e}')

    logger.info(f"Test email sent to {email} by {request.user.email}")
    return Response({'message': f'Test email sent to {email}'})
