# apps/core/exceptions.py

import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class RemoofAPIException(APIException):
    """Base exception for the storefront API"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The request could not be processed'
    default_code = 'error'


class Unauthorized(RemoofAPIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized'
    default_code = 'unauthorized'


class Forbidden(RemoofAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Forbidden'
    default_code = 'forbidden'


class NotFound(RemoofAPIException):
    """Entity or token absent, consumed or expired"""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


class ValidationFailed(RemoofAPIException):
    """Malformed input or a broken business rule"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request'
    default_code = 'validation_failed'


class Conflict(RemoofAPIException):
    """Duplicate unique key or a delete blocked by dependent rows"""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


class UpstreamError(RemoofAPIException):
    """Payment processor or mail provider failure"""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'An upstream service failed'
    default_code = 'upstream_error'


def api_exception_handler(exc, context):
    """
    Render every API error as {"message": ..., "code": ...}.

    Field-level validation errors additionally carry an "errors" mapping.
    Anything DRF does not recognise is left for Django to turn into a 500.
    """
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    response = exception_handler(exc, context)
    if response is None:
        view = context.get('view')
        logger.error(f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}")
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            'message': _first_message(exc.detail),
            'code': 'validation_failed',
            'errors': exc.detail,
        }
    elif isinstance(exc.detail, dict):
        # simplejwt wraps its errors as {"detail": ..., "code": ..., "messages": [...]}
        response.data = {
            'message': str(exc.detail.get('detail', 'Invalid request')),
            'code': str(exc.detail.get('code', exc.default_code)),
        }
    else:
        codes = exc.get_codes()
        response.data = {
            'message': str(exc.detail),
            'code': codes if isinstance(codes, str) else 'error',
        }

    return response


def _first_message(detail):
    """Pick a human readable message out of a nested validation payload"""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_message(value)
            if field == 'non_field_errors':
                return message
            return f"{field}: {message}"
        return 'Invalid request'
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else 'Invalid request'
    return str(detail)
