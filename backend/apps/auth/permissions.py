# apps/auth/permissions.py

from rest_framework import permissions


class IsAdminRole(permissions.BasePermission):
    """
    Allows access only to callers whose current role is ADMIN.

    The role is read from the user row loaded for this request, so a
    demoted admin loses access on their very next call.
    """
    message = 'Forbidden'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'is_admin', False))


class IsAdminRoleOrReadOnly(IsAdminRole):
    """Read access for everyone, mutations for admins only"""

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return super().has_permission(request, view)


class IsEmailVerified(permissions.BasePermission):
    """Permission class for actions that need a verified email address"""
    message = 'Please verify your email before checking out'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'is_email_verified', False))
