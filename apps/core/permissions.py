"""
Permission Classes for BrokerDesk Backend

Role-based access control for back-office users.
"""
from rest_framework import permissions

from .authentication import AuthenticatedUser


class IsAuthenticated(permissions.BasePermission):
    """
    Allows access only to authenticated users.
    """
    message = 'Authentication required'

    def has_permission(self, request, view):
        return isinstance(getattr(request, 'user', None), AuthenticatedUser)


class IsActiveUser(permissions.BasePermission):
    """
    Allows access only to users that have not been deactivated.
    """
    message = 'Account is not active'

    def has_permission(self, request, view):
        user = getattr(request, 'user', None)
        if not isinstance(user, AuthenticatedUser):
            return False
        return user.is_active


class IsAdmin(permissions.BasePermission):
    """
    Allows access only to admin users.
    """
    message = 'Admin access required'

    def has_permission(self, request, view):
        user = getattr(request, 'user', None)
        if not isinstance(user, AuthenticatedUser):
            return False
        return user.is_admin
