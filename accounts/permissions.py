"""
Custom permissions for role-based access
"""
from rest_framework import permissions

from .models import User


class IsCenterStaff(permissions.BasePermission):
    """Admins and teachers may read and record attendance."""

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.role in (User.ROLE_ADMIN, User.ROLE_TEACHER)
        )


class IsCenterAdmin(permissions.BasePermission):
    """Direct record mutation (update/delete) is reserved for admins."""

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.role == User.ROLE_ADMIN
        )
