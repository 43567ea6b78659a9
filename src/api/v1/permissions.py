"""Custom DRF permissions for the ServiceHub API."""
from rest_framework.permissions import BasePermission


class IsAdminRole(BasePermission):
    """Allow access to users with the admin role only."""

    message = "Profit reporting is restricted to administrators."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_admin)
