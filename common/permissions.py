from rest_framework.permissions import BasePermission

from .exceptions import AuthorizationError


class IsStaff(BasePermission):
    """Staff-only access. Anonymous requests get a 401, customers a 403."""

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if not user.is_staff:
            raise AuthorizationError()
        return True
