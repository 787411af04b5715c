"""Django REST Framework permission classes backed by the RBAC checks.

Usage:
    class ReportViewSet(viewsets.ModelViewSet):
        permission_classes = (HasPermission,)
        required_permissions = ('reports-view',)
"""
from rest_framework.permissions import BasePermission

from rbac_auth.utils import is_bypassed, is_role_holder


class RoleHolderPermission(BasePermission):
    """Base class: authenticated role holders only."""

    attribute = None

    def get_required(self, view):
        return tuple(getattr(view, self.attribute, None) or ())

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if is_bypassed(user):
            return True
        required = self.get_required(view)
        if not required:
            return True
        if not is_role_holder(user):
            return False
        return self.check(user, required)

    def check(self, user, required):
        raise NotImplementedError()


class HasRole(RoleHolderPermission):
    """Allow users holding any of `view.required_roles`."""

    attribute = 'required_roles'

    def check(self, user, required):
        return user.has_any_role(required)


class HasPermission(RoleHolderPermission):
    """Allow users holding all of `view.required_permissions`."""

    attribute = 'required_permissions'

    def check(self, user, required):
        return user.has_all_permissions(required)
