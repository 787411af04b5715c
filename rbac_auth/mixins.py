from django.db import transaction

from rbac_auth.models import Permission, Role, resolve
from rbac_auth.utils import count_matching, forget_prefetched, lookup_q


class RoleHolderMixin(object):
    """
    Role and permission API for the host project's user model.

    Usage:
        class User(RoleHolderMixin, AbstractUser):
            pass

    The `roles` relation itself is declared on `Role.users`, so the mixin
    adds no fields and needs no migration of its own.
    """

    def attach_role(self, role):
        attached = resolve(Role, role).attach_user(self)
        forget_prefetched(self, 'roles')
        return attached

    def attach_roles(self, roles):
        with transaction.atomic():
            return sum(1 for role in roles if self.attach_role(role))

    def detach_role(self, role):
        detached = resolve(Role, role).detach_user(self)
        forget_prefetched(self, 'roles')
        return detached

    def detach_all_roles(self):
        roles = list(self.roles.all())
        with transaction.atomic():
            for role in roles:
                role.detach_user(self)
        forget_prefetched(self, 'roles')
        return len(roles)

    def has_role(self, role):
        return self.roles.filter(lookup_q(role, Role)).exists()

    def has_any_role(self, roles):
        found, _ = count_matching(self.roles.all(), roles, Role)
        return found > 0

    def has_all_roles(self, roles):
        found, requested = count_matching(self.roles.all(), roles, Role)
        return found == requested

    def get_rbac_permissions(self):
        """Distinct permissions granted through the user's active roles."""
        return Permission.objects.for_user(self)

    def has_permission(self, permission):
        return self.get_rbac_permissions().filter(
            lookup_q(permission, Permission)
        ).exists()

    def has_any_permission(self, permissions):
        found, _ = count_matching(
            self.get_rbac_permissions(), permissions, Permission
        )
        return found > 0

    def has_all_permissions(self, permissions):
        found, requested = count_matching(
            self.get_rbac_permissions(), permissions, Permission
        )
        return found == requested
