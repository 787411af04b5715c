"""RBAC models: roles, permissions and permission groups.

Users are the host project's `AUTH_USER_MODEL`; they take part in the
graph through `Role.users` (reverse name `roles`) and gain the check
API by inheriting `rbac_auth.mixins.RoleHolderMixin`.
"""
import logging

from django.conf import settings as django_settings
from django.contrib.auth import get_user_model
from django.db import models, transaction
from django.db.models import ProtectedError

from rbac_auth import signals
from rbac_auth.conf import settings
from rbac_auth.querysets import (
    NO_GROUP,
    PermissionQuerySet,
    PermissionsGroupQuerySet,
    RoleQuerySet
)
from rbac_auth.utils import (
    count_matching,
    forget_prefetched,
    get_key,
    lookup_q,
    slug_from
)

logger = logging.getLogger(__name__)


def resolve(model, item):
    """Return a saved `model` instance for an instance, pk or slug."""
    if isinstance(item, models.Model):
        get_key(item, model)
        return item
    return model.objects.get(lookup_q(item, model))


def resolve_user(user):
    user_model = get_user_model()
    if isinstance(user, models.Model):
        get_key(user, user_model)
        return user
    return user_model.objects.get(pk=user)


class AuthModel(models.Model):
    """Named, slugged and timestamped base of the RBAC entities."""

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def __str__(self):
        return self.name

    def set_name(self, name):
        """Set the name and derive the slug from it."""
        self.name = name
        self.slug = slug_from(name)

    def save(self, *args, **kwargs):
        self.slug = slug_from(self.slug or self.name)
        super().save(*args, **kwargs)


class PermissionsGroup(AuthModel):
    """Named container of permissions (one-to-many via `group_id`)."""

    objects = PermissionsGroupQuerySet.as_manager()

    class Meta:
        db_table = settings.PERMISSIONS_GROUP_TABLE
        verbose_name = 'permissions group'

    def create_permission(self, attributes, reload=True):
        """Create a permission inside this group."""
        permission = self.permissions.create(**attributes)
        logger.debug('Created permission %s in group %s',
                     permission.slug, self.slug)
        signals.send(
            signals.permission_grouped,
            sender=PermissionsGroup,
            group=self,
            permission=permission
        )
        if reload:
            forget_prefetched(self, 'permissions')
        return permission

    def attach_permission(self, permission, reload=True):
        """
        Move a permission into this group.

        Returns:
            (bool) False if the permission already belonged to the group.
        """
        if self.has_permission(permission):
            return False

        permission = resolve(Permission, permission)
        permission.group_id = self.pk
        permission.save(update_fields=['group', 'updated_at'])
        logger.debug('Attached permission %s to group %s',
                     permission.slug, self.slug)
        signals.send(
            signals.permission_grouped,
            sender=PermissionsGroup,
            group=self,
            permission=permission
        )

        if reload:
            forget_prefetched(self, 'permissions')
        return True

    def attach_permission_by_id(self, id, reload=True):
        permission = Permission.objects.get(pk=id)
        self.attach_permission(permission, reload)
        return permission

    def attach_permissions(self, permissions, reload=True):
        """Attach many permissions; returns how many actually moved."""
        with transaction.atomic():
            attached = sum(
                1 for permission in permissions
                if self.attach_permission(permission, reload=False)
            )
        if reload:
            forget_prefetched(self, 'permissions')
        return attached

    def detach_permission(self, permission, reload=True):
        """
        Take a permission out of this group.

        The permission is kept and becomes ungrouped (`group_id = 0`).

        Returns:
            (bool) False if the permission was not in the group.
        """
        if not self.has_permission(permission):
            return False

        permission = resolve(Permission, permission)
        permission.group_id = NO_GROUP
        permission.save(update_fields=['group', 'updated_at'])
        logger.debug('Detached permission %s from group %s',
                     permission.slug, self.slug)
        signals.send(
            signals.permission_ungrouped,
            sender=PermissionsGroup,
            group=self,
            permission=permission
        )

        if reload:
            forget_prefetched(self, 'permissions')
        return True

    def detach_permission_by_id(self, id, reload=True):
        permission = Permission.objects.get(pk=id)
        self.detach_permission(permission, reload)
        return permission

    def detach_all_permissions(self, reload=True):
        """Ungroup every permission of this group; returns the count."""
        permissions = list(self.permissions.all())
        if permissions:
            Permission.objects.filter(
                pk__in=[permission.pk for permission in permissions]
            ).update(group_id=NO_GROUP)
        for permission in permissions:
            permission.group_id = NO_GROUP
            signals.send(
                signals.permission_ungrouped,
                sender=PermissionsGroup,
                group=self,
                permission=permission
            )
        logger.debug('Detached %d permission(s) from group %s',
                     len(permissions), self.slug)

        if reload:
            forget_prefetched(self, 'permissions')
        return len(permissions)

    def has_permission(self, permission):
        """Check if the permission (instance, pk or slug) is in the group."""
        return self.permissions.filter(
            lookup_q(permission, Permission)
        ).exists()


class Permission(AuthModel):
    """
    A named ability, optionally filed under a `PermissionsGroup`.

    `group_id` is 0 for ungrouped permissions, so the column carries no
    database-level foreign key constraint. It is nullable so joins on the
    group are outer joins and keep ungrouped rows.
    """

    group = models.ForeignKey(
        PermissionsGroup,
        related_name='permissions',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        default=NO_GROUP,
        null=True,
        blank=True,
    )

    objects = PermissionQuerySet.as_manager()

    class Meta:
        db_table = settings.PERMISSIONS_TABLE

    def has_group(self):
        return self.group_id not in (NO_GROUP, None)

    def get_group(self):
        """Return the group, or None when ungrouped."""
        if not self.has_group():
            return None
        try:
            return self.group
        except PermissionsGroup.DoesNotExist:
            return None

    def attach_role(self, role):
        return resolve(Role, role).attach_permission(self)

    def detach_role(self, role):
        return resolve(Role, role).detach_permission(self)

    def detach_all_roles(self):
        roles = list(self.roles.all())
        with transaction.atomic():
            for role in roles:
                role.detach_permission(self)
        forget_prefetched(self, 'roles')
        return len(roles)

    def has_role(self, role):
        return self.roles.filter(lookup_q(role, Role)).exists()


class Role(AuthModel):
    """
    A named set of permissions assigned to users.

    Only active roles grant their permissions to users. Locked roles
    cannot be deleted.
    """

    is_active = models.BooleanField(default=True)
    is_locked = models.BooleanField(default=False)
    permissions = models.ManyToManyField(
        Permission,
        related_name='roles',
        db_table=settings.PERMISSION_ROLE_TABLE,
        blank=True,
    )
    users = models.ManyToManyField(
        django_settings.AUTH_USER_MODEL,
        related_name='roles',
        db_table=settings.ROLE_USER_TABLE,
        blank=True,
    )

    objects = RoleQuerySet.as_manager()

    class Meta:
        db_table = settings.ROLES_TABLE

    def delete(self, *args, **kwargs):
        if self.is_locked:
            raise ProtectedError(
                "Cannot delete the locked role '%s'" % self.slug, {self}
            )
        return super().delete(*args, **kwargs)

    # Flags

    def activate(self):
        self._set_flag('is_active', True)

    def deactivate(self):
        self._set_flag('is_active', False)

    def lock(self):
        self._set_flag('is_locked', True)

    def unlock(self):
        self._set_flag('is_locked', False)

    def _set_flag(self, name, value):
        if getattr(self, name) == value:
            return
        setattr(self, name, value)
        self.save(update_fields=[name, 'updated_at'])
        logger.info('Role %s: %s set to %s', self.slug, name, value)

    # Permissions

    def attach_permission(self, permission):
        """
        Grant a permission to this role.

        Returns:
            (bool) False if the role already had the permission.
        """
        if self.has_permission(permission):
            return False

        permission = resolve(Permission, permission)
        self.permissions.add(permission)
        forget_prefetched(permission, 'roles')
        logger.debug('Attached permission %s to role %s',
                     permission.slug, self.slug)
        signals.send(
            signals.permission_attached,
            sender=Role,
            role=self,
            permission=permission
        )
        return True

    def attach_permissions(self, permissions):
        """Attach many permissions; returns how many were added."""
        with transaction.atomic():
            return sum(
                1 for permission in permissions
                if self.attach_permission(permission)
            )

    def detach_permission(self, permission):
        """Revoke a permission; returns the number of pivot rows removed."""
        if not self.has_permission(permission):
            return 0

        permission = resolve(Permission, permission)
        self.permissions.remove(permission)
        forget_prefetched(permission, 'roles')
        logger.debug('Detached permission %s from role %s',
                     permission.slug, self.slug)
        signals.send(
            signals.permission_detached,
            sender=Role,
            role=self,
            permission=permission
        )
        return 1

    def detach_all_permissions(self):
        """Revoke every permission; returns the number removed."""
        permissions = list(self.permissions.all())
        self.permissions.clear()
        for permission in permissions:
            signals.send(
                signals.permission_detached,
                sender=Role,
                role=self,
                permission=permission
            )
        logger.debug('Detached %d permission(s) from role %s',
                     len(permissions), self.slug)
        return len(permissions)

    def has_permission(self, permission):
        """Check if the role holds the permission (instance, pk or slug)."""
        return self.permissions.filter(
            lookup_q(permission, Permission)
        ).exists()

    def has_any_permission(self, permissions):
        found, _ = count_matching(
            self.permissions.all(), permissions, Permission
        )
        return found > 0

    def has_all_permissions(self, permissions):
        found, requested = count_matching(
            self.permissions.all(), permissions, Permission
        )
        return found == requested

    # Users

    def attach_user(self, user):
        """
        Assign this role to a user.

        Returns:
            (bool) False if the user already had the role.
        """
        if self.has_user(user):
            return False

        user = resolve_user(user)
        self.users.add(user)
        forget_prefetched(user, 'roles')
        logger.debug('Attached role %s to user %s', self.slug, user.pk)
        signals.send(
            signals.role_attached,
            sender=type(user),
            user=user,
            role=self
        )
        return True

    def detach_user(self, user):
        """Unassign this role; returns the number of pivot rows removed."""
        if not self.has_user(user):
            return 0

        user = resolve_user(user)
        self.users.remove(user)
        forget_prefetched(user, 'roles')
        logger.debug('Detached role %s from user %s', self.slug, user.pk)
        signals.send(
            signals.role_detached,
            sender=type(user),
            user=user,
            role=self
        )
        return 1

    def detach_all_users(self):
        users = list(self.users.all())
        self.users.clear()
        for user in users:
            signals.send(
                signals.role_detached,
                sender=type(user),
                user=user,
                role=self
            )
        return len(users)

    def has_user(self, user):
        return self.users.filter(
            pk=get_key(user, get_user_model())
        ).exists()
