from django.db import models
from django.db.models import ProtectedError

from rbac_auth.utils import slug_from

NO_GROUP = 0


class SluggedQuerySet(models.QuerySet):
    def by_slug(self, slug):
        return self.get(slug=slug_from(slug))


class RoleQuerySet(SluggedQuerySet):
    def active(self):
        return self.filter(is_active=True)

    def inactive(self):
        return self.filter(is_active=False)

    def locked(self):
        return self.filter(is_locked=True)

    def delete(self):
        locked = set(self.filter(is_locked=True))
        if locked:
            raise ProtectedError(
                'Cannot delete locked roles: %s' % ', '.join(
                    sorted(role.slug for role in locked)),
                locked
            )
        return super().delete()


class PermissionQuerySet(SluggedQuerySet):
    def ungrouped(self):
        return self.filter(
            models.Q(group_id=NO_GROUP) | models.Q(group_id__isnull=True)
        )

    def for_user(self, user):
        """Permissions held by `user` through its active roles."""
        return self.filter(
            roles__users=user,
            roles__is_active=True,
        ).distinct()


class PermissionsGroupQuerySet(SluggedQuerySet):
    pass
