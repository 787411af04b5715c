"""Signals sent when the authorization graph changes.

Each signal is sent only when the relation actually changed, so
receivers never see the no-op half of an idempotent attach.
"""
from django.db.models.signals import pre_delete
from django.dispatch import Signal, receiver

from rbac_auth.conf import settings

# sender: the user model; kwargs: user, role
role_attached = Signal()
role_detached = Signal()

# sender: Role; kwargs: role, permission
permission_attached = Signal()
permission_detached = Signal()

# sender: PermissionsGroup; kwargs: group, permission
permission_grouped = Signal()
permission_ungrouped = Signal()


def send(signal, sender, **kwargs):
    if settings.ENABLE_SIGNALS:
        signal.send(sender=sender, **kwargs)


@receiver(pre_delete, sender='rbac_auth.PermissionsGroup')
def ungroup_permissions(sender, instance, **kwargs):
    """Re-parent the permissions of a group that is being deleted."""
    instance.detach_all_permissions(reload=False)
