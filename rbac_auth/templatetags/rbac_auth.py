"""Template filters for role and permission checks.

    {% load rbac_auth %}
    {% if request.user|has_role:"admin" %}...{% endif %}
    {% if request.user|can:"posts-create" %}...{% endif %}
"""
from django import template

from rbac_auth.utils import is_bypassed, is_role_holder

register = template.Library()


def _allowed(user, check, value):
    if not user or not getattr(user, 'is_authenticated', False):
        return False
    if is_bypassed(user):
        return True
    if not is_role_holder(user):
        return False
    values = [v.strip() for v in str(value).split(',') if v.strip()]
    if not values:
        return False
    return getattr(user, check)(values)


@register.filter
def has_role(user, roles):
    """True if `user` holds any of the comma-separated role slugs."""
    return _allowed(user, 'has_any_role', roles)


@register.filter
def can(user, permissions):
    """True if `user` holds all of the comma-separated permission slugs."""
    return _allowed(user, 'has_all_permissions', permissions)
