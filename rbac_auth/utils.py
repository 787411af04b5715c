from django.db import models
from django.db.models import Q
from django.utils.text import slugify

from rbac_auth.conf import settings


def slug_from(value):
    """Derive a slug the way every RBAC entity stores it."""
    return slugify(value or '')


def get_key(item, model):
    """
    Return the primary key for `item`.

    Arguments:
        item: (django.db.models.Model|int|str) instance or primary key
        model: (django.db.models.Model) the expected model class

    Raises:
        ValueError: `item` is an unsaved instance or of another model.
    """
    if isinstance(item, models.Model):
        if not isinstance(item, model):
            raise ValueError(
                '"{0}" is not a {1} instance'.format(
                    item, model.__name__))
        if item.pk is None:
            raise ValueError(
                'Cannot use an unsaved {0}: save it first'.format(
                    model.__name__))
        return item.pk
    return item


def lookup_q(item, model, prefix=''):
    """
    Return a Q object matching `item` by primary key or slug.

    Integers are treated as primary keys and strings as slugs, so a
    name made of digits still resolves to its own row.
    """
    if isinstance(item, models.Model):
        return Q(**{prefix + 'pk': get_key(item, model)})
    if isinstance(item, str):
        return Q(**{prefix + 'slug': slug_from(item)})
    return Q(**{prefix + 'pk': int(item)})


def lookup_keys(items, model):
    """
    Normalize a collection of instances/pks/slugs.

    Returns:
        (set, set): primary keys and slugs.
    """
    pks, slugs = set(), set()
    for item in items:
        if isinstance(item, models.Model):
            pks.add(get_key(item, model))
        elif isinstance(item, str):
            slugs.add(slug_from(item))
        else:
            pks.add(int(item))
    return pks, slugs


def count_matching(queryset, items, model):
    """
    Count how many of `items` are present in `queryset`.

    Returns:
        (int, int): matched and requested item counts.
    """
    pks, slugs = lookup_keys(items, model)
    if not pks and not slugs:
        return 0, 0
    matched = list(queryset.filter(
        Q(pk__in=pks) | Q(slug__in=slugs)
    ).values_list('pk', 'slug'))
    found_pks = {pk for pk, _ in matched}
    found_slugs = {slug for _, slug in matched}
    found = len(pks & found_pks) + len(slugs & found_slugs)
    return found, len(pks) + len(slugs)


def forget_prefetched(instance, *names):
    """Drop prefetched copies of relations so the next access re-reads."""
    cache = getattr(instance, '_prefetched_objects_cache', None)
    if cache:
        for name in names:
            cache.pop(name, None)


def is_role_holder(obj):
    """Check that `obj` exposes the role holder API."""
    holder_class = settings.ROLE_HOLDER_CLASS
    if holder_class is None:
        from rbac_auth.mixins import RoleHolderMixin
        holder_class = RoleHolderMixin
    return isinstance(obj, holder_class)


def is_bypassed(user):
    """Superusers skip checks when SUPERUSER_BYPASS is set."""
    return bool(
        settings.SUPERUSER_BYPASS and getattr(user, 'is_superuser', False)
    )
