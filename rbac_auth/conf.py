import inspect

from django.conf import settings as django_settings
from django.test.signals import setting_changed

RBAC_AUTH = {
    # ROLES_TABLE: database table holding the roles.
    'ROLES_TABLE': 'roles',

    # PERMISSIONS_TABLE: database table holding the permissions.
    'PERMISSIONS_TABLE': 'permissions',

    # PERMISSIONS_GROUP_TABLE: database table holding the permission groups.
    'PERMISSIONS_GROUP_TABLE': 'permissions_group',

    # ROLE_USER_TABLE: pivot table between users and roles.
    'ROLE_USER_TABLE': 'role_user',

    # PERMISSION_ROLE_TABLE: pivot table between roles and permissions.
    'PERMISSION_ROLE_TABLE': 'permission_role',

    # SUPERUSER_BYPASS: superusers pass every role/permission check made
    # by the DRF permission classes and the template filters.
    'SUPERUSER_BYPASS': True,

    # ENABLE_SIGNALS: enable/disable the attach/detach signals.
    'ENABLE_SIGNALS': True,

    # ROLE_HOLDER_CLASS: class (or dotted path to a class) that the
    # template filters and DRF permissions treat as a role holder.
    # Defaults to `rbac_auth.mixins.RoleHolderMixin`.
    'ROLE_HOLDER_CLASS': None,
}

# Settings naming database tables; must be distinct non-empty strings.
TABLE_ATTRS = [
    'ROLES_TABLE',
    'PERMISSIONS_TABLE',
    'PERMISSIONS_GROUP_TABLE',
    'ROLE_USER_TABLE',
    'PERMISSION_ROLE_TABLE',
]

# Attributes where the value should be a class (or path to a class)
CLASS_ATTRS = [
    'ROLE_HOLDER_CLASS',
]


class Settings(object):
    """
    Read-through view of the `RBAC_AUTH` dict over the package defaults.

    Models read the table names at import time; the remaining keys are
    looked up on every check, so `override_settings` applies to them.
    """

    def __init__(self, name, defaults, settings, class_attrs=None):
        self.name = name
        self.defaults = defaults
        self.keys = set(defaults.keys())
        self.class_attrs = class_attrs or []

        self._cache = {}
        self._reload(getattr(settings, self.name, {}))

        setting_changed.connect(self._settings_changed)

    def _reload(self, value):
        """Reload settings after a change."""
        self.settings = value or {}
        self._cache = {}

    def _load_class(self, attr, val):
        if inspect.isclass(val):
            return val
        elif isinstance(val, str):
            parts = val.split('.')
            module_path = '.'.join(parts[:-1])
            class_name = parts[-1]
            mod = __import__(module_path, fromlist=[class_name])
            return getattr(mod, class_name)
        elif val:
            raise TypeError("%s must be string or a class" % attr)

    def __getattr__(self, attr):
        """Get a setting."""
        if attr not in self._cache:

            if attr not in self.keys:
                raise AttributeError("Invalid RBAC setting: '%s'" % attr)

            if attr in self.settings:
                val = self.settings[attr]
            else:
                val = self.defaults[attr]

            if attr in self.class_attrs and val:
                val = self._load_class(attr, val)

            # Cache the result
            self._cache[attr] = val

        return self._cache[attr]

    def _settings_changed(self, *args, **kwargs):
        """Handle changes to core settings."""
        setting, value = kwargs['setting'], kwargs['value']
        if setting == self.name:
            self._reload(value)


settings = Settings('RBAC_AUTH', RBAC_AUTH, django_settings, CLASS_ATTRS)
