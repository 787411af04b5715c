"""Django app config for rbac_auth."""
from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured

from rbac_auth.conf import TABLE_ATTRS, settings


class RbacAuthConfig(AppConfig):
    """Django app config for rbac_auth."""

    name = "rbac_auth"
    verbose_name = "RBAC Auth"
    default_auto_field = "django.db.models.AutoField"

    def ready(self):
        """Perform app config checks and connect the signal receivers."""
        tables = [getattr(settings, attr) for attr in TABLE_ATTRS]
        for attr, table in zip(TABLE_ATTRS, tables):
            if not isinstance(table, str) or not table:
                raise ImproperlyConfigured(
                    f"RBAC_AUTH['{attr}'] must be a non-empty string, "
                    f"got {table!r}"
                )
        if len(set(tables)) != len(tables):
            raise ImproperlyConfigured(
                "RBAC_AUTH table names must be distinct, got "
                + ", ".join(tables)
            )

        from rbac_auth import signals  # noqa: F401
