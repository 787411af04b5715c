"""RBAC Auth is a role-based access control add-on for Django.

It provides:

- Roles, permissions and permission groups as Django models
- Attach/detach/check operations between users, roles and permissions
- A user model mixin for role and permission checks
- Template filters and Django REST Framework permission classes
"""
__version__ = "1.0.0"
