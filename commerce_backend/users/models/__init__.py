# users/models/__init__.py

"""
USERS MODELS PACKAGE EXPORTS

- User: staff account (back-office)
- Role / Permission / RolePermission: RBAC grants
"""

from .rbac import Permission, Role, RolePermission
from .user import User

__all__ = [
    "User",
    "Role",
    "Permission",
    "RolePermission",
]
