from .auth import LoginView, LogoutView, RefreshView
from .me import MeView
from .rbac import PermissionViewSet, RoleViewSet
from .users import UserViewSet

__all__ = [
    "LoginView",
    "RefreshView",
    "LogoutView",
    "MeView",
    "UserViewSet",
    "RoleViewSet",
    "PermissionViewSet",
]
