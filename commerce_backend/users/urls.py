# users/urls.py

from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import (
    LoginView,
    LogoutView,
    MeView,
    PermissionViewSet,
    RefreshView,
    RoleViewSet,
    UserViewSet,
)

router = SimpleRouter()
router.register("users", UserViewSet, basename="user")
router.register("roles", RoleViewSet, basename="role")
router.register("permissions", PermissionViewSet, basename="permission")

urlpatterns = [
    # ---------------- STAFF AUTH ----------------
    path("auth/login/", LoginView.as_view(), name="staff-login"),
    path("auth/refresh/", RefreshView.as_view(), name="staff-refresh"),
    path("auth/logout/", LogoutView.as_view(), name="staff-logout"),
    path("auth/me/", MeView.as_view(), name="staff-me"),
    # ---------------- MANAGEMENT ----------------
    *router.urls,
]
