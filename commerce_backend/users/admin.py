# users/admin.py

"""
USERS ADMIN REGISTRATION

Staff users plus the RBAC tables (roles, permissions, grants).
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from users.models import Permission, Role, RolePermission, User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    ordering = ("email",)
    list_display = ("email", "name", "role", "store", "is_staff", "is_active", "deleted_at")
    list_filter = ("role", "is_staff", "is_active", "is_superuser")
    search_fields = ("email", "name", "phone")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "phone", "role", "store")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser")}),
        ("Lifecycle", {"fields": ("last_login", "deleted_at")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2", "role", "is_staff", "is_active"),
            },
        ),
    )


class RolePermissionInline(admin.TabularInline):
    model = RolePermission
    extra = 0


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "deleted_at")
    search_fields = ("name",)
    inlines = [RolePermissionInline]


@admin.register(Permission)
class PermissionAdmin(admin.ModelAdmin):
    list_display = ("id", "resource", "action")
    list_filter = ("action",)
    search_fields = ("resource",)
