# users/models/rbac.py

"""
RBAC MODELS

Role            named bundle of grants (names compared case-insensitively)
Permission      (resource, action), action in create/edit/delete/view
RolePermission  role <-> permission join, unique per pair
"""

from django.db import models


class Role(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)

    permissions = models.ManyToManyField(
        "users.Permission",
        through="users.RolePermission",
        related_name="roles",
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class Permission(models.Model):
    ACTION_CREATE = "create"
    ACTION_EDIT = "edit"
    ACTION_DELETE = "delete"
    ACTION_VIEW = "view"

    ACTION_CHOICES = [
        (ACTION_CREATE, "Create"),
        (ACTION_EDIT, "Edit"),
        (ACTION_DELETE, "Delete"),
        (ACTION_VIEW, "View"),
    ]

    resource = models.CharField(max_length=100)
    action = models.CharField(max_length=10, choices=ACTION_CHOICES)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["resource", "action"]
        constraints = [
            models.UniqueConstraint(
                fields=["resource", "action"],
                name="uniq_permission_resource_action",
            ),
        ]

    def __str__(self):
        return f"{self.resource}:{self.action}"


class RolePermission(models.Model):
    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name="grants")
    permission = models.ForeignKey(Permission, on_delete=models.CASCADE, related_name="grants")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["role", "permission"],
                name="uniq_role_permission",
            ),
        ]

    def __str__(self):
        return f"{self.role_id} -> {self.permission_id}"
