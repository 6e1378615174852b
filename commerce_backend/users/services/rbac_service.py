# users/services/rbac_service.py

"""
RBAC MANAGEMENT SERVICE

- create_permission: (resource, action) unique; duplicate -> 409
- sync_role_permissions: make a role's grants equal a desired set
  (upsert permissions, drop grants not desired, add missing), atomically
- repoint_role_permission: change the role and/or permission of one grant
- seed_defaults: admin role + view/create/edit/delete for every known resource
"""

from __future__ import annotations

import logging

from django.db import transaction

from common.crud import CrudNotFoundError, ModelService
from common.exceptions import ConflictError, NotFoundError
from users.models import Permission, Role, RolePermission

logger = logging.getLogger("rbac")

KNOWN_RESOURCES = (
    "users",
    "roles",
    "permissions",
    "stores",
    "brands",
    "categories",
    "tags",
    "attributes",
    "attribute_values",
    "products",
    "variants",
    "inventory",
    "coupons",
    "orders",
)


class DuplicatePermissionError(ConflictError):
    code = "duplicate_entry"


class RolePermissionNotFoundError(NotFoundError):
    pass


role_service = ModelService(Role, prefetch_related=("permissions",), ordering=("name", "id"))


def create_permission(*, resource: str, action: str) -> Permission:
    if Permission.objects.filter(resource=resource, action=action).exists():
        raise DuplicatePermissionError(
            f"Permission {resource}:{action} already exists",
            details={"resource": resource, "action": action},
        )
    return Permission.objects.create(resource=resource, action=action)


@transaction.atomic
def sync_role_permissions(*, role_id: int, desired: list[dict]) -> dict:
    """
    desired: [{"resource": "orders", "actions": ["view", "edit"]}, ...]

    Returns {"added": n, "removed": n}.
    """
    role = role_service.get_by_id(role_id)

    desired_ids: set[int] = set()
    for entry in desired:
        for action in dict.fromkeys(entry["actions"]):
            permission, _ = Permission.objects.get_or_create(
                resource=entry["resource"],
                action=action,
            )
            desired_ids.add(permission.id)

    current_ids = set(
        RolePermission.objects.filter(role=role).values_list("permission_id", flat=True)
    )

    to_remove = current_ids - desired_ids
    to_add = desired_ids - current_ids

    if to_remove:
        RolePermission.objects.filter(role=role, permission_id__in=to_remove).delete()
    RolePermission.objects.bulk_create(
        [RolePermission(role=role, permission_id=pid) for pid in sorted(to_add)]
    )

    logger.info(
        "rbac.role_permissions_synced",
        extra={"role_id": role.id, "added": len(to_add), "removed": len(to_remove)},
    )
    return {"added": len(to_add), "removed": len(to_remove)}


@transaction.atomic
def repoint_role_permission(
    *,
    role_permission_id: int,
    role_id: int | None = None,
    permission_id: int | None = None,
) -> RolePermission:
    grant = RolePermission.objects.select_for_update().filter(pk=role_permission_id).first()
    if grant is None:
        raise RolePermissionNotFoundError(f"Role permission with ID {role_permission_id} not found")

    if role_id is not None:
        try:
            grant.role = role_service.get_by_id(role_id)
        except CrudNotFoundError as exc:
            raise NotFoundError(f"Role with ID {role_id} not found") from exc

    if permission_id is not None:
        permission = Permission.objects.filter(pk=permission_id).first()
        if permission is None:
            raise NotFoundError(f"Permission with ID {permission_id} not found")
        grant.permission = permission

    clash = (
        RolePermission.objects.filter(role_id=grant.role_id, permission_id=grant.permission_id)
        .exclude(pk=grant.pk)
        .exists()
    )
    if clash:
        raise ConflictError("Role already has this permission", details={"role_id": grant.role_id})

    grant.save(update_fields=["role", "permission"])
    return grant


@transaction.atomic
def seed_defaults() -> dict:
    admin_role, role_created = Role.objects.get_or_create(name="admin")

    created = 0
    for resource in KNOWN_RESOURCES:
        for action, _label in Permission.ACTION_CHOICES:
            _, was_created = Permission.objects.get_or_create(resource=resource, action=action)
            created += int(was_created)

    return {"admin_role_id": admin_role.id, "role_created": role_created, "permissions_created": created}
