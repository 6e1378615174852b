# permissions/resolver.py

"""
PERMISSION RESOLVER (RBAC)

Answers: may the role `role_id` perform `action` on `resource`?

Resolution order:
1) admin_override and role name == "admin" (case-insensitive)  -> allow
2) role name in allowed_roles (case-insensitive)                -> allow
3) RolePermission(role, Permission(resource, action)) exists    -> allow
otherwise deny.

Failure modes:
- role_id missing        -> deny, reason NO_ROLE (distinct from a plain deny)
- lookup/database error  -> deny, reason ERROR (never allow)

No caching: every check reads current role/grant state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.db import DatabaseError

from users.models import Role, RolePermission

logger = logging.getLogger("rbac")

ADMIN_ROLE_NAME = "admin"

ACTION_CREATE = "create"
ACTION_EDIT = "edit"
ACTION_DELETE = "delete"
ACTION_VIEW = "view"

ACTIONS = (ACTION_CREATE, ACTION_EDIT, ACTION_DELETE, ACTION_VIEW)

# Decision reasons
REASON_ADMIN_OVERRIDE = "admin_override"
REASON_ALLOWED_ROLE = "allowed_role"
REASON_GRANTED = "granted"
REASON_NO_ROLE = "no_role"
REASON_MISSING_PERMISSION = "missing_permission"
REASON_ERROR = "error"


@dataclass(frozen=True)
class PermissionCheck:
    resource: str
    action: str


@dataclass(frozen=True)
class CheckOptions:
    allowed_roles: frozenset[str] = field(default_factory=frozenset)
    admin_override: bool = True


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str


def normalize_role_name(name: str | None) -> str:
    return (name or "").strip().lower()


def resolve(
    role_id: int | None,
    check: PermissionCheck,
    options: CheckOptions | None = None,
) -> Decision:
    options = options or CheckOptions()

    if role_id is None:
        return Decision(False, REASON_NO_ROLE)

    try:
        role = Role.objects.filter(pk=role_id).only("id", "name").first()
        if role is None:
            logger.warning(
                "rbac.unknown_role",
                extra={"role_id": role_id, "resource": check.resource, "action": check.action},
            )
            return Decision(False, REASON_MISSING_PERMISSION)

        role_name = normalize_role_name(role.name)

        if options.admin_override and role_name == ADMIN_ROLE_NAME:
            return Decision(True, REASON_ADMIN_OVERRIDE)

        allowed_names = {normalize_role_name(name) for name in options.allowed_roles}
        if role_name in allowed_names:
            return Decision(True, REASON_ALLOWED_ROLE)

        granted = RolePermission.objects.filter(
            role_id=role.id,
            permission__resource=check.resource,
            permission__action=check.action,
        ).exists()
    except DatabaseError:
        logger.exception(
            "rbac.resolution_failed",
            extra={"role_id": role_id, "resource": check.resource, "action": check.action},
        )
        return Decision(False, REASON_ERROR)

    if granted:
        return Decision(True, REASON_GRANTED)
    return Decision(False, REASON_MISSING_PERMISSION)


def has_permission(
    role_id: int | None,
    resource: str,
    action: str,
    *,
    allowed_roles=(),
    admin_override: bool = True,
) -> bool:
    decision = resolve(
        role_id,
        PermissionCheck(resource=resource, action=action),
        CheckOptions(allowed_roles=frozenset(allowed_roles), admin_override=admin_override),
    )
    return decision.allowed
