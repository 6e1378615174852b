# permissions/drf.py

"""
DRF ADAPTERS FOR THE PERMISSION RESOLVER

Usage (viewsets):
    permission_classes = [IsAuthenticated, ResourcePermission]
    permission_resource = "orders"
    permission_actions = {"analytics": "view", "bulk_update": "edit"}

Usage (single check):
    permission_classes = [IsAuthenticated, RequiresPermission("orders", "view")]

Denials:
- no role on the staff user  -> 403 code "no_role"
- missing grant              -> 403 code "permission_denied"
- resolver failure           -> 500 code "permission_check_failed"
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.exceptions import APIException, PermissionDenied
from rest_framework.permissions import BasePermission

from permissions.resolver import (
    ACTION_CREATE,
    ACTION_DELETE,
    ACTION_EDIT,
    ACTION_VIEW,
    REASON_ERROR,
    REASON_NO_ROLE,
    CheckOptions,
    PermissionCheck,
    resolve,
)

logger = logging.getLogger("rbac")

DEFAULT_ACTION_MAP = {
    "list": ACTION_VIEW,
    "retrieve": ACTION_VIEW,
    "metadata": ACTION_VIEW,
    "create": ACTION_CREATE,
    "update": ACTION_EDIT,
    "partial_update": ACTION_EDIT,
    "destroy": ACTION_DELETE,
}


class PermissionCheckFailed(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Could not verify permissions."
    default_code = "permission_check_failed"


def enforce(user, check: PermissionCheck, options: CheckOptions | None = None) -> bool:
    """
    Resolve and translate the decision into DRF exceptions.
    Returns True when allowed; raises otherwise.
    """
    decision = resolve(getattr(user, "role_id", None), check, options)

    if decision.allowed:
        return True

    extra = {
        "user_id": getattr(user, "pk", None),
        "resource": check.resource,
        "action": check.action,
        "reason": decision.reason,
    }

    if decision.reason == REASON_NO_ROLE:
        logger.info("rbac.denied", extra=extra)
        raise PermissionDenied("No role in session.", code="no_role")

    if decision.reason == REASON_ERROR:
        raise PermissionCheckFailed()

    logger.info("rbac.denied", extra=extra)
    raise PermissionDenied(
        f"Permission denied: {check.action} on {check.resource}.",
        code="permission_denied",
    )


class ResourcePermission(BasePermission):
    """
    Reads `permission_resource` and maps the viewset action (or the view's
    `permission_action` for APIViews) onto create/edit/delete/view.

    Views that declare neither are denied.
    """

    def _action_for(self, view) -> str | None:
        explicit = getattr(view, "permission_action", None)
        if explicit:
            return explicit

        action = getattr(view, "action", None)
        if action is None:
            return ACTION_VIEW

        mapping = {**DEFAULT_ACTION_MAP, **getattr(view, "permission_actions", {})}
        return mapping.get(action)

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        resource = getattr(view, "permission_resource", None)
        action = self._action_for(view)
        if not resource or not action:
            return False

        options = CheckOptions(
            allowed_roles=frozenset(getattr(view, "permission_allowed_roles", ())),
            admin_override=getattr(view, "permission_admin_override", True),
        )
        return enforce(user, PermissionCheck(resource=resource, action=action), options)


def RequiresPermission(
    resource: str,
    action: str,
    *,
    allowed_roles=(),
    admin_override: bool = True,
):
    """Build a permission class bound to one (resource, action) pair."""

    check = PermissionCheck(resource=resource, action=action)
    options = CheckOptions(allowed_roles=frozenset(allowed_roles), admin_override=admin_override)

    class _RequiresPermission(BasePermission):
        def has_permission(self, request, view):
            user = request.user
            if not user or not user.is_authenticated:
                return False
            return enforce(user, check, options)

    _RequiresPermission.__name__ = f"Requires_{resource}_{action}"
    return _RequiresPermission
