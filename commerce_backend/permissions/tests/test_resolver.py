from unittest import mock

from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import TestCase
from rest_framework.exceptions import PermissionDenied
from rest_framework.test import APIRequestFactory

from permissions.drf import PermissionCheckFailed, RequiresPermission, ResourcePermission
from permissions.resolver import (
    REASON_ADMIN_OVERRIDE,
    REASON_ALLOWED_ROLE,
    REASON_ERROR,
    REASON_GRANTED,
    REASON_MISSING_PERMISSION,
    REASON_NO_ROLE,
    CheckOptions,
    PermissionCheck,
    has_permission,
    resolve,
)
from users.models import Permission, Role, RolePermission, User


class ResolverTests(TestCase):
    """
    GUARANTEES:
    - Admin override, allowed roles and grants are the only ways in
    - Missing role is reported separately from a plain deny
    - Lookup failures deny
    """

    def setUp(self):
        self.admin = Role.objects.create(name="Admin")
        self.manager = Role.objects.create(name="manager")
        self.support = Role.objects.create(name="support")

        view_orders = Permission.objects.create(resource="orders", action="view")
        RolePermission.objects.create(role=self.manager, permission=view_orders)

    def test_admin_override_is_case_insensitive(self):
        decision = resolve(self.admin.id, PermissionCheck("orders", "delete"))
        self.assertTrue(decision.allowed)
        self.assertEqual(decision.reason, REASON_ADMIN_OVERRIDE)

    def test_admin_override_can_be_disabled(self):
        decision = resolve(
            self.admin.id,
            PermissionCheck("orders", "delete"),
            CheckOptions(admin_override=False),
        )
        self.assertFalse(decision.allowed)
        self.assertEqual(decision.reason, REASON_MISSING_PERMISSION)

    def test_allowed_roles_match_case_insensitively(self):
        decision = resolve(
            self.support.id,
            PermissionCheck("orders", "edit"),
            CheckOptions(allowed_roles=frozenset({" SUPPORT "})),
        )
        self.assertTrue(decision.allowed)
        self.assertEqual(decision.reason, REASON_ALLOWED_ROLE)

    def test_grant_allows_only_that_action(self):
        granted = resolve(self.manager.id, PermissionCheck("orders", "view"))
        self.assertTrue(granted.allowed)
        self.assertEqual(granted.reason, REASON_GRANTED)

        self.assertFalse(has_permission(self.manager.id, "orders", "edit"))
        self.assertFalse(has_permission(self.manager.id, "coupons", "view"))

    def test_missing_role(self):
        decision = resolve(None, PermissionCheck("orders", "view"))
        self.assertFalse(decision.allowed)
        self.assertEqual(decision.reason, REASON_NO_ROLE)

    def test_unknown_role_is_denied(self):
        self.assertFalse(has_permission(999999, "orders", "view"))

    def test_database_error_denies(self):
        with mock.patch("permissions.resolver.Role.objects.filter", side_effect=DatabaseError("down")):
            decision = resolve(self.manager.id, PermissionCheck("orders", "view"))

        self.assertFalse(decision.allowed)
        self.assertEqual(decision.reason, REASON_ERROR)

    def test_grant_changes_apply_immediately(self):
        self.assertFalse(has_permission(self.support.id, "orders", "view"))

        RolePermission.objects.create(
            role=self.support,
            permission=Permission.objects.get(resource="orders", action="view"),
        )

        self.assertTrue(has_permission(self.support.id, "orders", "view"))


class _OrdersView:
    permission_resource = "orders"
    permission_actions = {"export": "view", "bulk_update": "edit"}

    def __init__(self, action):
        self.action = action


class ResourcePermissionTests(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()

        manager = Role.objects.create(name="manager")
        RolePermission.objects.create(
            role=manager,
            permission=Permission.objects.create(resource="orders", action="view"),
        )
        self.manager = User.objects.create_user(email="manager@example.com", password="pass", role=manager)
        self.roleless = User.objects.create_user(email="nobody@example.com", password="pass")

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------

    def _request_for(self, user):
        request = self.factory.get("/")
        request.user = user
        return request

    # --------------------------------------------------
    # ACTION MAPPING
    # --------------------------------------------------

    def test_default_and_custom_actions(self):
        request = self._request_for(self.manager)
        permission = ResourcePermission()

        self.assertTrue(permission.has_permission(request, _OrdersView("list")))
        self.assertTrue(permission.has_permission(request, _OrdersView("export")))

        with self.assertRaises(PermissionDenied):
            permission.has_permission(request, _OrdersView("bulk_update"))
        with self.assertRaises(PermissionDenied):
            permission.has_permission(request, _OrdersView("destroy"))

    def test_unmapped_action_is_denied(self):
        request = self._request_for(self.manager)
        self.assertFalse(ResourcePermission().has_permission(request, _OrdersView("unknown")))

    def test_anonymous_is_denied(self):
        request = self._request_for(AnonymousUser())
        self.assertFalse(ResourcePermission().has_permission(request, _OrdersView("list")))

    def test_no_role_code(self):
        request = self._request_for(self.roleless)

        with self.assertRaises(PermissionDenied) as ctx:
            ResourcePermission().has_permission(request, _OrdersView("list"))

        self.assertEqual(ctx.exception.get_codes(), "no_role")

    # --------------------------------------------------
    # SINGLE CHECK
    # --------------------------------------------------

    def test_requires_permission(self):
        request = self._request_for(self.manager)

        self.assertTrue(RequiresPermission("orders", "view")().has_permission(request, None))
        self.assertTrue(
            RequiresPermission("coupons", "edit", allowed_roles=["manager"])().has_permission(request, None)
        )
        with self.assertRaises(PermissionDenied):
            RequiresPermission("coupons", "edit")().has_permission(request, None)

    def test_resolver_failure_surfaces_as_server_error(self):
        request = self._request_for(self.manager)

        with mock.patch("permissions.resolver.Role.objects.filter", side_effect=DatabaseError("down")):
            with self.assertRaises(PermissionCheckFailed):
                RequiresPermission("orders", "view")().has_permission(request, None)
