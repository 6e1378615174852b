from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from rest_framework.test import APIClient

from users.models import Permission, Role, RolePermission, User
from users.services.rbac_service import KNOWN_RESOURCES


class RoleManagementTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        admin = Role.objects.create(name="admin")
        self.client.force_authenticate(User.objects.create_user(email="root@example.com", password="pass", role=admin))
        self.role = Role.objects.create(name="packer")

    def test_sync_replaces_grant_set(self):
        old = Permission.objects.create(resource="coupons", action="view")
        RolePermission.objects.create(role=self.role, permission=old)

        response = self.client.post(
            f"/api/roles/{self.role.id}/permissions/",
            {"permissions": [{"resource": "orders", "actions": ["view", "edit", "view"]}]},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], {"added": 2, "removed": 1})
        self.assertEqual(
            sorted(self.role.permissions.values_list("resource", "action")),
            [("orders", "edit"), ("orders", "view")],
        )

    def test_sync_accepts_bare_list(self):
        response = self.client.post(
            f"/api/roles/{self.role.id}/permissions/",
            [{"resource": "orders", "actions": ["view"]}],
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["added"], 1)

    def test_sync_unknown_role(self):
        response = self.client.post(
            "/api/roles/999999/permissions/",
            {"permissions": []},
            format="json",
        )
        self.assertEqual(response.status_code, 404)

    def test_duplicate_permission_conflicts(self):
        Permission.objects.create(resource="orders", action="view")

        response = self.client.post("/api/permissions/", {"resource": "orders", "action": "view"}, format="json")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "duplicate_entry")

    def test_repoint_grant(self):
        view = Permission.objects.create(resource="orders", action="view")
        edit = Permission.objects.create(resource="orders", action="edit")
        grant = RolePermission.objects.create(role=self.role, permission=view)

        response = self.client.patch(
            f"/api/permissions/role-permissions/{grant.id}/",
            {"permission_id": edit.id},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        grant.refresh_from_db()
        self.assertEqual(grant.permission_id, edit.id)

    def test_repoint_onto_existing_grant_conflicts(self):
        view = Permission.objects.create(resource="orders", action="view")
        edit = Permission.objects.create(resource="orders", action="edit")
        RolePermission.objects.create(role=self.role, permission=edit)
        grant = RolePermission.objects.create(role=self.role, permission=view)

        response = self.client.patch(
            f"/api/permissions/role-permissions/{grant.id}/",
            {"permission_id": edit.id},
            format="json",
        )

        self.assertEqual(response.status_code, 409)

    def test_created_user_password_is_hashed(self):
        response = self.client.post(
            "/api/users/",
            {"email": "new@example.com", "password": "longenough1", "role": self.role.id},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        user = User.objects.get(email="new@example.com")
        self.assertNotEqual(user.password, "longenough1")
        self.assertTrue(user.check_password("longenough1"))


class GrantManagementGuardTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = Role.objects.create(name="manager")
        self.client.force_authenticate(
            User.objects.create_user(email="lead@example.com", password="pass", role=self.manager)
        )
        self.target = Role.objects.create(name="packer")

    def _grant(self, resource, action):
        permission = Permission.objects.create(resource=resource, action=action)
        RolePermission.objects.create(role=self.manager, permission=permission)
        return permission

    def _sync(self):
        return self.client.post(
            f"/api/roles/{self.target.id}/permissions/",
            [{"resource": "orders", "actions": ["view"]}],
            format="json",
        )

    def test_sync_requires_roles_edit(self):
        self._grant("roles", "view")

        response = self._sync()

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"]["code"], "permission_denied")
        self.assertFalse(self.target.permissions.exists())

    def test_sync_allowed_with_roles_edit(self):
        self._grant("roles", "edit")

        self.assertEqual(self._sync().status_code, 200)

    def test_repoint_requires_permissions_edit(self):
        view = self._grant("permissions", "view")
        grant = RolePermission.objects.create(role=self.target, permission=view)

        response = self.client.patch(
            f"/api/permissions/role-permissions/{grant.id}/",
            {"permission_id": view.id},
            format="json",
        )

        self.assertEqual(response.status_code, 403)


class SeedRbacCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_rbac", stdout=StringIO())
        call_command("seed_rbac", stdout=StringIO())

        self.assertTrue(Role.objects.filter(name="admin").exists())
        self.assertEqual(Permission.objects.count(), len(KNOWN_RESOURCES) * len(Permission.ACTION_CHOICES))
