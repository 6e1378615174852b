from django.test import TestCase
from rest_framework.test import APIClient

from catalog.models import Brand
from common.crud import CrudNotFoundError, ModelService
from users.models import Permission, Role, RolePermission, User


class ModelServiceTests(TestCase):
    def setUp(self):
        self.service = ModelService(Brand, ordering=("name",))

    def test_soft_deleted_records_are_hidden(self):
        kept = Brand.objects.create(name="Acme")
        gone = Brand.objects.create(name="Zeta")

        self.service.delete(gone.id)

        self.assertEqual(list(self.service.list()), [kept])
        self.assertTrue(Brand.objects.filter(pk=gone.id, deleted_at__isnull=False).exists())
        with self.assertRaises(CrudNotFoundError):
            self.service.get_by_id(gone.id)

    def test_missing_record_message(self):
        with self.assertRaises(CrudNotFoundError) as ctx:
            self.service.get_by_id(424242)
        self.assertEqual(ctx.exception.message, "Brand with ID 424242 not found")


class CrudEndpointTests(TestCase):
    """
    Generated CRUD endpoints, exercised through /api/brands/.

    GUARANTEES:
    - Ids are validated before any lookup (400)
    - Missing or soft-deleted records are 404
    - Body id and URL id must agree
    - Every action is gated by its own permission
    """

    def setUp(self):
        self.client = APIClient()
        admin_role = Role.objects.create(name="admin")
        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role=admin_role)
        self.client.force_authenticate(self.admin)

    # --------------------------------------------------
    # HAPPY PATH
    # --------------------------------------------------

    def test_create_list_update_delete(self):
        response = self.client.post("/api/brands/", {"name": "Acme", "description": "Tools"}, format="json")
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["message"], "Created brand")
        brand_id = response.json()["data"]["id"]

        response = self.client.get("/api/brands/")
        self.assertEqual([b["name"] for b in response.json()["data"]], ["Acme"])

        response = self.client.patch(f"/api/brands/{brand_id}/", {"description": "Hardware"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["description"], "Hardware")
        self.assertEqual(response.json()["data"]["name"], "Acme")

        response = self.client.delete(f"/api/brands/{brand_id}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], {"id": brand_id})
        self.assertEqual(response.json()["message"], f"Deleted brand with ID {brand_id}")

        self.assertEqual(self.client.get(f"/api/brands/{brand_id}/").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/brands/{brand_id}/").status_code, 404)

    # --------------------------------------------------
    # ERRORS
    # --------------------------------------------------

    def test_invalid_ids(self):
        for raw in ("abc", "0", "-1", "1.5"):
            response = self.client.get(f"/api/brands/{raw}/")
            self.assertEqual(response.status_code, 400, raw)
            self.assertEqual(response.json()["error"]["code"], "invalid_parameter")

    def test_body_id_mismatch(self):
        brand = Brand.objects.create(name="Acme")

        response = self.client.put(f"/api/brands/{brand.id}/", {"id": brand.id + 1, "name": "X"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "id_mismatch")
        brand.refresh_from_db()
        self.assertEqual(brand.name, "Acme")

    def test_validation_happens_before_write(self):
        response = self.client.post("/api/brands/", {"description": "no name"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["details"][0]["field"], "name")
        self.assertFalse(Brand.objects.exists())

    def test_duplicate_is_conflict(self):
        Brand.objects.create(name="Acme")

        response = self.client.post("/api/brands/", {"name": "Acme"}, format="json")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "duplicate_entry")

    # --------------------------------------------------
    # PERMISSIONS
    # --------------------------------------------------

    def test_actions_map_to_grants(self):
        viewer = Role.objects.create(name="viewer")
        RolePermission.objects.create(
            role=viewer,
            permission=Permission.objects.create(resource="brands", action="view"),
        )
        user = User.objects.create_user(email="viewer@example.com", password="pass", role=viewer)
        self.client.force_authenticate(user)

        self.assertEqual(self.client.get("/api/brands/").status_code, 200)

        response = self.client.post("/api/brands/", {"name": "Acme"}, format="json")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"]["code"], "permission_denied")
        self.assertFalse(Brand.objects.exists())

    def test_anonymous_is_unauthorized(self):
        self.client.force_authenticate(None)
        self.assertEqual(self.client.get("/api/brands/").status_code, 401)
