from django.test import TestCase
from rest_framework.test import APIClient

from store.models import Store
from users.models import Role, User


class StoreApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        admin = User.objects.create_user(
            email="ops@example.com",
            password="pass",
            role=Role.objects.create(name="admin"),
        )
        self.client.force_authenticate(admin)

    def test_duplicate_code_conflicts(self):
        Store.objects.create(name="Main", code="NBO-1")

        response = self.client.post("/api/stores/", {"name": "Other", "code": "NBO-1"}, format="json")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "duplicate_entry")

    def test_renaming_to_taken_code_conflicts(self):
        Store.objects.create(name="Main", code="NBO-1")
        other = Store.objects.create(name="Other", code="NBO-2")

        response = self.client.patch(f"/api/stores/{other.id}/", {"code": "NBO-1"}, format="json")

        self.assertEqual(response.status_code, 409)
        other.refresh_from_db()
        self.assertEqual(other.code, "NBO-2")

    def test_stores_without_code_may_coexist(self):
        self.assertEqual(self.client.post("/api/stores/", {"name": "A"}, format="json").status_code, 201)
        self.assertEqual(self.client.post("/api/stores/", {"name": "B"}, format="json").status_code, 201)

    def test_public_listing_needs_no_auth(self):
        Store.objects.create(name="Open", code="OPEN")
        Store.objects.create(name="Closed", code="SHUT", is_active=False)

        self.client.force_authenticate(None)
        response = self.client.get("/api/stores/public/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual([s["name"] for s in response.json()["data"]], ["Open"])

    def test_detail_counts_staff_and_orders(self):
        store = Store.objects.create(name="Main", code="MAIN")
        User.objects.create_user(email="clerk@example.com", password="pass", store=store)

        response = self.client.get(f"/api/stores/{store.id}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["staff_count"], 1)
        self.assertEqual(response.json()["data"]["order_count"], 0)

    def test_blank_code_is_stored_as_null(self):
        response = self.client.post("/api/stores/", {"name": "Kiosk", "code": "  "}, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.json()["data"]["code"])
