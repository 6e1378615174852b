from django.test import TestCase
from rest_framework.test import APIClient

from catalog.models import Attribute, AttributeValue
from catalog.services.attribute_values import NoNewAttributeValuesError, create_values
from common.exceptions import NotFoundError
from users.models import Role, User


class CreateValuesTests(TestCase):
    def setUp(self):
        self.size = Attribute.objects.create(name="Size")

    def test_batch_is_deduplicated_and_ordered(self):
        created = create_values(attribute_id=self.size.id, values=["S", "M", " S ", "L"])

        self.assertEqual([(v.value, v.position) for v in created], [("S", 0), ("M", 1), ("L", 2)])

    def test_existing_values_are_skipped_and_positions_continue(self):
        create_values(attribute_id=self.size.id, values=["S", "M"])

        created = create_values(attribute_id=self.size.id, values=["M", "XL"])

        self.assertEqual([(v.value, v.position) for v in created], [("XL", 2)])

    def test_nothing_new(self):
        create_values(attribute_id=self.size.id, values=["S"])

        with self.assertRaises(NoNewAttributeValuesError):
            create_values(attribute_id=self.size.id, values=["S", ""])

    def test_unknown_attribute(self):
        with self.assertRaises(NotFoundError):
            create_values(attribute_id=999999, values=["S"])


class AttributeValueApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        admin = User.objects.create_user(
            email="cat@example.com",
            password="pass",
            role=Role.objects.create(name="admin"),
        )
        self.client.force_authenticate(admin)
        self.color = Attribute.objects.create(name="Color")
        self.size = Attribute.objects.create(name="Size")

    def test_batch_create_and_filter(self):
        response = self.client.post(
            "/api/attribute-values/",
            {"attribute_id": self.color.id, "values": ["Red", "Blue"]},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["message"], "Created 2 attribute value(s)")

        AttributeValue.objects.create(attribute=self.size, value="M")

        listed = self.client.get("/api/attribute-values/", {"attribute_id": self.color.id}).json()["data"]
        self.assertEqual([v["value"] for v in listed], ["Red", "Blue"])

    def test_all_duplicates_conflict(self):
        AttributeValue.objects.create(attribute=self.color, value="Red")

        response = self.client.post(
            "/api/attribute-values/",
            {"attribute_id": self.color.id, "values": ["Red"]},
            format="json",
        )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "no_new_values")
