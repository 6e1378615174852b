from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from catalog.models import Product, ProductVariant, StockMovement, StoreVariantStock
from catalog.services.inventory import InsufficientStockError, adjust_stock
from store.models import Store
from users.models import Role, User


class AdjustStockTests(TestCase):
    def setUp(self):
        self.store = Store.objects.create(name="Main", code="MAIN")
        product = Product.objects.create(name="Mug", price=Decimal("8.00"))
        self.variant = ProductVariant.objects.create(product=product, name="Blue", sku="MUG-BLUE", price=Decimal("8.00"))

    def _adjust(self, operation, quantity):
        return adjust_stock(
            store_id=self.store.id,
            variant_id=self.variant.id,
            operation=operation,
            quantity=quantity,
        )

    def test_missing_row_starts_at_zero(self):
        change = self._adjust(StockMovement.OP_INCREMENT, 3)

        self.assertEqual(change.stock.quantity, 3)
        self.assertEqual(change.stock.stock_status, StoreVariantStock.STATUS_LIMITED)
        self.assertEqual(change.movement.previous_quantity, 0)
        self.assertEqual(change.movement.new_quantity, 3)

    def test_set_and_status(self):
        change = self._adjust(StockMovement.OP_SET, 20)
        self.assertEqual(change.stock.stock_status, StoreVariantStock.STATUS_IN_STOCK)

        change = self._adjust(StockMovement.OP_DECREMENT, 20)
        self.assertEqual(change.stock.stock_status, StoreVariantStock.STATUS_OUT_OF_STOCK)

    def test_decrement_below_zero_writes_nothing(self):
        self._adjust(StockMovement.OP_SET, 2)

        with self.assertRaises(InsufficientStockError) as ctx:
            self._adjust(StockMovement.OP_DECREMENT, 3)

        self.assertEqual(ctx.exception.details["available"], 2)
        self.assertEqual(StoreVariantStock.objects.get().quantity, 2)
        self.assertEqual(StockMovement.objects.count(), 1)


class InventoryApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            email="stock@example.com",
            password="pass",
            role=Role.objects.create(name="admin"),
        )
        self.client.force_authenticate(self.user)

        self.store = Store.objects.create(name="Main", code="MAIN")
        product = Product.objects.create(name="Mug", price=Decimal("8.00"))
        self.variant = ProductVariant.objects.create(product=product, name="Blue", sku="MUG-BLUE", price=Decimal("8.00"))

    def _adjust(self, **payload):
        body = {"store_id": self.store.id, "variant_id": self.variant.id, **payload}
        return self.client.post("/api/inventory/adjust/", body, format="json")

    def test_adjust_records_user(self):
        response = self._adjust(operation="increment", quantity=7, reason="Delivery")

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["stock"]["quantity"], 7)
        self.assertEqual(data["movement"]["user"], self.user.id)
        self.assertEqual(data["movement"]["reason"], "Delivery")

    def test_adjust_conflict(self):
        response = self._adjust(operation="decrement", quantity=1)

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "insufficient_stock")

    def test_unknown_store(self):
        response = self.client.post(
            "/api/inventory/adjust/",
            {"store_id": 999999, "variant_id": self.variant.id, "operation": "set", "quantity": 1},
            format="json",
        )
        self.assertEqual(response.status_code, 404)

    def test_movements_filter(self):
        self._adjust(operation="set", quantity=5)
        self._adjust(operation="decrement", quantity=2)

        response = self.client.get("/api/inventory/movements/", {"variant_id": self.variant.id})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()["data"]), 2)

    def test_movements_filter_by_operation(self):
        self._adjust(operation="set", quantity=5)
        self._adjust(operation="decrement", quantity=2)

        response = self.client.get("/api/inventory/movements/", {"operation": "decrement"})

        rows = response.json()["data"]
        self.assertEqual([r["operation"] for r in rows], ["decrement"])

    def test_stock_filter_by_status(self):
        self._adjust(operation="set", quantity=3)

        limited = self.client.get("/api/inventory/", {"status": "LIMITED"}).json()["data"]
        in_stock = self.client.get("/api/inventory/", {"status": "IN_STOCK"}).json()["data"]

        self.assertEqual(len(limited), 1)
        self.assertEqual(in_stock, [])

    def test_malformed_filter_is_rejected(self):
        response = self.client.get("/api/inventory/movements/", {"store_id": "abc"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["details"][0]["field"], "store_id")
