import csv
import io
from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from customers.tokens import issue_access_token as issue_customer_token
from orders.models import Order
from orders.tests.fixtures import make_customer, make_order, make_staff, make_store, make_variant
from users.models import Permission, Role, RolePermission
from users.tokens import issue_access_token


class AdminOrderApiTests(TestCase):
    """
    Back-office order endpoints (resource "orders").
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = make_staff("admin")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_access_token(self.admin)}")

        self.customer = make_customer(name="Amina Otieno", email="amina@example.com")
        self.variant = make_variant(price="10.00")

    # --------------------------------------------------
    # LIST / DETAIL
    # --------------------------------------------------

    def test_list_paginates(self):
        for _ in range(3):
            make_order(self.customer, self.variant)

        response = self.client.get("/api/orders/", {"page": 2, "limit": 2})

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(len(data["results"]), 1)
        self.assertEqual(
            data["pagination"],
            {
                "current_page": 2,
                "total_pages": 2,
                "total_orders": 3,
                "has_next": False,
                "has_prev": True,
            },
        )

    def test_list_filters_by_status_and_search(self):
        make_order(self.customer, self.variant, status=Order.STATUS_SHIPPED)
        make_order(self.customer, self.variant)
        make_order(make_customer(name="Someone Else"), self.variant, status=Order.STATUS_SHIPPED)

        response = self.client.get("/api/orders/", {"status": "SHIPPED", "search": "amina"})

        results = response.json()["data"]["results"]
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]["customer"]["email"], "amina@example.com")

    def test_limit_above_maximum_is_rejected(self):
        response = self.client.get("/api/orders/", {"limit": 1000})
        self.assertEqual(response.status_code, 400)

    def test_customer_orders(self):
        order = make_order(self.customer, self.variant)
        make_order(make_customer(), self.variant)

        response = self.client.get(f"/api/orders/customers/{self.customer.id}/orders/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual([o["id"] for o in response.json()["data"]["results"]], [order.id])

    # --------------------------------------------------
    # UPDATE
    # --------------------------------------------------

    def test_update_status(self):
        order = make_order(self.customer, self.variant)

        response = self.client.patch(f"/api/orders/{order.id}/", {"status": "PROCESSING"}, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Order updated successfully")
        self.assertEqual(response.json()["data"]["status"], "PROCESSING")

    def test_invalid_transition_conflicts(self):
        order = make_order(self.customer, self.variant)

        response = self.client.patch(f"/api/orders/{order.id}/", {"status": "DELIVERED"}, format="json")

        self.assertEqual(response.status_code, 409)
        error = response.json()["error"]
        self.assertEqual(error["code"], "invalid_transition")
        self.assertEqual(error["details"]["allowed"], ["CANCELLED", "PROCESSING"])

    def test_body_id_must_match_url(self):
        order = make_order(self.customer, self.variant)

        response = self.client.put(
            f"/api/orders/{order.id}/",
            {"id": order.id + 1, "notes": "x"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)

    def test_delete_requires_cancelled(self):
        order = make_order(self.customer, self.variant)

        response = self.client.delete(f"/api/orders/{order.id}/")
        self.assertEqual(response.status_code, 409)

        order.status = Order.STATUS_CANCELLED
        order.save()

        response = self.client.delete(f"/api/orders/{order.id}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(f"/api/orders/{order.id}/").status_code, 404)

    def test_bulk_update(self):
        first = make_order(self.customer, self.variant)
        second = make_order(self.customer, self.variant)

        response = self.client.post(
            "/api/orders/bulk-update/",
            {"order_ids": [first.id, second.id, 999999], "status": "PROCESSING"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "Bulk update completed. 2 successful, 1 failed.")
        self.assertEqual(len(body["data"]["successful"]), 2)
        self.assertEqual(body["data"]["failed"][0]["order_id"], 999999)

    # --------------------------------------------------
    # REPORTING
    # --------------------------------------------------

    def test_analytics(self):
        make_order(self.customer, self.variant, paid=True)
        make_order(self.customer, self.variant, payment_method=Order.PAYMENT_COD)

        response = self.client.get("/api/orders/analytics/")

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["total_orders"], 2)
        self.assertEqual(Decimal(str(data["total_revenue"])), Decimal("20.00"))
        self.assertEqual(Decimal(str(data["average_order_value"])), Decimal("10.00"))
        self.assertEqual(data["orders_by_status"]["PENDING"], 2)
        self.assertEqual(data["orders_by_status"]["RETURNED"], 0)
        self.assertEqual(data["orders_by_payment_method"]["CARD"], 1)
        self.assertEqual(data["orders_by_payment_method"]["COD"], 1)
        self.assertEqual(data["top_products"][0]["total_sold"], 4)
        self.assertEqual(len(data["recent_orders"]), 2)

    def test_analytics_rejects_inverted_range(self):
        response = self.client.get(
            "/api/orders/analytics/",
            {"date_from": "2024-02-01", "date_to": "2024-01-01"},
        )
        self.assertEqual(response.status_code, 400)

    def test_export_csv(self):
        store = make_store("Westlands")
        order = make_order(self.customer, self.variant, store=store, paid=True)

        response = self.client.get("/api/orders/export/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "text/csv")
        self.assertRegex(
            response["Content-Disposition"],
            r'^attachment; filename="orders-\d{4}-\d{2}-\d{2}\.csv"$',
        )

        rows = list(csv.reader(io.StringIO(response.content.decode())))
        self.assertEqual(rows[0][0], "Order Number")
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[1][0], order.order_number)
        self.assertEqual(rows[1][5], "20.00")
        self.assertEqual(rows[1][6], "Yes")
        self.assertEqual(rows[1][9], "Westlands")
        self.assertEqual(rows[1][10], "1")


class AdminOrderPermissionTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = make_customer()
        self.order = make_order(self.customer, make_variant())

    def _login(self, user):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_access_token(user)}")

    def test_role_without_grant_is_denied(self):
        self._login(make_staff("support"))

        response = self.client.get("/api/orders/")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"]["code"], "permission_denied")

    def test_view_grant_allows_reads_but_not_edits(self):
        role = Role.objects.create(name="support")
        view = Permission.objects.create(resource="orders", action="view")
        RolePermission.objects.create(role=role, permission=view)
        self._login(make_staff("support"))

        self.assertEqual(self.client.get("/api/orders/").status_code, 200)

        response = self.client.post(
            f"/api/orders/{self.order.id}/cancel/",
            {"reason": "fraud"},
            format="json",
        )
        self.assertEqual(response.status_code, 403)

    def test_user_without_role(self):
        self._login(make_staff(None))

        response = self.client.get("/api/orders/")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"]["code"], "no_role")

    def test_customer_token_is_rejected(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_customer_token(self.customer)}")

        response = self.client.get("/api/orders/")
        self.assertEqual(response.status_code, 401)
