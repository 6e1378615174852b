"""
Customer throttle keys.

GUARANTEES:
- A customer and a staff user with the same pk never share a rate bucket
- Read-only customer order routes use the customer-keyed throttle
"""

from types import SimpleNamespace

from django.test import SimpleTestCase
from rest_framework.test import APIRequestFactory
from rest_framework.throttling import UserRateThrottle

from customers.throttling import CustomerRateThrottle, CustomerScopedRateThrottle
from orders.views.customer import CustomerOrderViewSet


class CustomerThrottleKeyTests(SimpleTestCase):
    def setUp(self):
        self.request = APIRequestFactory().get("/api/customer/orders/")
        self.request.user = SimpleNamespace(pk=7, is_authenticated=True)

    def test_customer_key_differs_from_staff_key_for_same_id(self):
        customer_key = CustomerRateThrottle().get_cache_key(self.request, None)
        staff_key = UserRateThrottle().get_cache_key(self.request, None)

        self.assertNotEqual(customer_key, staff_key)
        self.assertIn("customer-7", customer_key)

    def test_order_reads_use_customer_throttle(self):
        view = CustomerOrderViewSet()
        view.action = "list"

        throttles = view.get_throttles()

        self.assertTrue(any(isinstance(t, CustomerRateThrottle) for t in throttles))
        self.assertFalse(any(type(t) is UserRateThrottle for t in throttles))

    def test_order_mutations_use_scoped_customer_throttle(self):
        view = CustomerOrderViewSet()
        view.action = "cancel"

        throttles = view.get_throttles()

        self.assertEqual([type(t) for t in throttles], [CustomerScopedRateThrottle])
