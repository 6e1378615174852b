from datetime import date, datetime, timedelta, timezone as dt_timezone

from django.test import SimpleTestCase, TestCase

from orders.models import Order
from orders.services.display import (
    display_fields,
    estimated_delivery,
    format_payment_method,
    format_status,
    tracking_timeline,
)
from orders.services.exceptions import InvalidOrderTransitionError
from orders.services.lifecycle import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATES,
    can_cancel,
    can_return,
    can_transition,
    validate_transition,
)
from orders.services.numbering import (
    generate_order_number,
    is_valid_order_number,
)
from orders.tests.fixtures import make_customer, make_order, make_variant

ALL_STATES = [key for key, _ in Order.STATUS_CHOICES]

EXPECTED_EDGES = {
    ("PENDING", "PROCESSING"),
    ("PENDING", "CANCELLED"),
    ("PROCESSING", "SHIPPED"),
    ("PROCESSING", "CANCELLED"),
    ("SHIPPED", "DELIVERED"),
    ("SHIPPED", "RETURNED"),
    ("DELIVERED", "RETURNED"),
}


class TransitionGraphTests(SimpleTestCase):
    def test_every_pair_follows_the_edge_table(self):
        for from_status in ALL_STATES:
            for to_status in ALL_STATES:
                with self.subTest(from_status=from_status, to_status=to_status):
                    self.assertEqual(
                        can_transition(from_status=from_status, to_status=to_status),
                        (from_status, to_status) in EXPECTED_EDGES,
                    )

    def test_terminal_states_have_no_outgoing_edges(self):
        self.assertEqual(TERMINAL_STATES, {Order.STATUS_CANCELLED, Order.STATUS_RETURNED})
        for state in TERMINAL_STATES:
            self.assertEqual(ALLOWED_TRANSITIONS[state], frozenset())

    def test_cancel_and_return_eligibility(self):
        for state in ALL_STATES:
            with self.subTest(state=state):
                self.assertEqual(can_cancel(state), state in {"PENDING", "PROCESSING"})
                self.assertEqual(can_return(state), state in {"SHIPPED", "DELIVERED"})

    def test_validate_transition_raises_with_allowed_targets(self):
        order = Order(order_number="ORD-20240101-000001", status=Order.STATUS_PENDING)

        with self.assertRaises(InvalidOrderTransitionError) as ctx:
            validate_transition(order=order, target_status=Order.STATUS_DELIVERED)

        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(ctx.exception.details["allowed"], ["CANCELLED", "PROCESSING"])


class DisplayFieldTests(SimpleTestCase):
    def test_labels(self):
        self.assertEqual(format_status("SHIPPED"), "Shipped")
        self.assertEqual(format_payment_method("MPESAEXPRESS"), "M-Pesa Express")
        self.assertEqual(format_payment_method("COD"), "Cash on Delivery")
        self.assertEqual(format_status("UNKNOWN"), "UNKNOWN")

    def test_estimated_delivery_offsets(self):
        placed = datetime(2024, 1, 1, 12, 0, tzinfo=dt_timezone.utc)

        self.assertEqual(estimated_delivery(placed, "standard"), placed + timedelta(days=5))
        self.assertEqual(estimated_delivery(placed, "express"), placed + timedelta(days=2))
        self.assertEqual(estimated_delivery(placed, "overnight"), placed + timedelta(days=1))
        self.assertEqual(estimated_delivery(placed, None), placed + timedelta(days=5))

    def test_display_fields_follow_status(self):
        placed = datetime(2024, 1, 1, tzinfo=dt_timezone.utc)
        order = Order(
            status=Order.STATUS_SHIPPED,
            payment_method=Order.PAYMENT_PAYPAL,
            shipping_method=Order.SHIPPING_EXPRESS,
            placed_at=placed,
        )

        fields = display_fields(order)

        self.assertEqual(fields["status_display"], "Shipped")
        self.assertEqual(fields["payment_method_display"], "PayPal")
        self.assertEqual(fields["estimated_delivery"], placed + timedelta(days=2))
        self.assertFalse(fields["can_cancel"])
        self.assertTrue(fields["can_return"])

    def test_timeline_marks_reached_steps(self):
        placed = datetime(2024, 1, 1, tzinfo=dt_timezone.utc)
        updated = placed + timedelta(days=1)
        order = Order(status=Order.STATUS_SHIPPED, placed_at=placed, updated_at=updated)

        steps = tracking_timeline(order)

        self.assertEqual([s["completed"] for s in steps], [True, True, True, False])
        self.assertEqual(steps[0]["date"], placed)
        self.assertEqual(steps[2]["date"], updated)
        self.assertIsNone(steps[3]["date"])

    def test_timeline_for_cancelled_order_completes_nothing(self):
        order = Order(status=Order.STATUS_CANCELLED, placed_at=datetime(2024, 1, 1, tzinfo=dt_timezone.utc))

        self.assertFalse(any(step["completed"] for step in tracking_timeline(order)))


class OrderNumberTests(TestCase):
    def test_format_validation(self):
        self.assertTrue(is_valid_order_number("ORD-20240101-000001"))
        self.assertFalse(is_valid_order_number("ORD-2024011-000001"))
        self.assertFalse(is_valid_order_number("ORD-20240101-1"))
        self.assertFalse(is_valid_order_number(""))

    def test_sequence_starts_at_one_per_day(self):
        self.assertEqual(generate_order_number(date(2024, 1, 1)), "ORD-20240101-000001")

    def test_sequence_continues_from_last_number_of_the_day(self):
        customer = make_customer()
        variant = make_variant()
        make_order(customer, variant, order_number="ORD-20240101-000007")
        make_order(customer, variant, order_number="ORD-20240102-000100")

        self.assertEqual(generate_order_number(date(2024, 1, 1)), "ORD-20240101-000008")
