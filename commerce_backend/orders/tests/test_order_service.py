import json
from decimal import Decimal

from django.test import TestCase, override_settings

from catalog.models import StockMovement, StoreVariantStock
from coupons.models import Coupon, CouponUsage, OrderCoupon
from orders.models import Order, OrderReturn
from orders.services import order_service
from orders.services.exceptions import (
    InsufficientStockError,
    InvalidOrderTransitionError,
    InvalidReturnRequestError,
    OrderAccessDenied,
    OrderDeletionError,
    OrderNotCancellableError,
    OrderNotFoundError,
    OrderNotReturnableError,
    OrderReferenceError,
    TotalMismatchError,
)
from orders.tests.fixtures import (
    make_address,
    make_customer,
    make_order,
    make_store,
    make_variant,
    stock,
)


class CreateOrderTests(TestCase):
    def setUp(self):
        self.customer = make_customer()
        self.v1 = make_variant(price="10.00")
        self.v2 = make_variant(price="5.00")
        self.items = [
            {"variant_id": self.v1.id, "quantity": 2, "price": Decimal("10.00")},
            {"variant_id": self.v2.id, "quantity": 1, "price": Decimal("5.00")},
        ]

    def _create(self, **overrides):
        params = {
            "customer_id": self.customer.id,
            "items": self.items,
            "payment_method": Order.PAYMENT_CARD,
            "total_amount": Decimal("25.00"),
        }
        params.update(overrides)
        return order_service.create_order(**params)

    def test_matching_total_creates_pending_order(self):
        order = self._create()

        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertFalse(order.paid)
        self.assertRegex(order.order_number, r"^ORD-\d{8}-000001$")
        self.assertEqual(order.items.count(), 2)
        self.assertEqual(order.total_amount, Decimal("25.00"))

    def test_total_within_tolerance_is_accepted(self):
        order = self._create(total_amount=Decimal("25.01"))
        self.assertEqual(order.status, Order.STATUS_PENDING)

    def test_total_mismatch_is_rejected_before_persistence(self):
        with self.assertRaises(TotalMismatchError) as ctx:
            self._create(total_amount=Decimal("30.00"))

        self.assertEqual(ctx.exception.details["calculated"], "25.00")
        self.assertFalse(Order.objects.exists())

    def test_unknown_variant_is_rejected(self):
        items = self.items + [{"variant_id": 999999, "quantity": 1, "price": Decimal("1.00")}]

        with self.assertRaises(OrderReferenceError):
            self._create(items=items, total_amount=Decimal("26.00"))
        self.assertFalse(Order.objects.exists())

    def test_address_of_another_customer_is_refused(self):
        other = make_customer()
        address = make_address(other)

        with self.assertRaises(OrderAccessDenied):
            self._create(address_id=address.id)

    def test_store_order_reserves_stock_and_logs_movements(self):
        store = make_store()
        stock(store, self.v1, 10)
        stock(store, self.v2, 3)

        order = self._create(store_id=store.id)

        self.assertEqual(StoreVariantStock.objects.get(store=store, variant=self.v1).quantity, 8)
        self.assertEqual(StoreVariantStock.objects.get(store=store, variant=self.v2).quantity, 2)

        movements = StockMovement.objects.filter(order=order)
        self.assertEqual(movements.count(), 2)
        self.assertTrue(all(m.operation == StockMovement.OP_DECREMENT for m in movements))
        self.assertTrue(all(m.reason == f"Order {order.order_number}" for m in movements))

    def test_insufficient_stock_rolls_back_everything(self):
        store = make_store()
        stock(store, self.v1, 10)
        stock(store, self.v2, 0)

        with self.assertRaises(InsufficientStockError) as ctx:
            self._create(store_id=store.id)

        self.assertIn(self.v2.name, ctx.exception.message)
        self.assertFalse(Order.objects.exists())
        self.assertEqual(StoreVariantStock.objects.get(store=store, variant=self.v1).quantity, 10)

    @override_settings(ORDER_RESERVE_STOCK=False)
    def test_reservation_can_be_switched_off(self):
        store = make_store()
        order = self._create(store_id=store.id)

        self.assertEqual(order.store_id, store.id)
        self.assertFalse(StockMovement.objects.exists())

    def test_only_active_coupons_are_linked(self):
        Coupon.objects.create(name="Ten", code="TEN", coupon_type=Coupon.TYPE_FIXED, amount=Decimal("10"))
        Coupon.objects.create(
            name="Old",
            code="OLD",
            coupon_type=Coupon.TYPE_FIXED,
            amount=Decimal("5"),
            is_expired=True,
        )

        order = self._create(coupon_codes=["TEN", "OLD", "MISSING"])

        codes = list(OrderCoupon.objects.filter(order=order).values_list("coupon__code", flat=True))
        self.assertEqual(codes, ["TEN"])


class UpdateOrderTests(TestCase):
    def setUp(self):
        self.customer = make_customer()
        self.variant = make_variant()
        self.order = make_order(self.customer, self.variant)

    def test_valid_transition(self):
        order = order_service.update_order(self.order.id, {"status": Order.STATUS_PROCESSING})
        self.assertEqual(order.status, Order.STATUS_PROCESSING)

    def test_invalid_transition_is_rejected_and_nothing_changes(self):
        with self.assertRaises(InvalidOrderTransitionError):
            order_service.update_order(self.order.id, {"status": Order.STATUS_DELIVERED, "notes": "x"})

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_PENDING)
        self.assertEqual(self.order.notes, "")

    def test_same_status_is_a_no_op_for_status(self):
        order = order_service.update_order(self.order.id, {"status": Order.STATUS_PENDING, "notes": "checked"})

        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(order.notes, "checked")

    def test_terminal_order_cannot_move(self):
        self.order.status = Order.STATUS_CANCELLED
        self.order.save()

        with self.assertRaises(InvalidOrderTransitionError):
            order_service.update_order(self.order.id, {"status": Order.STATUS_PENDING})

    def test_becoming_paid_records_coupon_usage_once(self):
        coupon = Coupon.objects.create(name="Ten", code="TEN", coupon_type=Coupon.TYPE_FIXED, amount=Decimal("10"))
        OrderCoupon.objects.create(order=self.order, coupon=coupon)

        order_service.update_order(self.order.id, {"paid": True})
        order_service.update_order(self.order.id, {"paid": True})

        self.assertEqual(
            CouponUsage.objects.filter(coupon=coupon, customer=self.customer, order=self.order).count(),
            1,
        )

    def test_address_must_belong_to_order_customer(self):
        foreign = make_address(make_customer())

        with self.assertRaises(OrderReferenceError):
            order_service.update_order(self.order.id, {"address_id": foreign.id})

    def test_missing_order(self):
        with self.assertRaises(OrderNotFoundError):
            order_service.update_order(999999, {"status": Order.STATUS_PROCESSING})


class CancelOrderTests(TestCase):
    def setUp(self):
        self.customer = make_customer()
        self.variant = make_variant()
        self.store = make_store()
        stock(self.store, self.variant, 10)

    def test_cancel_sets_notes_and_restores_stock(self):
        order = order_service.create_order(
            customer_id=self.customer.id,
            items=[{"variant_id": self.variant.id, "quantity": 3, "price": Decimal("10.00")}],
            payment_method=Order.PAYMENT_COD,
            total_amount=Decimal("30.00"),
            store_id=self.store.id,
        )
        self.assertEqual(StoreVariantStock.objects.get(store=self.store).quantity, 7)

        cancelled = order_service.cancel_order(order.id, reason="Changed my mind", customer=self.customer)

        self.assertEqual(cancelled.status, Order.STATUS_CANCELLED)
        self.assertEqual(cancelled.notes, "Cancelled: Changed my mind")
        self.assertEqual(StoreVariantStock.objects.get(store=self.store).quantity, 10)

    def test_cancel_gives_back_only_what_the_order_reserved(self):
        with override_settings(ORDER_RESERVE_STOCK=False):
            order = order_service.create_order(
                customer_id=self.customer.id,
                items=[{"variant_id": self.variant.id, "quantity": 2, "price": Decimal("10.00")}],
                payment_method=Order.PAYMENT_COD,
                total_amount=Decimal("20.00"),
                store_id=self.store.id,
            )

        order_service.cancel_order(order.id, reason="Changed my mind", customer=self.customer)

        self.assertEqual(StoreVariantStock.objects.get(store=self.store).quantity, 10)
        self.assertFalse(StockMovement.objects.filter(order=order).exists())

    def test_shipped_order_is_not_cancellable(self):
        order = make_order(self.customer, self.variant, status=Order.STATUS_SHIPPED)

        with self.assertRaises(OrderNotCancellableError):
            order_service.cancel_order(order.id, reason="late")

    def test_other_customer_gets_access_denied(self):
        order = make_order(self.customer, self.variant)

        with self.assertRaises(OrderAccessDenied):
            order_service.cancel_order(order.id, reason="mine now", customer=make_customer())


class ReturnOrderTests(TestCase):
    def setUp(self):
        self.customer = make_customer()
        self.variant = make_variant()
        self.order = make_order(self.customer, self.variant, status=Order.STATUS_SHIPPED, quantity=2)
        self.item = self.order.items.get()

    def test_return_over_ordered_quantity_is_rejected_before_mutation(self):
        with self.assertRaises(InvalidReturnRequestError) as ctx:
            order_service.request_return(
                self.order.id,
                customer=self.customer,
                reason="Damaged",
                items=[{"item_id": self.item.id, "quantity": 3, "reason": "Broken"}],
            )

        self.assertEqual(ctx.exception.details[0]["field"], "items.0.quantity")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_SHIPPED)
        self.assertFalse(OrderReturn.objects.exists())

    def test_item_from_another_order_is_rejected(self):
        other = make_order(self.customer, self.variant, status=Order.STATUS_SHIPPED)

        with self.assertRaises(InvalidReturnRequestError):
            order_service.request_return(
                self.order.id,
                customer=self.customer,
                reason="Damaged",
                items=[{"item_id": other.items.get().id, "quantity": 1, "reason": "Broken"}],
            )

    def test_successful_return(self):
        order = order_service.request_return(
            self.order.id,
            customer=self.customer,
            reason="Damaged",
            items=[{"item_id": self.item.id, "quantity": 1, "reason": "Broken"}],
        )

        self.assertEqual(order.status, Order.STATUS_RETURNED)

        order_return = OrderReturn.objects.get(order=order)
        self.assertEqual(order_return.items.get().quantity, 1)

        summary = json.loads(order.notes.split("Return requested: ", 1)[1])
        self.assertEqual(summary["return_id"], order_return.id)
        self.assertEqual(summary["items"], [{"item_id": self.item.id, "quantity": 1, "reason": "Broken"}])

    def test_pending_order_is_not_returnable(self):
        pending = make_order(self.customer, self.variant)

        with self.assertRaises(OrderNotReturnableError):
            order_service.request_return(
                pending.id,
                customer=self.customer,
                reason="x",
                items=[{"item_id": pending.items.get().id, "quantity": 1, "reason": "x"}],
            )


class BulkAndDeleteTests(TestCase):
    def setUp(self):
        self.customer = make_customer()
        self.variant = make_variant()

    def test_bulk_update_reports_per_id_and_keeps_successes(self):
        first = make_order(self.customer, self.variant)
        second = make_order(self.customer, self.variant)

        result = order_service.bulk_update_status(
            [first.id, 999999, second.id],
            status=Order.STATUS_PROCESSING,
        )

        self.assertEqual([r["order_id"] for r in result["successful"]], [first.id, second.id])
        self.assertEqual(len(result["failed"]), 1)
        self.assertEqual(result["failed"][0]["order_id"], 999999)
        self.assertEqual(result["failed"][0]["code"], "not_found")

        first.refresh_from_db()
        second.refresh_from_db()
        self.assertEqual(first.status, Order.STATUS_PROCESSING)
        self.assertEqual(second.status, Order.STATUS_PROCESSING)

    def test_bulk_update_collects_invalid_transitions(self):
        shipped = make_order(self.customer, self.variant, status=Order.STATUS_SHIPPED)

        result = order_service.bulk_update_status([shipped.id], status=Order.STATUS_PENDING)

        self.assertEqual(result["successful"], [])
        self.assertEqual(result["failed"][0]["code"], "invalid_transition")

    def test_only_cancelled_orders_can_be_deleted(self):
        pending = make_order(self.customer, self.variant)
        with self.assertRaises(OrderDeletionError):
            order_service.soft_delete_order(pending.id)

        cancelled = make_order(self.customer, self.variant, status=Order.STATUS_CANCELLED)
        order_service.soft_delete_order(cancelled.id)

        with self.assertRaises(OrderNotFoundError):
            order_service.get_order(cancelled.id)
        self.assertTrue(Order.objects.filter(pk=cancelled.id, deleted_at__isnull=False).exists())
