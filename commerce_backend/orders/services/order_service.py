# orders/services/order_service.py

"""
ORDER SERVICE (DOMAIN-CONTROLLED)

Purpose:
- Create orders (items, stock reservation, coupon links) atomically.
- Every status change (admin update, bulk update, cancel, return) goes
  through orders.services.lifecycle.validate_transition().
- Customer-facing reads and mutations check ownership: another
  customer's order is 403, a missing one is 404.

Stock:
- With ORDER_RESERVE_STOCK on, an order that names a store decrements
  that store's stock per item at creation. Cancelling gives back what
  the order's own movements still hold, whatever the flag says by then.
  Orders without a store touch no stock.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import IntegrityError, transaction
from django.utils import timezone

from catalog.models import ProductVariant, StockMovement
from catalog.services.inventory import InsufficientStockError, adjust_stock
from common.exceptions import DomainError, InvalidParameterError
from coupons.services.coupon_service import link_coupons, record_usages
from customers.models import Address, Customer
from orders.models import Order, OrderItem, OrderReturn, OrderReturnItem
from orders.services.exceptions import (
    InvalidReturnRequestError,
    OrderAccessDenied,
    OrderDeletionError,
    OrderNotCancellableError,
    OrderNotFoundError,
    OrderNotReturnableError,
    OrderReferenceError,
    TotalMismatchError,
)
from orders.services.display import format_status
from orders.services.lifecycle import can_cancel, can_return, validate_transition
from orders.services.numbering import generate_order_number, is_valid_order_number
from store.models import Store

logger = logging.getLogger("orders")

TOTAL_TOLERANCE = Decimal("0.01")
ORDER_NUMBER_ATTEMPTS = 3


# ============================================================
# LOOKUPS
# ============================================================


def active_orders():
    return Order.objects.filter(deleted_at__isnull=True)


def order_with_relations(queryset=None):
    queryset = active_orders() if queryset is None else queryset
    return queryset.select_related("customer", "address", "store").prefetch_related(
        "items__variant__product",
        "coupon_links__coupon",
        "returns__items",
    )


def get_order(order_id: int) -> Order:
    order = order_with_relations().filter(pk=order_id).first()
    if order is None:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")
    return order


def get_order_by_number(order_number: str) -> Order:
    if not is_valid_order_number(order_number):
        raise InvalidParameterError(
            "Invalid order_number: expected ORD-YYYYMMDD-NNNNNN",
            details={"parameter": "order_number", "value": order_number},
        )

    order = order_with_relations().filter(order_number=order_number).first()
    if order is None:
        raise OrderNotFoundError(f"Order {order_number} not found")
    return order


def ensure_owner(order: Order, customer) -> None:
    if order.customer_id != customer.pk:
        logger.warning(
            "orders.access_denied",
            extra={"order_id": order.pk, "customer_id": customer.pk},
        )
        raise OrderAccessDenied("Access denied")


def get_customer_order(customer, order_id: int) -> Order:
    order = get_order(order_id)
    ensure_owner(order, customer)
    return order


def get_customer_order_by_number(customer, order_number: str) -> Order:
    order = get_order_by_number(order_number)
    ensure_owner(order, customer)
    return order


def _locked_order(order_id: int) -> Order:
    order = active_orders().select_for_update().filter(pk=order_id).first()
    if order is None:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")
    return order


# ============================================================
# CREATE
# ============================================================


def items_total(items) -> Decimal:
    return sum(
        (Decimal(str(item["price"])) * int(item["quantity"]) for item in items),
        Decimal("0"),
    )


def check_total(items, total_amount) -> Decimal:
    calculated = items_total(items)
    declared = Decimal(str(total_amount))

    if abs(calculated - declared) > TOTAL_TOLERANCE:
        raise TotalMismatchError(
            "Total amount must match the sum of item prices",
            details={
                "field": "total_amount",
                "declared": str(declared),
                "calculated": str(calculated),
            },
        )
    return calculated


def _resolve_references(*, customer_id, address_id, store_id, items):
    customer = Customer.objects.filter(pk=customer_id, deleted_at__isnull=True).first()
    if customer is None:
        raise OrderReferenceError(
            f"Customer with ID {customer_id} not found",
            details={"field": "customer_id", "value": customer_id},
        )

    address = None
    if address_id is not None:
        address = Address.objects.filter(pk=address_id).first()
        if address is None:
            raise OrderReferenceError(
                f"Address with ID {address_id} not found",
                details={"field": "address_id", "value": address_id},
            )
        if address.customer_id != customer.pk:
            raise OrderAccessDenied("Address does not belong to this customer")

    store = None
    if store_id is not None:
        store = Store.objects.filter(pk=store_id, deleted_at__isnull=True).first()
        if store is None:
            raise OrderReferenceError(
                f"Store with ID {store_id} not found",
                details={"field": "store_id", "value": store_id},
            )

    variant_ids = {item["variant_id"] for item in items}
    variants = ProductVariant.objects.filter(pk__in=variant_ids, deleted_at__isnull=True).in_bulk()
    missing = sorted(variant_ids - set(variants))
    if missing:
        raise OrderReferenceError(
            f"Product variant with ID {missing[0]} not found",
            details={"field": "items", "missing_variant_ids": missing},
        )

    return customer, address, store, variants


def _create_numbered_order(**fields) -> Order:
    for attempt in range(1, ORDER_NUMBER_ATTEMPTS + 1):
        order_number = generate_order_number()
        try:
            with transaction.atomic():
                return Order.objects.create(order_number=order_number, **fields)
        except IntegrityError:
            if attempt == ORDER_NUMBER_ATTEMPTS:
                raise
            logger.warning(
                "orders.number_collision",
                extra={"order_number": order_number, "attempt": attempt},
            )


def _reserve_stock(order: Order, items: list[OrderItem], variants: dict) -> None:
    for item in items:
        try:
            adjust_stock(
                store_id=order.store_id,
                variant_id=item.variant_id,
                operation=StockMovement.OP_DECREMENT,
                quantity=item.quantity,
                reason=f"Order {order.order_number}",
                customer=order.customer,
                order=order,
            )
        except InsufficientStockError as exc:
            variant = variants[item.variant_id]
            raise InsufficientStockError(
                f"Insufficient stock for variant {variant.name}",
                details=exc.details,
            ) from exc


def _reserved_quantities(order: Order) -> dict[tuple[int, int], int]:
    """Net stock still held by the order, per (store, variant), from its own movements."""
    held: dict[tuple[int, int], int] = {}
    movements = order.stock_movements.filter(
        operation__in=(StockMovement.OP_DECREMENT, StockMovement.OP_INCREMENT),
    )
    for movement in movements:
        key = (movement.store_id, movement.variant_id)
        sign = -1 if movement.operation == StockMovement.OP_INCREMENT else 1
        held[key] = held.get(key, 0) + sign * movement.quantity
    return {key: quantity for key, quantity in held.items() if quantity > 0}


def _restore_stock(order: Order, reason: str) -> None:
    for (store_id, variant_id), quantity in _reserved_quantities(order).items():
        adjust_stock(
            store_id=store_id,
            variant_id=variant_id,
            operation=StockMovement.OP_INCREMENT,
            quantity=quantity,
            reason=reason,
            customer=order.customer,
            order=order,
        )


def _reserves_stock(order: Order) -> bool:
    return bool(order.store_id) and settings.ORDER_RESERVE_STOCK


@transaction.atomic
def create_order(
    *,
    customer_id: int,
    items: list[dict],
    payment_method: str,
    total_amount,
    address_id: int | None = None,
    store_id: int | None = None,
    notes: str = "",
    coupon_codes=(),
    shipping_method: str = Order.SHIPPING_STANDARD,
) -> Order:
    """
    Place an order in PENDING.

    FLOW:
    1) Declared total vs sum(price x quantity), tolerance 0.01
    2) Customer / address / store / variants must exist
    3) Order + items under a fresh order number
    4) Stock reservation (store orders only)
    5) Coupon links for active codes
    """
    if not items:
        raise OrderReferenceError("At least one item is required", details={"field": "items"})

    check_total(items, total_amount)

    customer, address, store, variants = _resolve_references(
        customer_id=customer_id,
        address_id=address_id,
        store_id=store_id,
        items=items,
    )

    order = _create_numbered_order(
        customer=customer,
        address=address,
        store=store,
        status=Order.STATUS_PENDING,
        total_amount=Decimal(str(total_amount)),
        payment_method=payment_method,
        paid=False,
        notes=notes or "",
        shipping_method=shipping_method or Order.SHIPPING_STANDARD,
    )

    order_items = OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                variant_id=item["variant_id"],
                quantity=int(item["quantity"]),
                price=Decimal(str(item["price"])),
            )
            for item in items
        ]
    )

    if _reserves_stock(order):
        _reserve_stock(order, order_items, variants)

    link_coupons(order, coupon_codes)

    logger.info(
        "orders.created",
        extra={
            "order_id": order.id,
            "order_number": order.order_number,
            "customer_id": customer.pk,
            "store_id": order.store_id,
            "total_amount": str(order.total_amount),
            "item_count": len(order_items),
        },
    )
    return order


# ============================================================
# STATUS CHANGES
# ============================================================


def _apply_status(order: Order, target_status: str, *, actor=None) -> bool:
    """
    Validate and set a new status in memory. Same status is a no-op.

    Returns True when the status changed. Cancelling gives reserved
    stock back.
    """
    if target_status == order.status:
        return False

    validate_transition(order=order, target_status=target_status)

    previous = order.status
    if target_status == Order.STATUS_CANCELLED:
        _restore_stock(order, reason=f"Order {order.order_number} cancelled")

    order.status = target_status
    logger.info(
        "orders.status_changed",
        extra={
            "order_id": order.id,
            "order_number": order.order_number,
            "from_status": previous,
            "to_status": target_status,
            "actor_id": getattr(actor, "pk", None),
        },
    )
    return True


@transaction.atomic
def update_order(order_id: int, data: dict, *, actor=None) -> Order:
    """
    Administrative partial update: status / payment_method / paid /
    notes / address_id.
    """
    order = _locked_order(order_id)
    became_paid = data.get("paid") is True and not order.paid

    if "status" in data and data["status"] is not None:
        _apply_status(order, data["status"], actor=actor)

    if "address_id" in data:
        address_id = data["address_id"]
        if address_id is None:
            order.address = None
        else:
            address = Address.objects.filter(pk=address_id).first()
            if address is None:
                raise OrderReferenceError(
                    f"Address with ID {address_id} not found",
                    details={"field": "address_id", "value": address_id},
                )
            if address.customer_id != order.customer_id:
                raise OrderReferenceError(
                    "Address does not belong to the order's customer",
                    details={"field": "address_id", "value": address_id},
                )
            order.address = address

    for field in ("payment_method", "paid", "notes"):
        if field in data and data[field] is not None:
            setattr(order, field, data[field])

    order.save()

    if became_paid:
        record_usages(order)

    return get_order(order.pk)


@transaction.atomic
def cancel_order(order_id: int, *, reason: str, customer=None, actor=None) -> Order:
    order = _locked_order(order_id)
    if customer is not None:
        ensure_owner(order, customer)

    if not can_cancel(order.status):
        raise OrderNotCancellableError(
            f"Order cannot be cancelled. Current status: {format_status(order.status)}",
            details={"status": order.status},
        )

    _apply_status(order, Order.STATUS_CANCELLED, actor=actor or customer)
    order.notes = f"Cancelled: {reason.strip()}"
    order.save(update_fields=["status", "notes", "updated_at"])

    return get_order(order.pk)


def _validate_return_items(order: Order, requested: list[dict]) -> dict:
    ordered = {item.pk: item for item in order.items.all()}
    totals: dict[int, int] = {}
    problems = []

    for index, entry in enumerate(requested):
        item_id = entry["item_id"]
        item = ordered.get(item_id)
        if item is None:
            problems.append(
                {
                    "field": f"items.{index}.item_id",
                    "message": f"Item with ID {item_id} not found in order",
                }
            )
            continue

        totals[item_id] = totals.get(item_id, 0) + entry["quantity"]
        if totals[item_id] > item.quantity:
            problems.append(
                {
                    "field": f"items.{index}.quantity",
                    "message": f"Return quantity cannot exceed ordered quantity for item {item_id}",
                }
            )

    if problems:
        raise InvalidReturnRequestError(problems[0]["message"], details=problems)

    return ordered


@transaction.atomic
def request_return(order_id: int, *, customer, reason: str, items: list[dict]) -> Order:
    """
    Customer return of a SHIPPED or DELIVERED order.

    The whole request is validated before anything is written. On success
    an OrderReturn is stored, the order moves to RETURNED and a JSON
    summary line is appended to its notes.
    """
    order = _locked_order(order_id)
    ensure_owner(order, customer)

    if not can_return(order.status):
        raise OrderNotReturnableError(
            f"Order cannot be returned. Current status: {format_status(order.status)}",
            details={"status": order.status},
        )

    if not items:
        raise InvalidReturnRequestError(
            "At least one item must be returned",
            details=[{"field": "items", "message": "At least one item must be returned"}],
        )

    ordered = _validate_return_items(order, items)

    order_return = OrderReturn.objects.create(order=order, customer=customer, reason=reason.strip())
    OrderReturnItem.objects.bulk_create(
        [
            OrderReturnItem(
                order_return=order_return,
                order_item=ordered[entry["item_id"]],
                quantity=entry["quantity"],
                reason=entry["reason"].strip(),
            )
            for entry in items
        ]
    )

    _apply_status(order, Order.STATUS_RETURNED, actor=customer)

    summary = {
        "return_id": order_return.pk,
        "reason": order_return.reason,
        "items": [
            {"item_id": entry["item_id"], "quantity": entry["quantity"], "reason": entry["reason"].strip()}
            for entry in items
        ],
        "requested_at": order_return.requested_at,
    }
    line = f"Return requested: {json.dumps(summary, cls=DjangoJSONEncoder)}"
    order.notes = f"{order.notes}\n{line}" if order.notes else line
    order.save(update_fields=["status", "notes", "updated_at"])

    logger.info(
        "orders.return_requested",
        extra={
            "order_id": order.pk,
            "return_id": order_return.pk,
            "customer_id": customer.pk,
            "item_count": len(items),
        },
    )
    return get_order(order.pk)


# ============================================================
# BULK + DELETE
# ============================================================


def bulk_update_status(order_ids: list[int], *, status: str, notes: str | None = None, actor=None) -> dict:
    """
    Apply one status to many orders. Each order is updated in its own
    transaction; a failure is reported for that id and the loop goes on.
    """
    successful = []
    failed = []

    for order_id in dict.fromkeys(order_ids):
        data = {"status": status}
        if notes:
            data["notes"] = notes

        try:
            order = update_order(order_id, data, actor=actor)
        except DomainError as exc:
            failed.append(
                {
                    "order_id": order_id,
                    "success": False,
                    "error": exc.message,
                    "code": exc.code,
                }
            )
            continue

        successful.append({"order_id": order_id, "success": True, "order": order})

    logger.info(
        "orders.bulk_updated",
        extra={
            "status": status,
            "requested": len(order_ids),
            "succeeded": len(successful),
            "failed": len(failed),
            "actor_id": getattr(actor, "pk", None),
        },
    )
    return {"successful": successful, "failed": failed}


@transaction.atomic
def soft_delete_order(order_id: int, *, actor=None) -> int:
    order = _locked_order(order_id)
    if order.status != Order.STATUS_CANCELLED:
        raise OrderDeletionError(
            "Only cancelled orders can be deleted",
            details={"status": order.status},
        )

    order.deleted_at = timezone.now()
    order.save(update_fields=["deleted_at", "updated_at"])

    logger.info(
        "orders.deleted",
        extra={"order_id": order.pk, "actor_id": getattr(actor, "pk", None)},
    )
    return order.pk
