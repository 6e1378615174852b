# orders/services/display.py

"""
Derived (never persisted) order fields used by every order response.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from orders.models import Order
from orders.services.lifecycle import can_cancel, can_return

STATUS_LABELS = dict(Order.STATUS_CHOICES)
PAYMENT_METHOD_LABELS = dict(Order.PAYMENT_METHOD_CHOICES)

DELIVERY_DAYS = {
    Order.SHIPPING_OVERNIGHT: 1,
    Order.SHIPPING_EXPRESS: 2,
    Order.SHIPPING_STANDARD: 5,
}


def format_status(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def format_payment_method(method: str) -> str:
    return PAYMENT_METHOD_LABELS.get(method, method)


def estimated_delivery(placed_at: datetime, shipping_method: str | None = None) -> datetime:
    days = DELIVERY_DAYS.get(shipping_method, DELIVERY_DAYS[Order.SHIPPING_STANDARD])
    return placed_at + timedelta(days=days)


def display_fields(order: Order) -> dict:
    return {
        "status_display": format_status(order.status),
        "payment_method_display": format_payment_method(order.payment_method),
        "estimated_delivery": estimated_delivery(order.placed_at, order.shipping_method),
        "can_cancel": can_cancel(order.status),
        "can_return": can_return(order.status),
    }


# ============================================================
# TRACKING TIMELINE
# ============================================================

_TIMELINE_STEPS = (
    (
        Order.STATUS_PENDING,
        "Order Placed",
        "Your order has been received and is being processed",
    ),
    (
        Order.STATUS_PROCESSING,
        "Order Processing",
        "Your order is being prepared for shipment",
    ),
    (
        Order.STATUS_SHIPPED,
        "Order Shipped",
        "Your order has been shipped and is on its way",
    ),
    (
        Order.STATUS_DELIVERED,
        "Order Delivered",
        "Your order has been delivered successfully",
    ),
)

_PROGRESS = [step[0] for step in _TIMELINE_STEPS]


def tracking_timeline(order: Order) -> list[dict]:
    """
    Four fixed steps. A step is completed when the order reached it on the
    forward path; cancelled and returned orders complete none.

    Only placed_at and updated_at are recorded, so a completed step past
    the first one is dated with the last update.
    """
    reached = _PROGRESS.index(order.status) if order.status in _PROGRESS else -1

    timeline = []
    for index, (status, title, description) in enumerate(_TIMELINE_STEPS):
        completed = index <= reached
        if index == 0:
            when = order.placed_at
        else:
            when = order.updated_at if completed else None

        timeline.append(
            {
                "status": status,
                "title": title,
                "description": description,
                "date": when,
                "completed": completed,
            }
        )
    return timeline


def tracking_summary(order: Order) -> dict:
    return {
        "current_status": order.status,
        "timeline": tracking_timeline(order),
        "can_cancel": can_cancel(order.status),
        "can_return": can_return(order.status),
    }
