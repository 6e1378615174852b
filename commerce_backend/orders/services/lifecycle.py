# orders/services/lifecycle.py

"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed status transitions for Order.
Admin update, bulk update, cancel and return all go through
validate_transition().

    PENDING    -> PROCESSING, CANCELLED
    PROCESSING -> SHIPPED, CANCELLED
    SHIPPED    -> DELIVERED, RETURNED
    DELIVERED  -> RETURNED
    CANCELLED, RETURNED: terminal

No database writes here.
"""

from orders.models import Order
from orders.services.exceptions import InvalidOrderTransitionError

# ============================================================
# STATE DEFINITIONS
# ============================================================

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    Order.STATUS_PENDING: frozenset({Order.STATUS_PROCESSING, Order.STATUS_CANCELLED}),
    Order.STATUS_PROCESSING: frozenset({Order.STATUS_SHIPPED, Order.STATUS_CANCELLED}),
    Order.STATUS_SHIPPED: frozenset({Order.STATUS_DELIVERED, Order.STATUS_RETURNED}),
    Order.STATUS_DELIVERED: frozenset({Order.STATUS_RETURNED}),
    Order.STATUS_CANCELLED: frozenset(),
    Order.STATUS_RETURNED: frozenset(),
}

TERMINAL_STATES = frozenset(
    state for state, targets in ALLOWED_TRANSITIONS.items() if not targets
)

# Derived from the graph: states with an edge into CANCELLED / RETURNED.
CANCELLABLE_STATES = frozenset(
    state for state, targets in ALLOWED_TRANSITIONS.items() if Order.STATUS_CANCELLED in targets
)
RETURNABLE_STATES = frozenset(
    state for state, targets in ALLOWED_TRANSITIONS.items() if Order.STATUS_RETURNED in targets
)


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    return to_status in ALLOWED_TRANSITIONS.get(from_status, frozenset())


def can_cancel(status: str) -> bool:
    return status in CANCELLABLE_STATES


def can_return(status: str) -> bool:
    return status in RETURNABLE_STATES


def validate_transition(*, order: Order, target_status: str) -> None:
    if not can_transition(from_status=order.status, to_status=target_status):
        raise InvalidOrderTransitionError(
            f"Order {order.order_number} cannot transition from "
            f"'{order.status}' to '{target_status}'",
            details={
                "from": order.status,
                "to": target_status,
                "allowed": sorted(ALLOWED_TRANSITIONS.get(order.status, ())),
            },
        )
