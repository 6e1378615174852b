# orders/services/query_service.py

"""
ORDER QUERIES (READ-ONLY)

- OrderFilters: the filter set shared by listing, export and analytics
- filter_orders(): non-deleted orders matching the filters, newest first
- list_orders(): filtered + paginated
- customer_stats(): storefront summary for one customer
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db.models import Count, Q, Sum

from common.pagination import Page, paginate
from orders.models import Order
from orders.services.display import format_status
from orders.services.order_service import active_orders, order_with_relations

RECENT_ORDERS_FOR_CUSTOMER = 5


@dataclass(frozen=True)
class OrderFilters:
    customer_id: int | None = None
    store_id: int | None = None
    status: str | None = None
    payment_method: str | None = None
    paid: bool | None = None
    date_from: date | None = None
    date_to: date | None = None
    search: str | None = None


def filter_orders(filters: OrderFilters | None = None):
    """
    Plain queryset (no joins added) so callers can aggregate on it.
    Date bounds are inclusive calendar days on placed_at.
    """
    filters = filters or OrderFilters()
    qs = active_orders()

    if filters.customer_id is not None:
        qs = qs.filter(customer_id=filters.customer_id)
    if filters.store_id is not None:
        qs = qs.filter(store_id=filters.store_id)
    if filters.status:
        qs = qs.filter(status=filters.status)
    if filters.payment_method:
        qs = qs.filter(payment_method=filters.payment_method)
    if filters.paid is not None:
        qs = qs.filter(paid=filters.paid)
    if filters.date_from is not None:
        qs = qs.filter(placed_at__date__gte=filters.date_from)
    if filters.date_to is not None:
        qs = qs.filter(placed_at__date__lte=filters.date_to)

    search = (filters.search or "").strip()
    if search:
        qs = qs.filter(
            Q(order_number__icontains=search)
            | Q(customer__name__icontains=search)
            | Q(customer__email__icontains=search)
        )

    return qs.order_by("-placed_at", "-id")


def list_orders(filters: OrderFilters | None = None, *, page: int = 1, limit: int | None = None) -> Page:
    return paginate(order_with_relations(filter_orders(filters)), page=page, limit=limit)


def customer_stats(customer) -> dict:
    qs = filter_orders(OrderFilters(customer_id=customer.pk))

    totals = qs.aggregate(total_orders=Count("id"), total_spent=Sum("total_amount"))

    by_status = {
        row["status"]: row["count"]
        for row in qs.order_by().values("status").annotate(count=Count("id"))
    }

    recent = [
        {
            "id": order.id,
            "order_number": order.order_number,
            "status": order.status,
            "status_display": format_status(order.status),
            "total_amount": order.total_amount,
            "placed_at": order.placed_at,
        }
        for order in qs[:RECENT_ORDERS_FOR_CUSTOMER]
    ]

    return {
        "total_orders": totals["total_orders"],
        "total_spent": totals["total_spent"] or Decimal("0.00"),
        "orders_by_status": by_status,
        "recent_orders": recent,
    }
