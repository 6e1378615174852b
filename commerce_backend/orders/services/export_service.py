# orders/services/export_service.py

"""
CSV export of the filtered order list (no pagination, capped at
ORDER_EXPORT_MAX_ROWS).
"""

from __future__ import annotations

import csv

from django.conf import settings
from django.db.models import Count
from django.utils import timezone

from orders.services.display import format_payment_method, format_status
from orders.services.query_service import OrderFilters, filter_orders

EXPORT_COLUMNS = [
    "Order Number",
    "Customer Name",
    "Customer Email",
    "Status",
    "Payment Method",
    "Total Amount",
    "Paid",
    "Placed At",
    "Updated At",
    "Store",
    "Items Count",
]


def export_filename(today=None) -> str:
    today = today or timezone.now().date()
    return f"orders-{today.isoformat()}.csv"


def export_rows(filters: OrderFilters | None = None):
    qs = (
        filter_orders(filters)
        .select_related("customer", "store")
        .annotate(items_count=Count("items"))
    )[: settings.ORDER_EXPORT_MAX_ROWS]

    for order in qs:
        yield [
            order.order_number,
            order.customer.name or "",
            order.customer.email or "",
            format_status(order.status),
            format_payment_method(order.payment_method),
            f"{order.total_amount:.2f}",
            "Yes" if order.paid else "No",
            order.placed_at.isoformat(),
            order.updated_at.isoformat(),
            order.store.name if order.store else "",
            order.items_count,
        ]


def write_orders_csv(stream, filters: OrderFilters | None = None) -> int:
    """Write header + rows to any file-like object; returns the row count."""
    writer = csv.writer(stream, quoting=csv.QUOTE_ALL)
    writer.writerow(EXPORT_COLUMNS)

    count = 0
    for row in export_rows(filters):
        writer.writerow(row)
        count += 1
    return count
