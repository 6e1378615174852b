# orders/services/analytics_service.py

"""
ORDER ANALYTICS (BACK-OFFICE)

Scope: optional store, optional inclusive placement-date range.

- total_orders, orders_by_status, orders_by_payment_method: all orders in scope
- total_revenue: sum of paid orders' totals
- average_order_value: total_revenue / total_orders (0 when empty)
- recent_orders: 10 newest
- top_products: 10 variants with the highest quantity sold
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Count, DecimalField, F, Sum

from orders.models import Order, OrderItem
from orders.services.order_service import order_with_relations
from orders.services.query_service import OrderFilters, filter_orders

RECENT_LIMIT = 10
TOP_PRODUCTS_LIMIT = 10
CENTS = Decimal("0.01")


def _counts(qs, field: str, keys) -> dict:
    counts = {key: 0 for key in keys}
    for row in qs.order_by().values(field).annotate(count=Count("id")):
        counts[row[field]] = row["count"]
    return counts


def top_products(qs, limit: int = TOP_PRODUCTS_LIMIT) -> list[dict]:
    rows = (
        OrderItem.objects.filter(order__in=qs.order_by().values("id"))
        .values("variant_id", "variant__name", "variant__product__name")
        .annotate(
            total_sold=Sum("quantity"),
            revenue=Sum(
                F("price") * F("quantity"),
                output_field=DecimalField(max_digits=14, decimal_places=2),
            ),
        )
        .order_by("-total_sold", "variant_id")[:limit]
    )

    return [
        {
            "variant_id": row["variant_id"],
            "product_name": f"{row['variant__product__name']} - {row['variant__name']}",
            "total_sold": row["total_sold"] or 0,
            "revenue": Decimal(row["revenue"] or 0).quantize(CENTS, rounding=ROUND_HALF_UP),
        }
        for row in rows
    ]


def order_analytics(
    *,
    store_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> dict:
    qs = filter_orders(OrderFilters(store_id=store_id, date_from=date_from, date_to=date_to))

    total_orders = qs.count()
    revenue = qs.filter(paid=True).aggregate(total=Sum("total_amount"))["total"] or Decimal("0.00")
    average = (revenue / total_orders).quantize(CENTS, rounding=ROUND_HALF_UP) if total_orders else Decimal("0.00")

    return {
        "total_orders": total_orders,
        "total_revenue": revenue,
        "average_order_value": average,
        "orders_by_status": _counts(qs, "status", [key for key, _ in Order.STATUS_CHOICES]),
        "orders_by_payment_method": _counts(
            qs, "payment_method", [key for key, _ in Order.PAYMENT_METHOD_CHOICES]
        ),
        "recent_orders": list(order_with_relations(qs)[:RECENT_LIMIT]),
        "top_products": top_products(qs),
    }
