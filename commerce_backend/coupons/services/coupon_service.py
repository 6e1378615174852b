# coupons/services/coupon_service.py

"""
COUPON SERVICE

- coupon_service: CRUD for the back-office (soft delete)
- link_coupons(): attach active, non-expired codes to a new order;
  unknown or inactive codes are skipped
- record_usages(): one CouponUsage per linked coupon when an order
  becomes paid (idempotent)

Both order-side helpers run inside the caller's transaction.
"""

from __future__ import annotations

import logging

from common.crud import ModelService
from coupons.models import Coupon, CouponUsage, OrderCoupon

logger = logging.getLogger("orders")

coupon_service = ModelService(Coupon, prefetch_related=("products",), ordering=("-created_at", "-id"))


def active_coupons():
    return Coupon.objects.filter(
        status=Coupon.STATUS_ACTIVE,
        is_expired=False,
        deleted_at__isnull=True,
    )


def link_coupons(order, codes) -> list[OrderCoupon]:
    wanted = list(dict.fromkeys(code.strip() for code in codes or () if code and code.strip()))
    if not wanted:
        return []

    coupons = {coupon.code: coupon for coupon in active_coupons().filter(code__in=wanted)}

    links = []
    for code in wanted:
        coupon = coupons.get(code)
        if coupon is None:
            logger.info(
                "orders.coupon_skipped",
                extra={"order_id": order.id, "code": code},
            )
            continue
        links.append(OrderCoupon.objects.create(order=order, coupon=coupon))

    return links


def record_usages(order) -> int:
    created = 0
    for link in OrderCoupon.objects.filter(order=order):
        _, was_created = CouponUsage.objects.get_or_create(
            coupon_id=link.coupon_id,
            customer_id=order.customer_id,
            order=order,
        )
        created += int(was_created)

    if created:
        logger.info(
            "orders.coupon_usage_recorded",
            extra={"order_id": order.id, "count": created},
        )
    return created
