# orders/services/numbering.py

"""
ORDER NUMBERS

Format: ORD-YYYYMMDD-NNNNNN
- date part is the UTC placement date
- sequence restarts at 000001 every day (last sequence of the day + 1)
"""

from __future__ import annotations

import re
from datetime import date

from django.utils import timezone

from orders.models import Order

ORDER_NUMBER_PATTERN = re.compile(r"^ORD-(\d{8})-(\d{6})$")
SEQUENCE_WIDTH = 6


def order_number_prefix(day: date) -> str:
    return f"ORD-{day:%Y%m%d}-"


def generate_order_number(day: date | None = None) -> str:
    day = day or timezone.now().date()
    prefix = order_number_prefix(day)

    # Soft-deleted orders keep their numbers, so the default manager is used.
    last = (
        Order.objects.filter(order_number__startswith=prefix)
        .order_by("-order_number")
        .values_list("order_number", flat=True)
        .first()
    )

    sequence = 1
    if last:
        sequence = int(last.rsplit("-", 1)[1]) + 1

    return f"{prefix}{sequence:0{SEQUENCE_WIDTH}d}"


def is_valid_order_number(value: str) -> bool:
    return bool(ORDER_NUMBER_PATTERN.match(value or ""))
