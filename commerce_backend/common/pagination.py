# common/pagination.py

"""
Page/limit pagination shared by listing endpoints.

The response block mirrors what the storefront and back-office clients read:

    {"current_page", "total_pages", "<total_key>", "has_next", "has_prev"}
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from django.conf import settings
from rest_framework import serializers


class PageQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(required=False, min_value=1)

    def validate_limit(self, value):
        maximum = settings.ORDER_MAX_PAGE_SIZE
        if value > maximum:
            raise serializers.ValidationError(f"Ensure this value is at most {maximum}.")
        return value


@dataclass(frozen=True)
class Page:
    items: list
    current_page: int
    total_pages: int
    total: int

    def meta(self, total_key: str = "total_items") -> dict:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            total_key: self.total,
            "has_next": self.current_page < self.total_pages,
            "has_prev": self.current_page > 1,
        }


def paginate(queryset, *, page: int = 1, limit: int | None = None) -> Page:
    """
    Slice a queryset. Pages past the end yield an empty item list
    rather than an error.
    """
    limit = limit or settings.ORDER_PAGE_SIZE
    total = queryset.count()
    total_pages = math.ceil(total / limit) if total else 0
    offset = (page - 1) * limit

    return Page(
        items=list(queryset[offset : offset + limit]),
        current_page=page,
        total_pages=total_pages,
        total=total,
    )
