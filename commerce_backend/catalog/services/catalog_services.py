# catalog/services/catalog_services.py

"""
CRUD services for catalog resources (used by the CRUD controller factory).
"""

from __future__ import annotations

from django.db import transaction
from django.utils.text import slugify

from catalog.models import (
    Attribute,
    AttributeValue,
    Brand,
    Category,
    Product,
    ProductVariant,
    Tag,
)
from common.crud import ModelService


class CategoryService(ModelService):
    """Derives a unique slug from the name when none is supplied."""

    def _unique_slug(self, name: str, exclude_pk: int | None = None) -> str:
        base = slugify(name) or "category"
        candidate = base
        i = 1
        qs = Category.objects.all()
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        while qs.filter(slug=candidate).exists():
            i += 1
            candidate = f"{base}-{i}"
        return candidate

    @transaction.atomic
    def create(self, data: dict):
        data = dict(data)
        if not data.get("slug"):
            data["slug"] = self._unique_slug(data["name"])
        return super().create(data)


brand_service = ModelService(Brand, ordering=("name", "id"))
category_service = CategoryService(Category, select_related=("parent",), ordering=("name", "id"))
tag_service = ModelService(Tag, ordering=("name", "id"))
attribute_service = ModelService(Attribute, prefetch_related=("values",), ordering=("name", "id"))
attribute_value_service = ModelService(
    AttributeValue,
    select_related=("attribute",),
    ordering=("attribute_id", "position", "id"),
)
product_service = ModelService(
    Product,
    select_related=("brand", "category"),
    prefetch_related=("tags",),
    ordering=("-created_at", "-id"),
)
variant_service = ModelService(
    ProductVariant,
    select_related=("product",),
    prefetch_related=("attribute_values",),
    ordering=("product_id", "id"),
)
