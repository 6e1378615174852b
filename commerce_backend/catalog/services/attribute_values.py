# catalog/services/attribute_values.py

"""
Attribute value batch creation.

- incoming values de-duplicated, submission order kept
- values already present on the attribute are skipped
- nothing left to create -> error
- positions continue after the attribute's current maximum, in one transaction
"""

from __future__ import annotations

from django.db import transaction
from django.db.models import Max

from catalog.models import Attribute, AttributeValue
from common.exceptions import ConflictError, NotFoundError


class NoNewAttributeValuesError(ConflictError):
    code = "no_new_values"
    default_message = "All values already exist for this attribute. No new values to create."


@transaction.atomic
def create_values(*, attribute_id: int, values: list[str]) -> list[AttributeValue]:
    attribute = (
        Attribute.objects.select_for_update()
        .filter(pk=attribute_id, deleted_at__isnull=True)
        .first()
    )
    if attribute is None:
        raise NotFoundError(f"Attribute with ID {attribute_id} not found")

    unique_values = list(dict.fromkeys(v.strip() for v in values if v.strip()))

    existing = set(
        AttributeValue.objects.filter(
            attribute=attribute,
            value__in=unique_values,
            deleted_at__isnull=True,
        ).values_list("value", flat=True)
    )
    to_create = [v for v in unique_values if v not in existing]

    if not to_create:
        raise NoNewAttributeValuesError(details={"attribute_id": attribute_id})

    current_max = AttributeValue.objects.filter(attribute=attribute).aggregate(m=Max("position"))["m"]
    start = 0 if current_max is None else current_max + 1

    return [
        AttributeValue.objects.create(attribute=attribute, value=value, position=start + offset)
        for offset, value in enumerate(to_create)
    ]
