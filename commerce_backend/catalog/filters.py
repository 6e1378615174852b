# catalog/filters.py

"""
Query-string filters for the inventory endpoints (django-filter).

    GET /api/inventory/?store_id=1&variant_id=2&status=LIMITED
    GET /api/inventory/movements/?order_id=7&operation=decrement
"""

import django_filters

from catalog.models import StockMovement, StoreVariantStock


class StockFilter(django_filters.FilterSet):
    store_id = django_filters.NumberFilter(field_name="store_id")
    variant_id = django_filters.NumberFilter(field_name="variant_id")
    status = django_filters.ChoiceFilter(field_name="stock_status", choices=StoreVariantStock.STATUS_CHOICES)

    class Meta:
        model = StoreVariantStock
        fields = ["store_id", "variant_id", "status"]


class StockMovementFilter(django_filters.FilterSet):
    store_id = django_filters.NumberFilter(field_name="store_id")
    variant_id = django_filters.NumberFilter(field_name="variant_id")
    order_id = django_filters.NumberFilter(field_name="order_id")
    operation = django_filters.ChoiceFilter(choices=StockMovement.OPERATION_CHOICES)
    created_from = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    created_to = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    class Meta:
        model = StockMovement
        fields = ["store_id", "variant_id", "order_id", "operation"]
