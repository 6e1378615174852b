# orders/serializers/query.py

"""
Query-string validation for order listing, export and analytics.

Views pass request.query_params.dict(); every value arrives as a string.
"""

from rest_framework import serializers

from common.pagination import PageQuerySerializer
from orders.serializers.commands import PAYMENT_METHOD_VALUES, STATUS_VALUES
from orders.services.query_service import OrderFilters


class DateRangeQuerySerializer(serializers.Serializer):
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        attrs = super().validate(attrs)
        date_from, date_to = attrs.get("date_from"), attrs.get("date_to")
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({"date_from": "date_from must be on or before date_to."})
        return attrs


class OrderFilterQuerySerializer(DateRangeQuerySerializer):
    customer_id = serializers.IntegerField(min_value=1, required=False)
    store_id = serializers.IntegerField(min_value=1, required=False)
    status = serializers.ChoiceField(choices=STATUS_VALUES, required=False)
    payment_method = serializers.ChoiceField(choices=PAYMENT_METHOD_VALUES, required=False)
    paid = serializers.BooleanField(required=False, allow_null=True)
    search = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def to_filters(self, **overrides) -> OrderFilters:
        data = dict(self.validated_data)
        data.pop("page", None)
        data.pop("limit", None)
        data.update(overrides)
        return OrderFilters(**data)


class OrderListQuerySerializer(OrderFilterQuerySerializer, PageQuerySerializer):
    pass


class CustomerOrderListQuerySerializer(PageQuerySerializer):
    status = serializers.ChoiceField(choices=STATUS_VALUES, required=False)


class AnalyticsQuerySerializer(DateRangeQuerySerializer):
    store_id = serializers.IntegerField(min_value=1, required=False)
