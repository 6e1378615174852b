# orders/serializers/commands.py

"""
ORDER COMMAND SERIALIZERS (INPUT ONLY)

Bodies are validated here before any service call. Business rules that
need the database (total vs items, transitions, ownership, return
quantities) live in orders.services.order_service.
"""

from decimal import Decimal

from rest_framework import serializers

from orders.models import Order

STATUS_VALUES = [key for key, _ in Order.STATUS_CHOICES]
PAYMENT_METHOD_VALUES = [key for key, _ in Order.PAYMENT_METHOD_CHOICES]
SHIPPING_METHOD_VALUES = [key for key, _ in Order.SHIPPING_METHOD_CHOICES]

MAX_ITEMS_PER_ORDER = 50
MAX_COUPONS_PER_ORDER = 5
MAX_BULK_ORDERS = 100


class OrderItemInputSerializer(serializers.Serializer):
    variant_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))


class OrderCreateSerializer(serializers.Serializer):
    address_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    store_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    items = OrderItemInputSerializer(many=True, allow_empty=False, max_length=MAX_ITEMS_PER_ORDER)
    payment_method = serializers.ChoiceField(choices=PAYMENT_METHOD_VALUES)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")
    coupon_codes = serializers.ListField(
        child=serializers.CharField(min_length=1, max_length=50),
        required=False,
        max_length=MAX_COUPONS_PER_ORDER,
        default=list,
    )
    shipping_method = serializers.ChoiceField(
        choices=SHIPPING_METHOD_VALUES,
        required=False,
        default=Order.SHIPPING_STANDARD,
    )


class OrderUpdateSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1, required=False)
    status = serializers.ChoiceField(choices=STATUS_VALUES, required=False)
    payment_method = serializers.ChoiceField(choices=PAYMENT_METHOD_VALUES, required=False)
    paid = serializers.BooleanField(required=False)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    address_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)

    def validate(self, attrs):
        attrs.pop("id", None)
        if not attrs:
            raise serializers.ValidationError("Provide at least one field to update.")
        return attrs


class CancelOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500)


class ReturnItemSerializer(serializers.Serializer):
    item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)
    reason = serializers.CharField(max_length=200)


class ReturnOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500)
    items = ReturnItemSerializer(many=True, allow_empty=False)


class BulkUpdateSerializer(serializers.Serializer):
    order_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        min_length=1,
        max_length=MAX_BULK_ORDERS,
    )
    status = serializers.ChoiceField(choices=STATUS_VALUES)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)
