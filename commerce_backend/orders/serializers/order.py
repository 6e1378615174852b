# orders/serializers/order.py

"""
ORDER READ SERIALIZERS

Every order payload carries the derived display fields
(status_display, payment_method_display, estimated_delivery,
can_cancel, can_return) computed by orders.services.display.
"""

from rest_framework import serializers

from customers.serializers.address import AddressSerializer
from orders.models import Order, OrderItem, OrderReturn, OrderReturnItem
from orders.services.display import display_fields


class OrderItemSerializer(serializers.ModelSerializer):
    variant_id = serializers.IntegerField(read_only=True)
    variant_name = serializers.CharField(source="variant.name", read_only=True)
    sku = serializers.CharField(source="variant.sku", read_only=True)
    product_id = serializers.IntegerField(source="variant.product_id", read_only=True)
    product_name = serializers.CharField(source="variant.product.name", read_only=True)
    line_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "variant_id",
            "variant_name",
            "sku",
            "product_id",
            "product_name",
            "quantity",
            "price",
            "line_total",
        ]
        read_only_fields = fields


class OrderReturnItemSerializer(serializers.ModelSerializer):
    item_id = serializers.IntegerField(source="order_item_id", read_only=True)

    class Meta:
        model = OrderReturnItem
        fields = ["id", "item_id", "quantity", "reason"]
        read_only_fields = fields


class OrderReturnSerializer(serializers.ModelSerializer):
    items = OrderReturnItemSerializer(many=True, read_only=True)

    class Meta:
        model = OrderReturn
        fields = ["id", "reason", "requested_at", "items"]
        read_only_fields = fields


class OrderCustomerSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField(allow_null=True)
    phone = serializers.CharField()


class OrderStoreSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()


class OrderSerializer(serializers.ModelSerializer):
    customer = OrderCustomerSerializer(read_only=True)
    address = AddressSerializer(read_only=True, allow_null=True)
    store = OrderStoreSerializer(read_only=True, allow_null=True)
    items = OrderItemSerializer(many=True, read_only=True)
    coupons = serializers.SerializerMethodField()
    returns = OrderReturnSerializer(many=True, read_only=True)

    status_display = serializers.CharField(read_only=True)
    payment_method_display = serializers.CharField(read_only=True)
    estimated_delivery = serializers.DateTimeField(read_only=True)
    can_cancel = serializers.BooleanField(read_only=True)
    can_return = serializers.BooleanField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer",
            "address",
            "store",
            "status",
            "status_display",
            "total_amount",
            "payment_method",
            "payment_method_display",
            "paid",
            "notes",
            "shipping_method",
            "placed_at",
            "updated_at",
            "estimated_delivery",
            "can_cancel",
            "can_return",
            "items",
            "coupons",
            "returns",
        ]
        read_only_fields = fields

    def get_coupons(self, obj):
        return [
            {"id": link.coupon_id, "code": link.coupon.code, "name": link.coupon.name}
            for link in obj.coupon_links.all()
        ]

    def to_representation(self, instance):
        derived = display_fields(instance)
        for name, value in derived.items():
            setattr(instance, name, value)
        return super().to_representation(instance)


class OrderSummarySerializer(serializers.ModelSerializer):
    """Compact row for dashboards (no items / returns)."""

    customer = OrderCustomerSerializer(read_only=True)
    status_display = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer",
            "status",
            "status_display",
            "total_amount",
            "payment_method",
            "paid",
            "placed_at",
        ]
        read_only_fields = fields

    def get_status_display(self, obj):
        return display_fields(obj)["status_display"]
