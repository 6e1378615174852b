# coupons/serializers/coupon.py

from decimal import Decimal

from rest_framework import serializers

from catalog.models import Product
from common.crud import update_serializer_for
from coupons.models import Coupon


class CouponSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coupon
        fields = [
            "id",
            "name",
            "description",
            "code",
            "coupon_type",
            "amount",
            "is_first_order",
            "is_expired",
            "status",
            "apply_all_products",
            "products",
            "min_spend",
            "usage_limit",
            "usage_per_customer",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CouponWriteSerializer(serializers.ModelSerializer):
    code = serializers.CharField(max_length=50, trim_whitespace=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
    products = serializers.PrimaryKeyRelatedField(
        queryset=Product.objects.filter(deleted_at__isnull=True),
        many=True,
        required=False,
    )

    class Meta:
        model = Coupon
        fields = [
            "name",
            "description",
            "code",
            "coupon_type",
            "amount",
            "is_first_order",
            "is_expired",
            "status",
            "apply_all_products",
            "products",
            "min_spend",
            "usage_limit",
            "usage_per_customer",
        ]

    def validate(self, attrs):
        coupon_type = attrs.get("coupon_type", getattr(self.instance, "coupon_type", None))
        amount = attrs.get("amount", getattr(self.instance, "amount", None))
        if coupon_type == Coupon.TYPE_PERCENTAGE and amount is not None and amount > 100:
            raise serializers.ValidationError({"amount": "Percentage coupons cannot exceed 100."})
        return attrs


CouponUpdateSerializer = update_serializer_for(CouponWriteSerializer)
