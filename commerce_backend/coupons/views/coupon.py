# coupons/views/coupon.py

from common.crud import crud_viewset
from coupons.serializers.coupon import (
    CouponSerializer,
    CouponUpdateSerializer,
    CouponWriteSerializer,
)
from coupons.services.coupon_service import coupon_service

CouponViewSet = crud_viewset(
    service=coupon_service,
    create_serializer=CouponWriteSerializer,
    update_serializer=CouponUpdateSerializer,
    output_serializer=CouponSerializer,
    resource="coupons",
    resource_name="coupon",
)
