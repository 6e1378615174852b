# coupons/models/__init__.py

from .coupon import Coupon, CouponUsage, OrderCoupon

__all__ = ["Coupon", "CouponUsage", "OrderCoupon"]
