# coupons/admin.py

from django.contrib import admin

from coupons.models import Coupon, CouponUsage, OrderCoupon


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = ("id", "code", "name", "coupon_type", "amount", "status", "is_expired", "deleted_at")
    list_filter = ("coupon_type", "status", "is_expired")
    search_fields = ("code", "name")


@admin.register(OrderCoupon)
class OrderCouponAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "coupon", "created_at")
    raw_id_fields = ("order", "coupon")


@admin.register(CouponUsage)
class CouponUsageAdmin(admin.ModelAdmin):
    list_display = ("id", "coupon", "customer", "order", "used_at")
    raw_id_fields = ("coupon", "customer", "order")
