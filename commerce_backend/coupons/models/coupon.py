# coupons/models/coupon.py

"""
COUPONS

Coupon       promotional code managed by staff
OrderCoupon  coupon code attached to an order when it was placed
CouponUsage  one row per (coupon, customer, order) once the order is paid

Discounts are not applied to order totals; the declared order total is
authoritative.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Coupon(models.Model):
    TYPE_FIXED = "FIXED"
    TYPE_PERCENTAGE = "PERCENTAGE"
    TYPE_FREESHIPPING = "FREESHIPPING"

    TYPE_CHOICES = [
        (TYPE_FIXED, "Fixed amount"),
        (TYPE_PERCENTAGE, "Percentage"),
        (TYPE_FREESHIPPING, "Free shipping"),
    ]

    STATUS_ACTIVE = "ACTIVE"
    STATUS_DISABLED = "DISABLED"
    STATUS_EXPIRED = "EXPIRED"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_DISABLED, "Disabled"),
        (STATUS_EXPIRED, "Expired"),
    ]

    name = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    code = models.CharField(max_length=50, unique=True)
    coupon_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    is_first_order = models.BooleanField(default=False)
    is_expired = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    apply_all_products = models.BooleanField(default=False)
    products = models.ManyToManyField("catalog.Product", blank=True, related_name="coupons")

    min_spend = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    usage_limit = models.PositiveIntegerField(null=True, blank=True)
    usage_per_customer = models.PositiveIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.code} ({self.coupon_type})"


class OrderCoupon(models.Model):
    order = models.ForeignKey("orders.Order", on_delete=models.CASCADE, related_name="coupon_links")
    coupon = models.ForeignKey(Coupon, on_delete=models.PROTECT, related_name="order_links")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["order", "coupon"], name="uniq_order_coupon"),
        ]

    def __str__(self):
        return f"order={self.order_id} coupon={self.coupon_id}"


class CouponUsage(models.Model):
    coupon = models.ForeignKey(Coupon, on_delete=models.PROTECT, related_name="usages")
    customer = models.ForeignKey("customers.Customer", on_delete=models.CASCADE, related_name="coupon_usages")
    order = models.ForeignKey("orders.Order", on_delete=models.CASCADE, related_name="coupon_usages")

    used_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["coupon", "customer", "order"],
                name="uniq_coupon_customer_order",
            ),
        ]

    def __str__(self):
        return f"coupon={self.coupon_id} customer={self.customer_id} order={self.order_id}"
