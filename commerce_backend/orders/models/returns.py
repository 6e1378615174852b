# orders/models/returns.py

"""
RETURN REQUESTS

A customer return is stored as an OrderReturn with one OrderReturnItem per
returned order line. The order itself moves to RETURNED and receives a
summary line in its notes.
"""

from django.core.validators import MinValueValidator
from django.db import models


class OrderReturn(models.Model):
    order = models.ForeignKey("orders.Order", on_delete=models.CASCADE, related_name="returns")
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_returns",
    )
    reason = models.CharField(max_length=500)
    requested_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-requested_at", "-id"]

    def __str__(self):
        return f"Return #{self.pk} for order={self.order_id}"


class OrderReturnItem(models.Model):
    order_return = models.ForeignKey(OrderReturn, on_delete=models.CASCADE, related_name="items")
    order_item = models.ForeignKey(
        "orders.OrderItem",
        on_delete=models.PROTECT,
        related_name="return_items",
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    reason = models.CharField(max_length=200)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.quantity} x order_item={self.order_item_id}"
