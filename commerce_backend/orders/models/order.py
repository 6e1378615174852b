# orders/models/order.py

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Order(models.Model):
    """
    Customer order placed through the storefront.

    GUARANTEES:
    - order_number is unique and never reused (ORD-YYYYMMDD-NNNNNN)
    - items are written once, together with the order
    - status only moves along orders.services.lifecycle.ALLOWED_TRANSITIONS
    - never removed; deleted_at hides it from every query
    """

    STATUS_PENDING = "PENDING"
    STATUS_PROCESSING = "PROCESSING"
    STATUS_SHIPPED = "SHIPPED"
    STATUS_DELIVERED = "DELIVERED"
    STATUS_CANCELLED = "CANCELLED"
    STATUS_RETURNED = "RETURNED"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
        (STATUS_RETURNED, "Returned"),
    ]

    PAYMENT_CARD = "CARD"
    PAYMENT_MPESA_EXPRESS = "MPESAEXPRESS"
    PAYMENT_PAYBILL = "PAYBILL"
    PAYMENT_PAYPAL = "PAYPAL"
    PAYMENT_COD = "COD"
    PAYMENT_OTHER = "OTHER"

    PAYMENT_METHOD_CHOICES = [
        (PAYMENT_CARD, "Credit/Debit Card"),
        (PAYMENT_MPESA_EXPRESS, "M-Pesa Express"),
        (PAYMENT_PAYBILL, "M-Pesa PayBill"),
        (PAYMENT_PAYPAL, "PayPal"),
        (PAYMENT_COD, "Cash on Delivery"),
        (PAYMENT_OTHER, "Other"),
    ]

    SHIPPING_STANDARD = "standard"
    SHIPPING_EXPRESS = "express"
    SHIPPING_OVERNIGHT = "overnight"

    SHIPPING_METHOD_CHOICES = [
        (SHIPPING_STANDARD, "Standard"),
        (SHIPPING_EXPRESS, "Express"),
        (SHIPPING_OVERNIGHT, "Overnight"),
    ]

    order_number = models.CharField(max_length=32, unique=True)

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    address = models.ForeignKey(
        "customers.Address",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    store = models.ForeignKey(
        "store.Store",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES)
    paid = models.BooleanField(default=False)
    notes = models.TextField(blank=True)
    shipping_method = models.CharField(
        max_length=10,
        choices=SHIPPING_METHOD_CHOICES,
        default=SHIPPING_STANDARD,
    )

    placed_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ["-placed_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["placed_at"], name="order_placed_at_idx"),
            models.Index(fields=["customer", "placed_at"], name="order_customer_placed_idx"),
            models.Index(fields=["store", "placed_at"], name="order_store_placed_idx"),
        ]

    def __str__(self):
        return f"{self.order_number} ({self.status})"


class OrderItem(models.Model):
    """One purchased variant; price is the unit price at order time."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    variant = models.ForeignKey(
        "catalog.ProductVariant",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_item_quantity_positive",
            ),
        ]

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def __str__(self):
        return f"{self.quantity} x variant={self.variant_id} @ {self.price}"
