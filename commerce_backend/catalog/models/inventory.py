# catalog/models/inventory.py

"""
INVENTORY MODELS

StoreVariantStock  quantity of one variant in one store (unique per pair)
StockMovement      append-only log of every quantity change, with the
                   before/after quantities and what caused it (staff
                   adjustment, order reservation, order cancellation)
"""

from django.conf import settings
from django.db import models


class StoreVariantStock(models.Model):
    STATUS_IN_STOCK = "IN_STOCK"
    STATUS_LIMITED = "LIMITED"
    STATUS_OUT_OF_STOCK = "OUT_OF_STOCK"

    STATUS_CHOICES = [
        (STATUS_IN_STOCK, "In stock"),
        (STATUS_LIMITED, "Limited"),
        (STATUS_OUT_OF_STOCK, "Out of stock"),
    ]

    LIMITED_THRESHOLD = 5

    store = models.ForeignKey("store.Store", on_delete=models.PROTECT, related_name="variant_stock")
    variant = models.ForeignKey("catalog.ProductVariant", on_delete=models.PROTECT, related_name="stock")
    quantity = models.IntegerField(default=0)
    stock_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_OUT_OF_STOCK)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["store", "variant"], name="uniq_store_variant_stock"),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="store_variant_stock_non_negative",
            ),
        ]

    @classmethod
    def status_for(cls, quantity: int) -> str:
        if quantity <= 0:
            return cls.STATUS_OUT_OF_STOCK
        if quantity <= cls.LIMITED_THRESHOLD:
            return cls.STATUS_LIMITED
        return cls.STATUS_IN_STOCK

    def __str__(self):
        return f"store={self.store_id} variant={self.variant_id} qty={self.quantity}"


class StockMovement(models.Model):
    OP_INCREMENT = "increment"
    OP_DECREMENT = "decrement"
    OP_SET = "set"

    OPERATION_CHOICES = [
        (OP_INCREMENT, "Increment"),
        (OP_DECREMENT, "Decrement"),
        (OP_SET, "Set"),
    ]

    variant = models.ForeignKey("catalog.ProductVariant", on_delete=models.PROTECT, related_name="movements")
    store = models.ForeignKey("store.Store", on_delete=models.PROTECT, related_name="stock_movements")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stock_movements",
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stock_movements",
    )
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stock_movements",
    )

    operation =models.CharField(max_length=10, choices=OPERATION_CHOICES)
    quantity = models.PositiveIntegerField()
    previous_quantity = models.IntegerField()
    new_quantity = models.IntegerField()
    reason = models.CharField(max_length=255, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.operation} {self.quantity} (variant={self.variant_id}, store={self.store_id})"
