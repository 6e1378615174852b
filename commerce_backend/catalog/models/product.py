# catalog/models/product.py

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Product(models.Model):
    TYPE_SIMPLE = "SIMPLE"
    TYPE_VARIANT = "VARIANT"

    TYPE_CHOICES = [
        (TYPE_SIMPLE, "Simple"),
        (TYPE_VARIANT, "Variant"),
    ]

    name = models.CharField(max_length=255)
    short_description = models.CharField(max_length=500, blank=True)
    description = models.TextField(blank=True)

    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    sale_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    tax = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))

    product_type = models.CharField(max_length=10, choices=TYPE_CHOICES, default=TYPE_SIMPLE)

    brand = models.ForeignKey(
        "catalog.Brand",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    category = models.ForeignKey(
        "catalog.Category",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    tags = models.ManyToManyField("catalog.Tag", blank=True, related_name="products")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name


class ProductVariant(models.Model):
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="variants")
    name = models.CharField(max_length=255)
    sku = models.CharField(max_length=100, unique=True)

    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    sale_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    attribute_values = models.ManyToManyField(
        "catalog.AttributeValue",
        blank=True,
        related_name="variants",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ["product_id", "id"]

    def __str__(self):
        return f"{self.name} ({self.sku})"
