# catalog/serializers/product.py

from decimal import Decimal

from rest_framework import serializers

from catalog.models import AttributeValue, Brand, Category, Product, ProductVariant, Tag
from common.crud import update_serializer_for


class ProductSerializer(serializers.ModelSerializer):
    brand_name = serializers.CharField(source="brand.name", read_only=True, default=None)
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "short_description",
            "description",
            "price",
            "sale_price",
            "tax",
            "product_type",
            "brand",
            "brand_name",
            "category",
            "category_name",
            "tags",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
    brand = serializers.PrimaryKeyRelatedField(
        queryset=Brand.objects.filter(deleted_at__isnull=True),
        required=False,
        allow_null=True,
    )
    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.filter(deleted_at__isnull=True),
        required=False,
        allow_null=True,
    )
    tags = serializers.PrimaryKeyRelatedField(
        queryset=Tag.objects.filter(deleted_at__isnull=True),
        many=True,
        required=False,
    )

    class Meta:
        model = Product
        fields = [
            "name",
            "short_description",
            "description",
            "price",
            "sale_price",
            "tax",
            "product_type",
            "brand",
            "category",
            "tags",
        ]

    def validate(self, attrs):
        price = attrs.get("price", getattr(self.instance, "price", None))
        sale_price = attrs.get("sale_price")
        if sale_price is not None and price is not None and sale_price > price:
            raise serializers.ValidationError({"sale_price": "Sale price cannot exceed price."})
        return attrs


ProductUpdateSerializer = update_serializer_for(ProductWriteSerializer)


class ProductVariantSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = ProductVariant
        fields = [
            "id",
            "product",
            "product_name",
            "name",
            "sku",
            "price",
            "sale_price",
            "attribute_values",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductVariantWriteSerializer(serializers.ModelSerializer):
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.filter(deleted_at__isnull=True))
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
    attribute_values = serializers.PrimaryKeyRelatedField(
        queryset=AttributeValue.objects.filter(deleted_at__isnull=True),
        many=True,
        required=False,
    )

    class Meta:
        model = ProductVariant
        fields = ["product", "name", "sku", "price", "sale_price", "attribute_values"]
        extra_kwargs = {"sku": {"validators": []}}


ProductVariantUpdateSerializer = update_serializer_for(ProductVariantWriteSerializer)
