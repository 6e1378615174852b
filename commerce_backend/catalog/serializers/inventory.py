# catalog/serializers/inventory.py

from rest_framework import serializers

from catalog.models import StockMovement, StoreVariantStock


class StockSerializer(serializers.ModelSerializer):
    store_name = serializers.CharField(source="store.name", read_only=True)
    variant_name = serializers.CharField(source="variant.name", read_only=True)
    sku = serializers.CharField(source="variant.sku", read_only=True)

    class Meta:
        model = StoreVariantStock
        fields = [
            "id",
            "store",
            "store_name",
            "variant",
            "variant_name",
            "sku",
            "quantity",
            "stock_status",
            "updated_at",
        ]
        read_only_fields = fields


class StockMovementSerializer(serializers.ModelSerializer):
    class Meta:
        model = StockMovement
        fields = [
            "id",
            "variant",
            "store",
            "user",
            "customer",
            "order",
            "operation",
            "quantity",
            "previous_quantity",
            "new_quantity",
            "reason",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class StockAdjustSerializer(serializers.Serializer):
    store_id = serializers.IntegerField(min_value=1)
    variant_id = serializers.IntegerField(min_value=1)
    operation = serializers.ChoiceField(choices=[c for c, _ in StockMovement.OPERATION_CHOICES])
    quantity = serializers.IntegerField(min_value=0)
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")
