# store/serializers/store.py

from rest_framework import serializers

from store.models import Store


class StoreSerializer(serializers.ModelSerializer):
    staff_count = serializers.IntegerField(read_only=True)
    order_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Store
        fields = [
            "id",
            "name",
            "code",
            "location",
            "phone",
            "is_active",
            "staff_count",
            "order_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PublicStoreSerializer(serializers.ModelSerializer):
    class Meta:
        model = Store
        fields = ["id", "name", "location", "phone"]
        read_only_fields = fields


class StoreWriteSerializer(serializers.ModelSerializer):
    # the database reports code clashes (409)
    class Meta:
        model = Store
        fields = ["name", "code", "location", "phone", "is_active"]
        validators = []
        extra_kwargs = {"code": {"validators": []}}

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value

    def validate_code(self, value):
        return (value or "").strip() or None


class StoreUpdateSerializer(StoreWriteSerializer):
    id = serializers.IntegerField(min_value=1)

    class Meta(StoreWriteSerializer.Meta):
        fields = ["id", *StoreWriteSerializer.Meta.fields]
