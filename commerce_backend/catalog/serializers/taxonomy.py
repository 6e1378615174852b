# catalog/serializers/taxonomy.py

from rest_framework import serializers

from catalog.models import Attribute, AttributeValue, Brand, Category, Tag
from common.crud import update_serializer_for


# ---------------------------
# BRAND
# ---------------------------
class BrandSerializer(serializers.ModelSerializer):
    class Meta:
        model = Brand
        fields = ["id", "name", "description", "created_at", "updated_at"]
        read_only_fields = fields


class BrandWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Brand
        fields = ["name", "description"]
        extra_kwargs = {"name": {"validators": []}}


BrandUpdateSerializer = update_serializer_for(BrandWriteSerializer)


# ---------------------------
# CATEGORY
# ---------------------------
class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "parent", "created_at", "updated_at"]
        read_only_fields = fields


class CategoryWriteSerializer(serializers.ModelSerializer):
    slug = serializers.SlugField(max_length=170, required=False)
    parent = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.filter(deleted_at__isnull=True),
        required=False,
        allow_null=True,
    )

    class Meta:
        model = Category
        fields = ["name", "slug", "description", "parent"]


CategoryUpdateSerializer = update_serializer_for(CategoryWriteSerializer)


# ---------------------------
# TAG
# ---------------------------
class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ["id", "name", "created_at", "updated_at"]
        read_only_fields = fields


class TagWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ["name"]
        extra_kwargs = {"name": {"validators": []}}


TagUpdateSerializer = update_serializer_for(TagWriteSerializer)


# ---------------------------
# ATTRIBUTE / ATTRIBUTE VALUE
# ---------------------------
class AttributeValueSerializer(serializers.ModelSerializer):
    attribute_name = serializers.CharField(source="attribute.name", read_only=True)

    class Meta:
        model = AttributeValue
        fields = ["id", "attribute", "attribute_name", "value", "position", "created_at"]
        read_only_fields = fields


class AttributeSerializer(serializers.ModelSerializer):
    values = serializers.SerializerMethodField()

    class Meta:
        model = Attribute
        fields = ["id", "name", "values", "created_at", "updated_at"]
        read_only_fields = fields

    def get_values(self, obj):
        live = [v for v in obj.values.all() if v.deleted_at is None]
        live.sort(key=lambda v: (v.position, v.id))
        return [{"id": v.id, "value": v.value, "position": v.position} for v in live]


class AttributeWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Attribute
        fields = ["name"]
        extra_kwargs = {"name": {"validators": []}}


AttributeUpdateSerializer = update_serializer_for(AttributeWriteSerializer)


class AttributeValueBatchSerializer(serializers.Serializer):
    attribute_id = serializers.IntegerField(min_value=1)
    values = serializers.ListField(
        child=serializers.CharField(max_length=100),
        min_length=1,
        max_length=100,
    )


class AttributeValueWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = AttributeValue
        fields = ["value", "position"]


AttributeValueUpdateSerializer = update_serializer_for(AttributeValueWriteSerializer)
