# catalog/views/resources.py

"""
CATALOG RESOURCES (CRUD factory)

brands, categories, tags, attributes, attribute_values, products, variants.

Attribute values are created in batches:
    POST /api/attribute-values/  {"attribute_id": 1, "values": ["S", "M", "L"]}
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status

from catalog.serializers.product import (
    ProductSerializer,
    ProductUpdateSerializer,
    ProductVariantSerializer,
    ProductVariantUpdateSerializer,
    ProductVariantWriteSerializer,
    ProductWriteSerializer,
)
from catalog.serializers.taxonomy import (
    AttributeSerializer,
    AttributeUpdateSerializer,
    AttributeValueBatchSerializer,
    AttributeValueSerializer,
    AttributeValueUpdateSerializer,
    AttributeWriteSerializer,
    BrandSerializer,
    BrandUpdateSerializer,
    BrandWriteSerializer,
    CategorySerializer,
    CategoryUpdateSerializer,
    CategoryWriteSerializer,
    TagSerializer,
    TagUpdateSerializer,
    TagWriteSerializer,
)
from catalog.services import attribute_values
from catalog.services.catalog_services import (
    attribute_service,
    attribute_value_service,
    brand_service,
    category_service,
    product_service,
    tag_service,
    variant_service,
)
from common.crud import crud_viewset
from common.identifiers import parse_id
from common.responses import success_response

BrandViewSet = crud_viewset(
    service=brand_service,
    create_serializer=BrandWriteSerializer,
    update_serializer=BrandUpdateSerializer,
    output_serializer=BrandSerializer,
    resource="brands",
    resource_name="brand",
)

CategoryViewSet = crud_viewset(
    service=category_service,
    create_serializer=CategoryWriteSerializer,
    update_serializer=CategoryUpdateSerializer,
    output_serializer=CategorySerializer,
    resource="categories",
    resource_name="category",
)

TagViewSet = crud_viewset(
    service=tag_service,
    create_serializer=TagWriteSerializer,
    update_serializer=TagUpdateSerializer,
    output_serializer=TagSerializer,
    resource="tags",
    resource_name="tag",
)

AttributeViewSet = crud_viewset(
    service=attribute_service,
    create_serializer=AttributeWriteSerializer,
    update_serializer=AttributeUpdateSerializer,
    output_serializer=AttributeSerializer,
    resource="attributes",
    resource_name="attribute",
)

ProductViewSet = crud_viewset(
    service=product_service,
    create_serializer=ProductWriteSerializer,
    update_serializer=ProductUpdateSerializer,
    output_serializer=ProductSerializer,
    resource="products",
    resource_name="product",
)

ProductVariantViewSet = crud_viewset(
    service=variant_service,
    create_serializer=ProductVariantWriteSerializer,
    update_serializer=ProductVariantUpdateSerializer,
    output_serializer=ProductVariantSerializer,
    resource="variants",
    resource_name="variant",
)


class AttributeValueViewSet(
    crud_viewset(
        service=attribute_value_service,
        create_serializer=AttributeValueBatchSerializer,
        update_serializer=AttributeValueUpdateSerializer,
        output_serializer=AttributeValueSerializer,
        resource="attribute_values",
        resource_name="attribute value",
    )
):
    def list(self, request):
        qs = self.crud_service.list()
        attribute_id = request.query_params.get("attribute_id")
        if attribute_id:
            qs = qs.filter(attribute_id=parse_id(attribute_id, "attribute_id"))
        return success_response(AttributeValueSerializer(qs, many=True).data)

    @extend_schema(request=AttributeValueBatchSerializer, responses={201: AttributeValueSerializer(many=True)})
    def create(self, request):
        serializer = AttributeValueBatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        created = attribute_values.create_values(**serializer.validated_data)
        return success_response(
            AttributeValueSerializer(created, many=True).data,
            message=f"Created {len(created)} attribute value(s)",
            status=status.HTTP_201_CREATED,
        )
