# store/views/store.py

"""
STORES

Staff (resource "stores"):   CRUD through the factory, with staff/order counts
Storefront (no auth):        GET /api/stores/public/  active stores only
"""

from drf_spectacular.utils import extend_schema
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny

from common.crud import crud_viewset
from common.responses import success_response
from store.serializers.store import (
    PublicStoreSerializer,
    StoreSerializer,
    StoreUpdateSerializer,
    StoreWriteSerializer,
)
from store.services.store_service import store_service


class StoreViewSet(
    crud_viewset(
        service=store_service,
        create_serializer=StoreWriteSerializer,
        update_serializer=StoreUpdateSerializer,
        output_serializer=StoreSerializer,
        resource="stores",
        resource_name="store",
    )
):
    @extend_schema(responses={200: PublicStoreSerializer(many=True)})
    @action(
        detail=False,
        methods=["get"],
        url_path="public",
        permission_classes=[AllowAny],
        authentication_classes=[],
    )
    def public(self, request):
        return success_response(PublicStoreSerializer(store_service.public(), many=True).data)
