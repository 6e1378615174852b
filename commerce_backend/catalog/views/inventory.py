# catalog/views/inventory.py

"""
INVENTORY API (resource "inventory")

GET  /api/inventory/              stock rows (?store_id=&variant_id=&status=)
POST /api/inventory/adjust/       increment | decrement | set, logged as a movement
GET  /api/inventory/movements/    movement log (?store_id=&variant_id=&order_id=&operation=)
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated

from catalog.filters import StockFilter, StockMovementFilter
from catalog.models import ProductVariant
from catalog.serializers.inventory import (
    StockAdjustSerializer,
    StockMovementSerializer,
    StockSerializer,
)
from catalog.services import inventory
from common.exceptions import NotFoundError
from common.responses import success_response
from permissions.drf import ResourcePermission
from store.models import Store


def _filtered(filterset_class, request, queryset):
    filterset = filterset_class(request.query_params, queryset=queryset, request=request)
    if not filterset.is_valid():
        raise ValidationError(filterset.errors)
    return filterset.qs


class InventoryViewSet(viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated, ResourcePermission]
    permission_resource = "inventory"
    permission_actions = {"adjust": "edit", "movements": "view"}
    serializer_class = StockSerializer
    filterset_class = StockFilter

    def get_queryset(self):
        return inventory.list_stock()

    def list(self, request):
        rows = _filtered(StockFilter, request, inventory.list_stock())
        return success_response(StockSerializer(rows, many=True).data)

    @extend_schema(request=StockAdjustSerializer, responses={200: StockSerializer})
    @action(detail=False, methods=["post"], url_path="adjust")
    def adjust(self, request):
        serializer = StockAdjustSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if not Store.objects.filter(pk=data["store_id"], deleted_at__isnull=True).exists():
            raise NotFoundError(f"Store with ID {data['store_id']} not found")
        if not ProductVariant.objects.filter(pk=data["variant_id"], deleted_at__isnull=True).exists():
            raise NotFoundError(f"Variant with ID {data['variant_id']} not found")

        change = inventory.adjust_stock(user=request.user, **data)
        return success_response(
            {
                "stock": StockSerializer(change.stock).data,
                "movement": StockMovementSerializer(change.movement).data,
            },
            message="Stock updated",
        )

    @extend_schema(responses={200: StockMovementSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="movements", filterset_class=StockMovementFilter)
    def movements(self, request):
        rows = _filtered(StockMovementFilter, request, inventory.list_movements())
        return success_response(StockMovementSerializer(rows, many=True).data)
