# orders/views/admin.py

"""
BACK-OFFICE ORDER API (staff JWT, resource "orders")

GET    /api/orders/                                  list (filters + pagination)
GET    /api/orders/<id>/                             detail
PUT    /api/orders/<id>/  PATCH                      partial update (status validated)
DELETE /api/orders/<id>/                             soft delete (cancelled orders only)
POST   /api/orders/<id>/cancel/                      cancel with reason
GET    /api/orders/analytics/                        aggregates
GET    /api/orders/export/                           CSV
POST   /api/orders/bulk-update/                      per-id outcomes
GET    /api/orders/customers/<customer_id>/orders/   one customer's orders
"""

from __future__ import annotations

from django.http import HttpResponse
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from common.crud import IdMismatchError
from common.identifiers import parse_id
from common.responses import success_response
from orders.serializers.commands import (
    BulkUpdateSerializer,
    CancelOrderSerializer,
    OrderUpdateSerializer,
)
from orders.serializers.order import OrderSerializer, OrderSummarySerializer
from orders.serializers.query import (
    AnalyticsQuerySerializer,
    CustomerOrderListQuerySerializer,
    OrderFilterQuerySerializer,
    OrderListQuerySerializer,
)
from orders.services import analytics_service, export_service, order_service, query_service
from orders.services.query_service import OrderFilters
from permissions.drf import ResourcePermission


def _paginated(page) -> dict:
    return {
        "results": OrderSerializer(page.items, many=True).data,
        "pagination": page.meta("total_orders"),
    }


class OrderAdminViewSet(viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated, ResourcePermission]
    permission_resource = "orders"
    permission_actions = {
        "cancel": "edit",
        "analytics": "view",
        "export": "view",
        "bulk_update": "edit",
        "customer_orders": "view",
    }
    serializer_class = OrderSerializer
    lookup_value_regex = r"[^/.]+"

    def get_queryset(self):
        return order_service.order_with_relations()

    # --------------------------------------------------
    # READ
    # --------------------------------------------------

    @extend_schema(parameters=[OrderListQuerySerializer], responses={200: dict})
    def list(self, request):
        query = OrderListQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)

        page = query_service.list_orders(
            query.to_filters(),
            page=query.validated_data["page"],
            limit=query.validated_data.get("limit"),
        )
        return success_response(_paginated(page))

    @extend_schema(responses={200: OrderSerializer})
    def retrieve(self, request, pk=None):
        order = order_service.get_order(parse_id(pk))
        return success_response(OrderSerializer(order).data)

    @extend_schema(parameters=[CustomerOrderListQuerySerializer], responses={200: dict})
    @action(
        detail=False,
        methods=["get"],
        url_path=r"customers/(?P<customer_id>[^/.]+)/orders",
    )
    def customer_orders(self, request, customer_id=None):
        customer_pk = parse_id(customer_id, "customer_id")

        query = CustomerOrderListQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)

        page = query_service.list_orders(
            OrderFilters(customer_id=customer_pk, status=query.validated_data.get("status")),
            page=query.validated_data["page"],
            limit=query.validated_data.get("limit"),
        )
        return success_response(_paginated(page))

    # --------------------------------------------------
    # WRITE
    # --------------------------------------------------

    @extend_schema(request=OrderUpdateSerializer, responses={200: OrderSerializer})
    def update(self, request, pk=None):
        order_id = parse_id(pk)

        serializer = OrderUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        body_id = serializer.initial_data.get("id") if hasattr(serializer.initial_data, "get") else None
        if body_id not in (None, "") and str(body_id) != str(order_id):
            raise IdMismatchError(
                "Body id does not match the id in the URL",
                details={"parameter": "id"},
            )

        order = order_service.update_order(order_id, dict(serializer.validated_data), actor=request.user)
        return success_response(OrderSerializer(order).data, message="Order updated successfully")

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(responses={200: dict})
    def destroy(self, request, pk=None):
        order_id = order_service.soft_delete_order(parse_id(pk), actor=request.user)
        return success_response({"id": order_id}, message="Order deleted successfully")

    @extend_schema(request=CancelOrderSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        order_id = parse_id(pk)

        serializer = CancelOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = order_service.cancel_order(
            order_id,
            reason=serializer.validated_data["reason"],
            actor=request.user,
        )
        return success_response(OrderSerializer(order).data, message="Order cancelled successfully")

    @extend_schema(request=BulkUpdateSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-update")
    def bulk_update(self, request):
        serializer = BulkUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = order_service.bulk_update_status(
            data["order_ids"],
            status=data["status"],
            notes=data.get("notes"),
            actor=request.user,
        )

        successful = [
            {**entry, "order": OrderSerializer(entry["order"]).data}
            for entry in result["successful"]
        ]
        failed = result["failed"]
        return success_response(
            {"successful": successful, "failed": failed},
            message=f"Bulk update completed. {len(successful)} successful, {len(failed)} failed.",
        )

    # --------------------------------------------------
    # REPORTING
    # --------------------------------------------------

    @extend_schema(parameters=[AnalyticsQuerySerializer], responses={200: dict})
    @action(detail=False, methods=["get"])
    def analytics(self, request):
        query = AnalyticsQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)

        data = analytics_service.order_analytics(**query.validated_data)
        data["recent_orders"] = OrderSummarySerializer(data["recent_orders"], many=True).data
        return success_response(data)

    @extend_schema(
        parameters=[OrderFilterQuerySerializer],
        responses={200: OpenApiResponse(description="text/csv attachment")},
    )
    @action(detail=False, methods=["get"])
    def export(self, request):
        query = OrderFilterQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)

        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = f'attachment; filename="{export_service.export_filename()}"'
        export_service.write_orders_csv(response, query.to_filters())
        return response

