# orders/views/customer.py

"""
STOREFRONT ORDER API (customer JWT)

GET  /api/customer/orders/                                own orders (paginated)
POST /api/customer/orders/                                place an order
GET  /api/customer/orders/stats/                          totals + recent orders
GET  /api/customer/orders/<id>/                           own order (403 if not owner)
GET  /api/customer/orders/track/<order_number>/           order + tracking
GET  /api/customer/orders/track/<order_number>/timeline/  tracking only
POST /api/customer/orders/<id>/cancel/                    PENDING / PROCESSING only
POST /api/customer/orders/<id>/return/                    SHIPPED / DELIVERED only

Order creation, cancel and return share the "order_mutation" throttle scope.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from common.identifiers import parse_id
from common.responses import success_response
from customers.authentication import CustomerJWTAuthentication
from customers.throttling import CUSTOMER_THROTTLES, CustomerScopedRateThrottle
from orders.serializers.commands import (
    CancelOrderSerializer,
    OrderCreateSerializer,
    ReturnOrderSerializer,
)
from orders.serializers.order import OrderSerializer
from orders.serializers.query import CustomerOrderListQuerySerializer
from orders.services import order_service, query_service
from orders.services.display import tracking_summary
from orders.services.query_service import OrderFilters

MUTATING_ACTIONS = {"create", "cancel", "request_return"}


class CustomerOrderViewSet(viewsets.GenericViewSet):
    authentication_classes = [CustomerJWTAuthentication]
    permission_classes = [IsAuthenticated]
    throttle_classes = CUSTOMER_THROTTLES
    serializer_class = OrderSerializer
    throttle_scope = "order_mutation"
    lookup_value_regex = r"[^/.]+"

    def get_queryset(self):
        return order_service.order_with_relations().filter(customer_id=self.request.user.pk)

    def get_throttles(self):
        if self.action in MUTATING_ACTIONS:
            return [CustomerScopedRateThrottle()]
        return super().get_throttles()

    # --------------------------------------------------
    # READ
    # --------------------------------------------------

    @extend_schema(parameters=[CustomerOrderListQuerySerializer], responses={200: dict})
    def list(self, request):
        query = CustomerOrderListQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)

        page = query_service.list_orders(
            OrderFilters(customer_id=request.user.pk, status=query.validated_data.get("status")),
            page=query.validated_data["page"],
            limit=query.validated_data.get("limit"),
        )
        return success_response(
            {
                "results": OrderSerializer(page.items, many=True).data,
                "pagination": page.meta("total_orders"),
            }
        )

    @extend_schema(responses={200: OrderSerializer})
    def retrieve(self, request, pk=None):
        order = order_service.get_customer_order(request.user, parse_id(pk))
        return success_response(OrderSerializer(order).data)

    @extend_schema(responses={200: dict})
    @action(detail=False, methods=["get"])
    def stats(self, request):
        return success_response(query_service.customer_stats(request.user))

    @extend_schema(responses={200: dict})
    @action(detail=False, methods=["get"], url_path=r"track/(?P<order_number>[^/.]+)")
    def track(self, request, order_number=None):
        order = order_service.get_customer_order_by_number(request.user, order_number)
        return success_response(
            {
                "order": OrderSerializer(order).data,
                "tracking": tracking_summary(order),
            }
        )

    @extend_schema(responses={200: dict})
    @action(detail=False, methods=["get"], url_path=r"track/(?P<order_number>[^/.]+)/timeline")
    def timeline(self, request, order_number=None):
        order = order_service.get_customer_order_by_number(request.user, order_number)
        return success_response(tracking_summary(order))

    # --------------------------------------------------
    # WRITE
    # --------------------------------------------------

    @extend_schema(request=OrderCreateSerializer, responses={201: OrderSerializer})
    def create(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = order_service.create_order(
            customer_id=request.user.pk,
            items=[dict(item) for item in data["items"]],
            payment_method=data["payment_method"],
            total_amount=data["total_amount"],
            address_id=data.get("address_id"),
            store_id=data.get("store_id"),
            notes=data.get("notes", ""),
            coupon_codes=data.get("coupon_codes", []),
            shipping_method=data.get("shipping_method"),
        )
        order = order_service.get_order(order.pk)
        return success_response(
            OrderSerializer(order).data,
            message="Order placed successfully",
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=CancelOrderSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        order_id = parse_id(pk)

        serializer = CancelOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = order_service.cancel_order(
            order_id,
            reason=serializer.validated_data["reason"],
            customer=request.user,
        )
        return success_response(OrderSerializer(order).data, message="Order cancelled successfully")

    @extend_schema(request=ReturnOrderSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="return")
    def request_return(self, request, pk=None):
        order_id = parse_id(pk)

        serializer = ReturnOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = order_service.request_return(
            order_id,
            customer=request.user,
            reason=serializer.validated_data["reason"],
            items=[dict(item) for item in serializer.validated_data["items"]],
        )
        return success_response(OrderSerializer(order).data, message="Return request submitted successfully")
