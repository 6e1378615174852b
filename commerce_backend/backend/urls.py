# backend/urls.py
"""
PROJECT URLS

All API routes live under /api/

Two audiences share the prefix:
- Back-office (staff JWT): /api/auth/, /api/users/, /api/roles/, /api/orders/, catalog...
- Storefront (customer JWT): /api/customer/...

Operational:
- /api/health/ (AllowAny) checks DB connectivity.
- Django admin path configurable via ADMIN_PATH.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connections
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger("api")


# ------------------ API ROOT (PUBLIC) ------------------
@extend_schema(responses={200: dict})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "success": True,
            "message": "Commerce Backend API is running",
            "data": {
                "auth": {
                    "staff_login": "/api/auth/login/",
                    "staff_refresh": "/api/auth/refresh/",
                    "customer_login": "/api/customer/auth/login/",
                    "customer_register": "/api/customer/auth/register/",
                },
                "docs": {
                    "swagger": "/api/docs/",
                    "schema": "/api/schema/",
                },
                "modules": {
                    "orders": "/api/orders/",
                    "customer_orders": "/api/customer/orders/",
                    "users": "/api/users/",
                    "roles": "/api/roles/",
                    "permissions": "/api/permissions/",
                    "stores": "/api/stores/",
                    "catalog": "/api/products/",
                    "inventory": "/api/inventory/",
                    "coupons": "/api/coupons/",
                },
            },
        }
    )


# ------------------ HEALTH CHECK (PUBLIC) ------------------
@extend_schema(responses={200: dict, 503: dict})
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    Confirms the app responds and the DB answers a trivial query.
    """
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except DatabaseError as exc:
        logger.warning("health_check.db_down", extra={"error": str(exc)})
        return Response({"status": "degraded", "db": "down"}, status=503)

    return Response({"status": "ok", "db": "ok"})


# ------------------ ADMIN PATH ------------------
ADMIN_PATH = getattr(settings, "ADMIN_PATH", "admin/")
if not ADMIN_PATH.endswith("/"):
    ADMIN_PATH = f"{ADMIN_PATH}/"


# ------------------ API ROUTES (ALL UNDER /api/) ------------------
api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    # OpenAPI / Swagger
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # Back-office
    path("", include("users.urls")),
    path("", include("store.urls")),
    path("", include("catalog.urls")),
    path("", include("coupons.urls")),
    path("orders/", include("orders.urls.admin")),
    # Storefront
    path("customer/", include("customers.urls")),
    path("customer/orders/", include("orders.urls.customer")),
]

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
