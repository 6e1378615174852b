# users/views/rbac.py

"""
ROLE & PERMISSION MANAGEMENT

Roles (resource "roles"):
- CRUD through the factory
- POST /api/roles/<id>/permissions/   sync the role's grant set -> {added, removed} (roles:edit)

Permissions (resource "permissions"):
- GET  /api/permissions/
- POST /api/permissions/                              409 on duplicate (resource, action)
- PATCH /api/permissions/role-permissions/<id>/       repoint one grant (permissions:edit)
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from common.crud import crud_viewset
from common.identifiers import parse_id
from common.responses import success_response
from permissions.drf import RequiresPermission, ResourcePermission
from permissions.resolver import ACTION_EDIT
from users.models import Permission
from users.serializers.rbac import (
    PermissionCreateSerializer,
    PermissionSerializer,
    RolePermissionSerializer,
    RolePermissionSyncSerializer,
    RolePermissionUpdateSerializer,
    RoleSerializer,
    RoleUpdateSerializer,
    RoleWriteSerializer,
)
from users.services.rbac_service import (
    create_permission,
    repoint_role_permission,
    role_service,
    sync_role_permissions,
)


class RoleViewSet(
    crud_viewset(
        service=role_service,
        create_serializer=RoleWriteSerializer,
        update_serializer=RoleUpdateSerializer,
        output_serializer=RoleSerializer,
        resource="roles",
        resource_name="role",
    )
):
    @extend_schema(request=RolePermissionSyncSerializer, responses={200: dict})
    @action(
        detail=True,
        methods=["post"],
        url_path="permissions",
        permission_classes=[IsAuthenticated, RequiresPermission("roles", ACTION_EDIT)],
    )
    def sync_permissions(self, request, pk=None):
        role_id = parse_id(pk)

        # accept either {"permissions": [...]} or a bare list
        payload = request.data
        if isinstance(payload, list):
            payload = {"permissions": payload}

        serializer = RolePermissionSyncSerializer(data=payload)
        serializer.is_valid(raise_exception=True)

        result = sync_role_permissions(
            role_id=role_id,
            desired=serializer.validated_data["permissions"],
        )
        return success_response(result, message="Role permissions updated")


class PermissionViewSet(viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated, ResourcePermission]
    permission_resource = "permissions"
    serializer_class = PermissionSerializer
    queryset = Permission.objects.all()

    def list(self, request):
        qs = Permission.objects.all().order_by("resource", "action")
        return success_response(PermissionSerializer(qs, many=True).data)

    @extend_schema(request=PermissionCreateSerializer, responses={201: PermissionSerializer})
    def create(self, request):
        serializer = PermissionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        permission = create_permission(**serializer.validated_data)
        return success_response(
            PermissionSerializer(permission).data,
            message="Created permission",
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=RolePermissionUpdateSerializer, responses={200: RolePermissionSerializer})
    @action(
        detail=False,
        methods=["patch"],
        url_path=r"role-permissions/(?P<role_permission_id>[^/.]+)",
        permission_classes=[IsAuthenticated, RequiresPermission("permissions", ACTION_EDIT)],
    )
    def update_role_permission(self, request, role_permission_id=None):
        grant_id = parse_id(role_permission_id, "role_permission_id")

        serializer = RolePermissionUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        grant = repoint_role_permission(role_permission_id=grant_id, **serializer.validated_data)
        return success_response(
            RolePermissionSerializer(grant).data,
            message="Role permission updated",
        )
