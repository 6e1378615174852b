# common/crud.py

"""
GENERIC CRUD RESOURCE CONTROLLER

Purpose:
- ModelService: list / get_by_id / create / update / delete over one model,
  aware of the `deleted_at` soft-delete marker when the model has one.
- crud_viewset(): builds a DRF ViewSet from a service, a (create, update)
  serializer pair, an output serializer and a resource name.

Contract of the generated viewset:
- list      -> non-deleted records only
- retrieve  -> positive-integer id, 404 when absent or soft-deleted
- create    -> body validated before any write
- update    -> body validated together with the URL id (PUT and PATCH are partial)
- destroy   -> record must exist and not be deleted; response confirms the id
- Every action is gated by ResourcePermission on `resource`
  (view/create/edit/delete).
"""

from __future__ import annotations

import logging

from django.core.exceptions import FieldDoesNotExist
from django.db import models, transaction
from django.utils import timezone
from rest_framework import serializers, status, viewsets
from rest_framework.permissions import IsAuthenticated

from common.exceptions import BadRequestError, NotFoundError
from common.identifiers import parse_id
from common.responses import success_response
from permissions.drf import ResourcePermission

logger = logging.getLogger("api")


class CrudNotFoundError(NotFoundError):
    pass


class IdMismatchError(BadRequestError):
    code = "id_mismatch"


# ============================================================
# SERVICE
# ============================================================


class ModelService:
    """
    Default data-access service for a single model.

    Subclasses override create/update when a resource needs extra rules
    (password hashing, derived fields...).
    """

    def __init__(
        self,
        model: type[models.Model],
        *,
        select_related: tuple[str, ...] = (),
        prefetch_related: tuple[str, ...] = (),
        ordering: tuple[str, ...] = ("id",),
    ):
        self.model = model
        self.select_related = select_related
        self.prefetch_related = prefetch_related
        self.ordering = ordering

    @property
    def label(self) -> str:
        return str(self.model._meta.verbose_name).title()

    @property
    def soft_delete(self) -> bool:
        try:
            self.model._meta.get_field("deleted_at")
        except FieldDoesNotExist:
            return False
        return True

    def base_queryset(self):
        qs = self.model.objects.all()
        if self.soft_delete:
            qs = qs.filter(deleted_at__isnull=True)
        if self.select_related:
            qs = qs.select_related(*self.select_related)
        if self.prefetch_related:
            qs = qs.prefetch_related(*self.prefetch_related)
        return qs.order_by(*self.ordering)

    def list(self):
        return self.base_queryset()

    def get_by_id(self, pk: int):
        obj = self.base_queryset().filter(pk=pk).first()
        if obj is None:
            raise CrudNotFoundError(f"{self.label} with ID {pk} not found")
        return obj

    def _split_relations(self, data: dict) -> tuple[dict, dict]:
        m2m_names = {field.name for field in self.model._meta.many_to_many}
        fields = {k: v for k, v in data.items() if k not in m2m_names}
        relations = {k: v for k, v in data.items() if k in m2m_names}
        return fields, relations

    @transaction.atomic
    def create(self, data: dict):
        fields, relations = self._split_relations(data)
        obj = self.model.objects.create(**fields)
        for name, values in relations.items():
            getattr(obj, name).set(values)
        return obj

    @transaction.atomic
    def update(self, pk: int, data: dict):
        obj = self.get_by_id(pk)
        fields, relations = self._split_relations(data)
        for name, value in fields.items():
            setattr(obj, name, value)
        obj.save()
        for name, values in relations.items():
            getattr(obj, name).set(values)
        return obj

    @transaction.atomic
    def delete(self, pk: int) -> int:
        obj = self.get_by_id(pk)
        if self.soft_delete:
            obj.deleted_at = timezone.now()
            obj.save(update_fields=["deleted_at"])
        else:
            obj.delete()
        return pk


# ============================================================
# VIEWSET FACTORY
# ============================================================


def crud_viewset(
    *,
    service: ModelService,
    create_serializer,
    update_serializer,
    output_serializer,
    resource: str,
    resource_name: str | None = None,
):
    """
    Build a ViewSet class for `resource` (plural name, e.g. "brands").

    `resource_name` is the singular used in messages ("brand").
    """
    singular = resource_name or service.label.lower()

    class CrudViewSet(viewsets.GenericViewSet):
        permission_classes = [IsAuthenticated, ResourcePermission]
        permission_resource = resource
        serializer_class = output_serializer
        lookup_value_regex = r"[^/]+"
        crud_service = service

        def get_queryset(self):
            return self.crud_service.list()

        def get_serializer_class(self):
            if self.action == "create":
                return create_serializer
            if self.action in ("update", "partial_update"):
                return update_serializer
            return output_serializer

        def list(self, request):
            items = self.crud_service.list()
            return success_response(output_serializer(items, many=True).data)

        def retrieve(self, request, pk=None):
            obj = self.crud_service.get_by_id(parse_id(pk))
            return success_response(output_serializer(obj).data)

        def create(self, request):
            serializer = create_serializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            obj = self.crud_service.create(dict(serializer.validated_data))
            logger.info(
                "crud.created",
                extra={"resource": resource, "id": obj.pk, "user_id": request.user.pk},
            )
            return success_response(
                output_serializer(obj).data,
                message=f"Created {singular}",
                status=status.HTTP_201_CREATED,
            )

        def update(self, request, pk=None):
            record_id = parse_id(pk)

            payload = dict(request.data.items()) if hasattr(request.data, "items") else {}
            body_id = payload.get("id")
            if body_id not in (None, "") and str(body_id) != str(record_id):
                raise IdMismatchError(
                    "Body id does not match the id in the URL",
                    details={"parameter": "id"},
                )
            payload["id"] = record_id

            instance = self.crud_service.get_by_id(record_id)
            serializer = update_serializer(instance, data=payload, partial=True)
            serializer.is_valid(raise_exception=True)

            data = dict(serializer.validated_data)
            data.pop("id", None)

            obj = self.crud_service.update(record_id, data)
            return success_response(
                output_serializer(obj).data,
                message=f"Updated {singular}",
            )

        def partial_update(self, request, pk=None):
            return self.update(request, pk=pk)

        def destroy(self, request, pk=None):
            record_id = parse_id(pk)
            self.crud_service.delete(record_id)
            logger.info(
                "crud.deleted",
                extra={"resource": resource, "id": record_id, "user_id": request.user.pk},
            )
            return success_response(
                {"id": record_id},
                message=f"Deleted {singular} with ID {record_id}",
            )

    CrudViewSet.__name__ = f"{service.model.__name__}ViewSet"
    CrudViewSet.__qualname__ = CrudViewSet.__name__
    return CrudViewSet


def update_serializer_for(write_serializer):
    """
    Derive the update serializer from a ModelSerializer used for create:
    same fields plus a required positive `id`.
    """
    meta = type(
        "Meta",
        (write_serializer.Meta,),
        {"fields": ["id", *write_serializer.Meta.fields]},
    )
    name = write_serializer.__name__.replace("Write", "Update")
    return type(
        name,
        (write_serializer,),
        {"id": serializers.IntegerField(min_value=1), "Meta": meta},
    )
