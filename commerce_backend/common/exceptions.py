# common/exceptions.py

"""
CENTRAL ERROR TRANSLATION

Purpose:
- Base class for domain errors raised by service modules.
- Single DRF EXCEPTION_HANDLER that turns every failure into the
  uniform error envelope (see common.responses.error_response).

Mapping:
- DomainError subclasses            -> their own status_code / code
- DRF ValidationError               -> 400 validation_error (flattened field list)
- Django ValidationError            -> 400 validation_error
- ProtectedError / RestrictedError  -> 400 foreign_key_violation
- IntegrityError (unique)           -> 409 duplicate_entry
- IntegrityError (foreign key)      -> 400 foreign_key_violation
- Http404 / ObjectDoesNotExist      -> 404 not_found
- other APIException                -> its status, its detail code
- anything else                     -> 500 server_error (logged)
"""

from __future__ import annotations

import logging
from typing import Any

from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.db.models import ProtectedError, RestrictedError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.exceptions import ErrorDetail
from rest_framework.fields import get_error_detail
from rest_framework.views import exception_handler as drf_exception_handler

from common.responses import error_response

logger = logging.getLogger("api")


# ============================================================
# DOMAIN ERRORS
# ============================================================


class DomainError(Exception):
    """
    Base for errors raised by service modules.

    Subclasses set status_code and code; the handler below renders them.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    code = "bad_request"
    default_message = "Request could not be processed."

    def __init__(self, message: str | None = None, *, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Resource not found."


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "Request conflicts with the current state."


class AccessDeniedError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "access_denied"
    default_message = "Access denied."


class NotAuthenticatedError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "not_authenticated"
    default_message = "Authentication credentials were not provided."


class InvalidParameterError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_parameter"
    default_message = "Invalid parameter."


class BadRequestError(DomainError):
    code = "bad_request"


# ============================================================
# HELPERS
# ============================================================


def flatten_validation_errors(detail: Any, prefix: str = "") -> list[dict]:
    """
    Turn DRF's nested error structure into [{"field": ..., "message": ...}].

    Nested paths are dotted: items.0.quantity
    """
    if isinstance(detail, dict):
        flat: list[dict] = []
        for key, value in detail.items():
            field = f"{prefix}.{key}" if prefix else str(key)
            flat.extend(flatten_validation_errors(value, field))
        return flat

    if isinstance(detail, (list, tuple)):
        if all(not isinstance(value, (dict, list, tuple)) for value in detail):
            return [
                {"field": prefix or "non_field_errors", "message": str(value)}
                for value in detail
            ]
        flat = []
        for index, value in enumerate(detail):
            field = f"{prefix}.{index}" if prefix else str(index)
            flat.extend(flatten_validation_errors(value, field))
        return flat

    return [{"field": prefix or "non_field_errors", "message": str(detail)}]


def _api_message(exc: exceptions.APIException) -> str:
    detail = exc.detail
    if isinstance(detail, dict) and detail.get("detail"):
        return str(detail["detail"])
    if isinstance(detail, list) and detail:
        return str(detail[0])
    return str(detail)


def _api_code(exc: exceptions.APIException) -> str:
    detail = exc.detail
    if isinstance(detail, ErrorDetail) and detail.code:
        return str(detail.code)
    return str(exc.default_code)


def _integrity_response(exc: IntegrityError):
    text = str(exc).lower()

    if "unique" in text or "duplicate" in text:
        return error_response(
            "A record with the same unique value already exists.",
            code="duplicate_entry",
            status=status.HTTP_409_CONFLICT,
        )

    if "foreign key" in text:
        return error_response(
            "Referenced record does not exist.",
            code="foreign_key_violation",
            status=status.HTTP_400_BAD_REQUEST,
        )

    return None


# ============================================================
# HANDLER
# ============================================================


def api_exception_handler(exc: Exception, context: dict):
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    # --------------------------------------------------
    # 1. DOMAIN ERRORS
    # --------------------------------------------------
    if isinstance(exc, DomainError):
        return error_response(
            exc.message,
            code=exc.code,
            status=exc.status_code,
            details=exc.details,
        )

    # --------------------------------------------------
    # 2. DJANGO -> DRF NORMALISATION
    # --------------------------------------------------
    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(detail=get_error_detail(exc))

    if isinstance(exc, ObjectDoesNotExist):
        exc = Http404(str(exc))

    # --------------------------------------------------
    # 3. DATABASE CONSTRAINTS
    # --------------------------------------------------
    if isinstance(exc, (ProtectedError, RestrictedError)):
        return error_response(
            "Record is still referenced by other records.",
            code="foreign_key_violation",
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, IntegrityError):
        response = _integrity_response(exc)
        if response is not None:
            logger.info(
                "api.integrity_error",
                extra={"view": view_name, "error": str(exc)},
            )
            return response

    # --------------------------------------------------
    # 4. DRF EXCEPTIONS
    # --------------------------------------------------
    response = drf_exception_handler(exc, context)

    if response is None:
        logger.error(
            "api.unhandled_error",
            exc_info=exc,
            extra={"view": view_name},
        )
        return error_response(
            "An unexpected error occurred.",
            code="server_error",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        envelope = error_response(
            "Validation failed.",
            code="validation_error",
            status=response.status_code,
            details=flatten_validation_errors(exc.detail),
        )
    else:
        if isinstance(exc, Http404):
            message, code = "Resource not found.", "not_found"
        else:
            message, code = _api_message(exc), _api_code(exc)
        envelope = error_response(message, code=code, status=response.status_code)

    for header in ("WWW-Authenticate", "Retry-After"):
        if header in response:
            envelope[header] = response[header]

    return envelope
