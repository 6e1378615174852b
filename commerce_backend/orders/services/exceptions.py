# orders/services/exceptions.py

"""
ORDER DOMAIN ERRORS

Raised by the order services and rendered by
common.exceptions.api_exception_handler (status_code / code below).
"""

from rest_framework import status

from catalog.services.inventory import InsufficientStockError
from common.exceptions import DomainError


class OrderError(DomainError):
    pass


class OrderNotFoundError(OrderError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Order not found"


class OrderAccessDenied(OrderError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "access_denied"
    default_message = "Access denied"


class InvalidOrderTransitionError(OrderError):
    status_code = status.HTTP_409_CONFLICT
    code = "invalid_transition"


class OrderNotCancellableError(OrderError):
    status_code = status.HTTP_409_CONFLICT
    code = "not_cancellable"


class OrderNotReturnableError(OrderError):
    status_code = status.HTTP_409_CONFLICT
    code = "not_returnable"


class InvalidReturnRequestError(OrderError):
    code = "invalid_return_request"


class TotalMismatchError(OrderError):
    code = "total_mismatch"
    default_message = "Total amount must match the sum of item prices"


class OrderReferenceError(OrderError):
    code = "invalid_reference"


class OrderDeletionError(OrderError):
    status_code = status.HTTP_409_CONFLICT
    code = "not_deletable"
    default_message = "Only cancelled orders can be deleted"


__all__ = [
    "OrderError",
    "OrderNotFoundError",
    "OrderAccessDenied",
    "InvalidOrderTransitionError",
    "OrderNotCancellableError",
    "OrderNotReturnableError",
    "InvalidReturnRequestError",
    "TotalMismatchError",
    "OrderReferenceError",
    "OrderDeletionError",
    "InsufficientStockError",
]
