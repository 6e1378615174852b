# catalog/services/inventory.py

"""
INVENTORY SERVICE

adjust_stock() is the only writer of StoreVariantStock.quantity:
- increment / decrement / set on the (store, variant) row, created at 0 if missing
- decrement below zero is refused (nothing written)
- every change appends a StockMovement with previous/new quantity

Callers: staff adjustments (inventory API), order stock reservation and
restoration (orders.services.order_service).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction

from catalog.models import StockMovement, StoreVariantStock
from common.exceptions import BadRequestError, ConflictError

logger = logging.getLogger("inventory")


class InsufficientStockError(ConflictError):
    code = "insufficient_stock"
    default_message = "Insufficient stock."


class InvalidStockOperationError(BadRequestError):
    code = "invalid_stock_operation"


@dataclass(frozen=True)
class StockChange:
    stock: StoreVariantStock
    movement: StockMovement


def _next_quantity(operation: str, previous: int, quantity: int) -> int:
    if operation == StockMovement.OP_INCREMENT:
        return previous + quantity
    if operation == StockMovement.OP_DECREMENT:
        return previous - quantity
    if operation == StockMovement.OP_SET:
        return quantity
    raise InvalidStockOperationError(f"Unknown stock operation: {operation}")


@transaction.atomic
def adjust_stock(
    *,
    store_id: int,
    variant_id: int,
    operation: str,
    quantity: int,
    reason: str = "",
    notes: str = "",
    user=None,
    customer=None,
    order=None,
) -> StockChange:
    if quantity < 0:
        raise InvalidStockOperationError("Quantity must be zero or greater")

    stock, _ = StoreVariantStock.objects.select_for_update().get_or_create(
        store_id=store_id,
        variant_id=variant_id,
        defaults={"quantity": 0},
    )

    previous = stock.quantity
    new_quantity = _next_quantity(operation, previous, quantity)

    if new_quantity < 0:
        raise InsufficientStockError(
            f"Cannot decrement stock below 0. Current: {previous}, Decrement: {quantity}",
            details={
                "store_id": store_id,
                "variant_id": variant_id,
                "available": previous,
                "requested": quantity,
            },
        )

    stock.quantity = new_quantity
    stock.stock_status = StoreVariantStock.status_for(new_quantity)
    stock.save(update_fields=["quantity", "stock_status", "updated_at"])

    movement = StockMovement.objects.create(
        variant_id=variant_id,
        store_id=store_id,
        user=user,
        customer=customer,
        order=order,
        operation=operation,
        quantity=quantity,
        previous_quantity=previous,
        new_quantity=new_quantity,
        reason=reason or "",
        notes=notes or "",
    )

    logger.info(
        "inventory.adjusted",
        extra={
            "store_id": store_id,
            "variant_id": variant_id,
            "operation": operation,
            "quantity": quantity,
            "previous": previous,
            "new": new_quantity,
            "order_id": getattr(order, "id", None),
        },
    )
    return StockChange(stock=stock, movement=movement)


def list_stock():
    return StoreVariantStock.objects.select_related("store", "variant").order_by("store_id", "variant_id")


def list_movements():
    return StockMovement.objects.select_related("store", "variant", "user")
