# orders/models/__init__.py

"""
ORDER MODELS PACKAGE EXPORTS

- order: Order, OrderItem
- returns: OrderReturn, OrderReturnItem
"""

from .order import Order, OrderItem
from .returns import OrderReturn, OrderReturnItem

__all__ = [
    "Order",
    "OrderItem",
    "OrderReturn",
    "OrderReturnItem",
]
