# orders/views/__init__.py

from .admin import OrderAdminViewSet
from .customer import CustomerOrderViewSet

__all__ = ["OrderAdminViewSet", "CustomerOrderViewSet"]
