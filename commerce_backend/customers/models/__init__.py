# customers/models/__init__.py

from .address import Address
from .customer import Customer

__all__ = ["Customer", "Address"]
