# catalog/views/__init__.py

"""
Catalog views package exports (router imports).
"""

from .inventory import InventoryViewSet
from .resources import (
    AttributeValueViewSet,
    AttributeViewSet,
    BrandViewSet,
    CategoryViewSet,
    ProductVariantViewSet,
    ProductViewSet,
    TagViewSet,
)

__all__ = [
    "BrandViewSet",
    "CategoryViewSet",
    "TagViewSet",
    "AttributeViewSet",
    "AttributeValueViewSet",
    "ProductViewSet",
    "ProductVariantViewSet",
    "InventoryViewSet",
]
