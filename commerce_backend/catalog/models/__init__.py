# catalog/models/__init__.py

"""
CATALOG MODELS PACKAGE EXPORTS

- taxonomy: Brand, Category, Tag, Attribute, AttributeValue
- product: Product, ProductVariant
- inventory: StoreVariantStock, StockMovement
"""

from .inventory import StockMovement, StoreVariantStock
from .product import Product, ProductVariant
from .taxonomy import Attribute, AttributeValue, Brand, Category, Tag

__all__ = [
    "Brand",
    "Category",
    "Tag",
    "Attribute",
    "AttributeValue",
    "Product",
    "ProductVariant",
    "StoreVariantStock",
    "StockMovement",
]
