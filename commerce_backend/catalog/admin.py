# catalog/admin.py

from django.contrib import admin

from catalog.models import (
    Attribute,
    AttributeValue,
    Brand,
    Category,
    Product,
    ProductVariant,
    StockMovement,
    StoreVariantStock,
    Tag,
)


@admin.register(Brand, Tag, Attribute)
class NamedResourceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "deleted_at")
    search_fields = ("name",)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "slug", "parent", "deleted_at")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(AttributeValue)
class AttributeValueAdmin(admin.ModelAdmin):
    list_display = ("id", "attribute", "value", "position", "deleted_at")
    list_filter = ("attribute",)


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    fields = ("name", "sku", "price", "sale_price", "deleted_at")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price", "product_type", "brand", "category", "deleted_at")
    list_filter = ("product_type", "brand", "category")
    search_fields = ("name",)
    inlines = [ProductVariantInline]


@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = ("id", "product", "name", "sku", "price", "deleted_at")
    search_fields = ("name", "sku")


@admin.register(StoreVariantStock)
class StoreVariantStockAdmin(admin.ModelAdmin):
    list_display = ("id", "store", "variant", "quantity", "stock_status", "updated_at")
    list_filter = ("store", "stock_status")


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = ("id", "created_at", "store", "variant", "operation", "quantity", "previous_quantity", "new_quantity", "order")
    list_filter = ("operation", "store")
    readonly_fields = [f.name for f in StockMovement._meta.fields]
