# orders/admin.py

from django.contrib import admin

from orders.models import Order, OrderItem, OrderReturn, OrderReturnItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    raw_id_fields = ("variant",)
    readonly_fields = ("variant", "quantity", "price")
    can_delete = False


class OrderReturnItemInline(admin.TabularInline):
    model = OrderReturnItem
    extra = 0
    readonly_fields = ("order_item", "quantity", "reason")
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_number",
        "customer",
        "status",
        "payment_method",
        "paid",
        "total_amount",
        "store",
        "placed_at",
        "deleted_at",
    )
    list_filter = ("status", "payment_method", "paid", "shipping_method")
    search_fields = ("order_number", "customer__name", "customer__email")
    raw_id_fields = ("customer", "address", "store")
    readonly_fields = ("order_number", "placed_at", "updated_at")
    inlines = [OrderItemInline]


@admin.register(OrderReturn)
class OrderReturnAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "customer", "requested_at")
    raw_id_fields = ("order", "customer")
    inlines = [OrderReturnItemInline]
