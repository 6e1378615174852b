# customers/admin.py

from django.contrib import admin

from customers.models import Address, Customer


class AddressInline(admin.TabularInline):
    model = Address
    extra = 0


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "name", "provider_type", "email_verified", "is_active", "created_at")
    list_filter = ("provider_type", "email_verified", "is_active")
    search_fields = ("email", "name", "phone")
    exclude = ("password",)
    inlines = [AddressInline]
