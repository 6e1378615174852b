# store/admin.py

from django.contrib import admin

from store.models import Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "code", "location", "is_active", "deleted_at")
    list_filter = ("is_active",)
    search_fields = ("name", "code", "location")
