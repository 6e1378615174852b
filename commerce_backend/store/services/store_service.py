# store/services/store_service.py

"""
Store data access: CRUD with staff / order counts on every read.
"""

from django.db.models import Count, Q

from common.crud import ModelService
from store.models import Store


class StoreService(ModelService):
    def __init__(self):
        super().__init__(Store, ordering=("name", "id"))

    def base_queryset(self):
        return super().base_queryset().annotate(
            staff_count=Count("staff", filter=Q(staff__deleted_at__isnull=True), distinct=True),
            order_count=Count("orders", filter=Q(orders__deleted_at__isnull=True), distinct=True),
        )

    def create(self, data: dict):
        return self.get_by_id(super().create(data).pk)

    def update(self, pk: int, data: dict):
        super().update(pk, data)
        return self.get_by_id(pk)

    def public(self):
        return self.list().filter(is_active=True)


store_service = StoreService()
