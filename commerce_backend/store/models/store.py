# store/models/store.py

from django.db import models
from django.db.models import Q


class Store(models.Model):
    """
    A branch that staff belong to and that orders / stock rows point at.

    `code` is free to leave empty; when filled in it is unique among stores.
    """

    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50, null=True, blank=True, db_index=True)
    location = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["code"],
                condition=Q(code__isnull=False) & ~Q(code=""),
                name="uniq_store_code_when_present",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})" if self.code else self.name
