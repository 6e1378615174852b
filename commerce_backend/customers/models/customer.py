# customers/models/customer.py

"""
STOREFRONT CUSTOMER

Separate identity from staff User:
- email/password accounts (password hashed with Django hashers)
- OAuth accounts (google/facebook) identified by (provider_type, provider_id);
  password is NULL for OAuth-only accounts

Customers are placed on request.user by CustomerJWTAuthentication, so the
model exposes the is_authenticated / is_anonymous flags DRF reads.
"""

from django.contrib.auth.hashers import check_password, make_password
from django.db import models
from django.db.models import Q


class Customer(models.Model):
    PROVIDER_EMAIL = "email"
    PROVIDER_GOOGLE = "google"
    PROVIDER_FACEBOOK = "facebook"

    PROVIDER_CHOICES = [
        (PROVIDER_EMAIL, "Email"),
        (PROVIDER_GOOGLE, "Google"),
        (PROVIDER_FACEBOOK, "Facebook"),
    ]

    email = models.EmailField(unique=True, null=True, blank=True)
    name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=32, blank=True)

    password = models.CharField(max_length=128, null=True, blank=True)

    provider_type = models.CharField(
        max_length=20,
        choices=PROVIDER_CHOICES,
        default=PROVIDER_EMAIL,
        db_index=True,
    )
    provider_id = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    email_verified = models.BooleanField(default=False)
    avatar_url = models.URLField(max_length=500, blank=True)

    is_active = models.BooleanField(default=True)
    last_login = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["provider_type", "provider_id"],
                condition=Q(provider_id__isnull=False),
                name="uniq_customer_provider_identity",
            ),
        ]

    # ---------------- auth flags (read by DRF) ----------------
    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    # ---------------- password ----------------
    def set_password(self, raw_password: str) -> None:
        self.password = make_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        if not self.password:
            return False
        return check_password(raw_password, self.password)

    @property
    def has_password(self) -> bool:
        return bool(self.password)

    def __str__(self):
        return self.email or f"customer #{self.pk}"
