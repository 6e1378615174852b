# customers/services/customer_service.py

"""
CUSTOMER ACCOUNT SERVICE

- register: email + strong password; 409 when the email is taken
- login: 401 on bad credentials; OAuth-only accounts are told to use their provider
- oauth_login: find by provider identity, else link by email, else create
- customer_from_refresh: resolve a refresh token back to an active customer
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone
from rest_framework import status
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from common.exceptions import ConflictError, DomainError
from customers.authentication import CUSTOMER_ID_CLAIM
from customers.models import Customer

logger = logging.getLogger("api")


# ============================================================
# DOMAIN ERRORS
# ============================================================


class CustomerAuthError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class OAuthAccountError(CustomerAuthError):
    code = "oauth_account"


class EmailTakenError(ConflictError):
    code = "duplicate_entry"
    default_message = "Email already registered"


class ProviderIdentityConflictError(ConflictError):
    code = "provider_conflict"
    default_message = "Email is linked to another sign-in provider"


# ============================================================
# QUERIES
# ============================================================


def _active():
    return Customer.objects.filter(deleted_at__isnull=True)


def find_by_email(email: str) -> Customer | None:
    return _active().filter(email__iexact=email.strip()).first()


# ============================================================
# COMMANDS
# ============================================================


@transaction.atomic
def register(*, email: str, password: str, name: str, phone: str = "") -> Customer:
    if Customer.objects.filter(email__iexact=email.strip()).exists():
        raise EmailTakenError()

    customer = Customer(
        email=email.strip().lower(),
        name=name.strip(),
        phone=(phone or "").strip(),
        provider_type=Customer.PROVIDER_EMAIL,
        email_verified=False,
    )
    customer.set_password(password)
    customer.save()

    logger.info("customer.registered", extra={"customer_id": customer.id})
    return customer


def login(*, email: str, password: str) -> Customer:
    customer = find_by_email(email)
    if customer is None or not customer.is_active:
        raise CustomerAuthError()

    if not customer.has_password:
        raise OAuthAccountError(
            f"This account uses {customer.provider_type} login. "
            "Please use the appropriate login method."
        )

    if not customer.check_password(password):
        raise CustomerAuthError()

    customer.last_login = timezone.now()
    customer.save(update_fields=["last_login"])
    return customer


@transaction.atomic
def oauth_login(
    *,
    provider_type: str,
    provider_id: str,
    email: str,
    name: str,
    avatar_url: str = "",
) -> Customer:
    # 1) known provider identity
    customer = _active().filter(provider_type=provider_type, provider_id=provider_id).first()

    # 2) existing email account -> link it, unless another identity owns it
    if customer is None:
        customer = find_by_email(email)
        if customer is not None and customer.provider_id:
            logger.warning(
                "customer.oauth_identity_conflict",
                extra={"customer_id": customer.id, "provider_type": provider_type},
            )
            raise ProviderIdentityConflictError()
        if customer is not None:
            customer.provider_type = provider_type
            customer.provider_id = provider_id
            customer.email_verified = True
            customer.avatar_url = avatar_url or customer.avatar_url
            customer.save(
                update_fields=["provider_type", "provider_id", "email_verified", "avatar_url", "updated_at"]
            )
            logger.info("customer.oauth_linked", extra={"customer_id": customer.id})

    # 3) new account
    if customer is None:
        customer = Customer.objects.create(
            email=email.strip().lower(),
            name=name.strip(),
            provider_type=provider_type,
            provider_id=provider_id,
            email_verified=True,
            avatar_url=avatar_url or "",
        )
        logger.info("customer.oauth_registered", extra={"customer_id": customer.id})

    if not customer.is_active:
        raise CustomerAuthError("Customer is inactive")

    customer.last_login = timezone.now()
    customer.save(update_fields=["last_login"])
    return customer


def customer_from_refresh(raw_token: str) -> Customer:
    try:
        refresh = RefreshToken(raw_token)
    except TokenError as exc:
        raise CustomerAuthError("Refresh token is invalid or expired.") from exc

    customer_id = refresh.get(CUSTOMER_ID_CLAIM)
    customer = _active().filter(pk=customer_id, is_active=True).first() if customer_id else None
    if customer is None:
        raise CustomerAuthError("Customer not found")
    return customer
