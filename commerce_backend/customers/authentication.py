# customers/authentication.py

"""
CUSTOMER JWT AUTHENTICATION

- Accepts tokens carrying the `customer_id` claim (issued by customers.tokens).
- Staff tokens (user_id only) are rejected here with 401.
- Inactive or soft-deleted customers are rejected.
"""

from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken

from customers.models import Customer

CUSTOMER_ID_CLAIM = "customer_id"


class CustomerJWTAuthentication(JWTAuthentication):
    def get_user(self, validated_token):
        customer_id = validated_token.get(CUSTOMER_ID_CLAIM)
        if customer_id is None:
            raise InvalidToken("Token contained no recognizable customer identification")

        customer = Customer.objects.filter(pk=customer_id, deleted_at__isnull=True).first()
        if customer is None:
            raise AuthenticationFailed("Customer not found", code="customer_not_found")
        if not customer.is_active:
            raise AuthenticationFailed("Customer is inactive", code="customer_inactive")

        return customer
