# users/authentication.py

"""
STAFF JWT AUTHENTICATION

- Accepts tokens carrying the `user_id` claim (issued by users.tokens).
- Customer tokens (customer_id only) are rejected here with 401.
- Soft-deleted or inactive staff are rejected even with a valid token.
"""

from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed


class StaffJWTAuthentication(JWTAuthentication):
    def get_user(self, validated_token):
        user = super().get_user(validated_token)

        if user.deleted_at is not None:
            raise AuthenticationFailed("User not found", code="user_not_found")

        return user
