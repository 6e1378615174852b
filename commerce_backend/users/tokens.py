# users/tokens.py

"""
Staff token issuing.

Claims:
- user_id (simplejwt USER_ID_CLAIM)
- role_id (current role at issue time; authorization still reads the DB)
"""

from __future__ import annotations

from rest_framework_simplejwt.tokens import AccessToken, RefreshToken


def issue_access_token(user) -> str:
    token = AccessToken.for_user(user)
    token["role_id"] = user.role_id
    return str(token)


def issue_token_pair(user) -> tuple[str, str]:
    refresh = RefreshToken.for_user(user)
    refresh["role_id"] = user.role_id
    return str(refresh.access_token), str(refresh)
