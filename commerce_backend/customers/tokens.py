# customers/tokens.py

"""
Customer token issuing. Tokens carry only `customer_id`, never `user_id`,
so staff authentication cannot resolve them.
"""

from __future__ import annotations

from rest_framework_simplejwt.tokens import AccessToken, RefreshToken

from customers.authentication import CUSTOMER_ID_CLAIM


def issue_access_token(customer) -> str:
    token = AccessToken()
    token[CUSTOMER_ID_CLAIM] = customer.pk
    return str(token)


def issue_token_pair(customer) -> tuple[str, str]:
    refresh = RefreshToken()
    refresh[CUSTOMER_ID_CLAIM] = customer.pk
    return str(refresh.access_token), str(refresh)
