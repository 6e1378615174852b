# common/cookies.py

"""
Refresh-token cookie helpers (staff and customer use different names).

Cookies are HTTP-only, SameSite=Strict, Secure outside DEBUG, scoped to /api/.
"""

from __future__ import annotations

from django.conf import settings

COOKIE_PATH = "/api/"


def set_refresh_cookie(response, name: str, token: str) -> None:
    response.set_cookie(
        name,
        token,
        max_age=settings.REFRESH_COOKIE_MAX_AGE,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="Strict",
        path=COOKIE_PATH,
    )


def clear_refresh_cookie(response, name: str) -> None:
    response.delete_cookie(name, path=COOKIE_PATH, samesite="Strict")
