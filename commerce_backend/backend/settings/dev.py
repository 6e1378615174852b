# backend/settings/dev.py
"""
LOCAL DEVELOPMENT SETTINGS

Two local frontends talk to this API: the storefront and the back-office.
Both origins are allowed with credentials so the refresh cookies travel.
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "testserver"])

LOCAL_FRONTENDS = env.list(
    "LOCAL_FRONTENDS",
    default=["http://localhost:3000", "http://localhost:5173"],
)

CORS_ALLOWED_ORIGINS = LOCAL_FRONTENDS
CSRF_TRUSTED_ORIGINS = LOCAL_FRONTENDS
CORS_ALLOW_CREDENTIALS = True

# order lifecycle events are the ones worth watching locally
LOGGING["loggers"]["orders"]["level"] = env("ORDERS_LOG_LEVEL", default="DEBUG")
