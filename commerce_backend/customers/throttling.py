# customers/throttling.py

"""
Throttles for customer-authenticated routes.

Customer and staff ids come from different tables and overlap, so the
cache key carries a "customer-" prefix instead of the bare pk.
"""

from rest_framework.throttling import AnonRateThrottle, ScopedRateThrottle, UserRateThrottle


def customer_ident(throttle, request) -> str:
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return f"customer-{user.pk}"
    return throttle.get_ident(request)


class CustomerRateThrottle(UserRateThrottle):
    def get_cache_key(self, request, view):
        return self.cache_format % {"scope": self.scope, "ident": customer_ident(self, request)}


class CustomerScopedRateThrottle(ScopedRateThrottle):
    def get_cache_key(self, request, view):
        return self.cache_format % {"scope": self.scope, "ident": customer_ident(self, request)}


CUSTOMER_THROTTLES = [AnonRateThrottle, CustomerRateThrottle]
