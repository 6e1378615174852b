from .addresses import AddressDetailView, AddressListView
from .auth import (
    CustomerLoginView,
    CustomerLogoutView,
    CustomerOAuthView,
    CustomerProfileView,
    CustomerRefreshView,
    CustomerRegisterView,
)

__all__ = [
    "CustomerRegisterView",
    "CustomerLoginView",
    "CustomerOAuthView",
    "CustomerRefreshView",
    "CustomerLogoutView",
    "CustomerProfileView",
    "AddressListView",
    "AddressDetailView",
]
