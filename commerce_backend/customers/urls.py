# customers/urls.py

from django.urls import path

from .views import (
    AddressDetailView,
    AddressListView,
    CustomerLoginView,
    CustomerLogoutView,
    CustomerOAuthView,
    CustomerProfileView,
    CustomerRefreshView,
    CustomerRegisterView,
)

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("auth/register/", CustomerRegisterView.as_view(), name="customer-register"),
    path("auth/login/", CustomerLoginView.as_view(), name="customer-login"),
    path("auth/oauth/", CustomerOAuthView.as_view(), name="customer-oauth"),
    path("auth/refresh/", CustomerRefreshView.as_view(), name="customer-refresh"),
    path("auth/logout/", CustomerLogoutView.as_view(), name="customer-logout"),
    # ---------------- AUTHENTICATED ----------------
    path("auth/profile/", CustomerProfileView.as_view(), name="customer-profile"),
    path("addresses/", AddressListView.as_view(), name="customer-addresses"),
    path("addresses/<str:address_id>/", AddressDetailView.as_view(), name="customer-address-detail"),
]
