"""
PATH: customers/views/auth.py

CUSTOMER AUTH ENDPOINTS (/api/customer/auth/)

POST register | login | oauth | logout
GET  refresh (jwt_customer cookie) | profile (customer JWT)

Successful register/login/oauth return the access token in the body and set
the refresh token in the HTTP-only customer cookie.
"""

from __future__ import annotations

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.cookies import clear_refresh_cookie, set_refresh_cookie
from common.exceptions import NotAuthenticatedError
from common.responses import success_response
from customers.authentication import CustomerJWTAuthentication
from customers.throttling import CUSTOMER_THROTTLES
from customers.serializers.auth import (
    CustomerLoginSerializer,
    CustomerOAuthSerializer,
    CustomerProfileSerializer,
    CustomerRegisterSerializer,
)
from customers.services import customer_service
from customers.tokens import issue_access_token, issue_token_pair


def _authenticated_response(customer, *, message: str, status_code: int = status.HTTP_200_OK):
    access, refresh = issue_token_pair(customer)
    response = success_response(
        {
            "access_token": access,
            "customer": CustomerProfileSerializer(customer).data,
        },
        message=message,
        status=status_code,
    )
    set_refresh_cookie(response, settings.CUSTOMER_REFRESH_COOKIE_NAME, refresh)
    return response


class CustomerRegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = CustomerRegisterSerializer

    @extend_schema(request=CustomerRegisterSerializer, responses={201: dict})
    def post(self, request):
        serializer = CustomerRegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer = customer_service.register(**serializer.validated_data)
        return _authenticated_response(
            customer,
            message="Registration successful",
            status_code=status.HTTP_201_CREATED,
        )


class CustomerLoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = CustomerLoginSerializer

    @extend_schema(request=CustomerLoginSerializer, responses={200: dict})
    def post(self, request):
        serializer = CustomerLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer = customer_service.login(**serializer.validated_data)
        return _authenticated_response(customer, message="Login successful")


class CustomerOAuthView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = CustomerOAuthSerializer

    @extend_schema(request=CustomerOAuthSerializer, responses={200: dict})
    def post(self, request):
        serializer = CustomerOAuthSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer = customer_service.oauth_login(**serializer.validated_data)
        return _authenticated_response(customer, message="OAuth login successful")


class CustomerRefreshView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(responses={200: dict})
    def get(self, request):
        raw = request.COOKIES.get(settings.CUSTOMER_REFRESH_COOKIE_NAME)
        if not raw:
            raise NotAuthenticatedError("Refresh token missing.")

        customer = customer_service.customer_from_refresh(raw)
        return success_response(
            {
                "access_token": issue_access_token(customer),
                "customer": CustomerProfileSerializer(customer).data,
            }
        )


class CustomerLogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=None, responses={200: dict, 204: None})
    def post(self, request):
        if not request.COOKIES.get(settings.CUSTOMER_REFRESH_COOKIE_NAME):
            return Response(status=status.HTTP_204_NO_CONTENT)

        response = success_response(message="Logged out")
        clear_refresh_cookie(response, settings.CUSTOMER_REFRESH_COOKIE_NAME)
        return response


class CustomerProfileView(APIView):
    authentication_classes = [CustomerJWTAuthentication]
    permission_classes = [IsAuthenticated]
    throttle_classes = CUSTOMER_THROTTLES
    serializer_class = CustomerProfileSerializer

    @extend_schema(responses={200: CustomerProfileSerializer})
    def get(self, request):
        return success_response(CustomerProfileSerializer(request.user).data)
