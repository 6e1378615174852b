"""
PATH: users/views/auth.py

STAFF AUTH ENDPOINTS

POST /api/auth/login/    email + password -> access token (body) + refresh cookie
POST /api/auth/refresh/  refresh cookie   -> new access token
POST /api/auth/logout/   clears the refresh cookie (204 when there is none)
"""

from __future__ import annotations

import logging

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import RefreshToken

from common.cookies import clear_refresh_cookie, set_refresh_cookie
from common.exceptions import NotAuthenticatedError
from common.responses import success_response
from users.models import User
from users.serializers.auth import StaffLoginSerializer
from users.serializers.user import UserSerializer
from users.services.user_service import InvalidCredentialsError, authenticate_staff
from users.tokens import issue_access_token, issue_token_pair

logger = logging.getLogger("api")


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = StaffLoginSerializer

    @extend_schema(
        request=StaffLoginSerializer,
        responses={200: dict},
        description="Authenticate a staff user with email and password",
    )
    def post(self, request):
        serializer = StaffLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate_staff(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        access, refresh = issue_token_pair(user)

        logger.info("auth.staff_login", extra={"user_id": user.id})

        response = success_response(
            {"access_token": access, "user": UserSerializer(user).data},
            message="Login successful",
        )
        set_refresh_cookie(response, settings.REFRESH_COOKIE_NAME, refresh)
        return response


class RefreshView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=None, responses={200: dict})
    def post(self, request):
        raw = request.COOKIES.get(settings.REFRESH_COOKIE_NAME)
        if not raw:
            raise NotAuthenticatedError("Refresh token missing.")

        try:
            refresh = RefreshToken(raw)
        except TokenError as exc:
            raise InvalidCredentialsError("Refresh token is invalid or expired.") from exc

        user_id = refresh.get(jwt_settings.USER_ID_CLAIM)
        user = User.objects.filter(
            pk=user_id,
            is_active=True,
            deleted_at__isnull=True,
        ).first()
        if user is None:
            raise InvalidCredentialsError("User no longer exists or is inactive.")

        return success_response({"access_token": issue_access_token(user)})


class LogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=None, responses={200: dict, 204: None})
    def post(self, request):
        if not request.COOKIES.get(settings.REFRESH_COOKIE_NAME):
            return Response(status=status.HTTP_204_NO_CONTENT)

        response = success_response(message="Logged out")
        clear_refresh_cookie(response, settings.REFRESH_COOKIE_NAME)
        return response
