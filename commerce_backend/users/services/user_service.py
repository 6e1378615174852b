# users/services/user_service.py

"""
STAFF USER SERVICE

- CRUD over User with password hashing on create/update
- Credential check for staff login (inactive / soft-deleted users refused)
"""

from __future__ import annotations

import logging

from django.contrib.auth.models import update_last_login
from django.db import transaction
from rest_framework import status

from common.crud import ModelService
from common.exceptions import DomainError
from users.models import User

logger = logging.getLogger("api")


class InvalidCredentialsError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    default_message = "Invalid email or password."


class UserService(ModelService):
    def __init__(self):
        super().__init__(User, select_related=("role", "store"), ordering=("-created_at", "-id"))

    @transaction.atomic
    def create(self, data: dict):
        data = dict(data)
        password = data.pop("password", None)
        email = data.pop("email")
        return User.objects.create_user(email=email, password=password, **data)

    @transaction.atomic
    def update(self, pk: int, data: dict):
        data = dict(data)
        password = data.pop("password", None)
        user = super().update(pk, data)
        if password:
            user.set_password(password)
            user.save(update_fields=["password"])
        return user


user_service = UserService()


def authenticate_staff(email: str, password: str) -> User:
    user = (
        User.objects.select_related("role")
        .filter(email__iexact=email.strip(), deleted_at__isnull=True)
        .first()
    )

    if user is None or not user.is_active or not user.check_password(password):
        logger.info("auth.staff_login_failed", extra={"email": email})
        raise InvalidCredentialsError()

    update_last_login(None, user)
    return user
