# users/views/users.py

"""
STAFF USERS API (resource "users")

CRUD through the factory; passwords hashed by UserService.
"""

from common.crud import crud_viewset
from users.serializers.user import UserSerializer, UserUpdateSerializer, UserWriteSerializer
from users.services.user_service import user_service

UserViewSet = crud_viewset(
    service=user_service,
    create_serializer=UserWriteSerializer,
    update_serializer=UserUpdateSerializer,
    output_serializer=UserSerializer,
    resource="users",
    resource_name="user",
)
