# users/serializers/user.py

from rest_framework import serializers

from store.models import Store
from users.models import Role, User


class UserSerializer(serializers.ModelSerializer):
    role_name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "phone",
            "role",
            "role_name",
            "store",
            "is_active",
            "last_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserWriteSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8, max_length=128)
    role = serializers.PrimaryKeyRelatedField(
        queryset=Role.objects.filter(deleted_at__isnull=True),
        required=False,
        allow_null=True,
    )
    store = serializers.PrimaryKeyRelatedField(
        queryset=Store.objects.filter(deleted_at__isnull=True),
        required=False,
        allow_null=True,
    )

    class Meta:
        model = User
        fields = ["email", "password", "name", "phone", "role", "store", "is_active"]
        # duplicates surface as 409 from the database constraint
        extra_kwargs = {"email": {"validators": []}}

    def validate_email(self, value):
        return User.objects.normalize_email(value.strip())


class UserUpdateSerializer(UserWriteSerializer):
    id = serializers.IntegerField(min_value=1)

    class Meta(UserWriteSerializer.Meta):
        fields = ["id", *UserWriteSerializer.Meta.fields]
