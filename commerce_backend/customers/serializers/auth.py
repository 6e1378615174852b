# customers/serializers/auth.py

import re

from rest_framework import serializers

from customers.models import Customer

STRONG_PASSWORD = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&#^()\[\]{}])[A-Za-z\d@$!%*?&#^()\[\]{}]+$"
)


class CustomerRegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        max_length=128,
        trim_whitespace=False,
        error_messages={"min_length": "Password must be at least 8 characters long"},
    )
    name = serializers.CharField(min_length=2, max_length=150)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def validate_password(self, value):
        if not STRONG_PASSWORD.match(value):
            raise serializers.ValidationError(
                "Password must include at least one uppercase letter, one lowercase letter, "
                "one digit, and one special character"
            )
        return value


class CustomerLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class CustomerOAuthSerializer(serializers.Serializer):
    provider_id = serializers.CharField(max_length=255)
    provider_type = serializers.ChoiceField(
        choices=[Customer.PROVIDER_GOOGLE, Customer.PROVIDER_FACEBOOK]
    )
    email = serializers.EmailField()
    name = serializers.CharField(max_length=150)
    avatar_url = serializers.URLField(max_length=500, required=False, allow_blank=True)


class CustomerProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            "id",
            "email",
            "name",
            "phone",
            "provider_type",
            "email_verified",
            "avatar_url",
            "created_at",
        ]
        read_only_fields = fields
