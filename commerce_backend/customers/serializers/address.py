# customers/serializers/address.py

from rest_framework import serializers

from customers.models import Address


class AddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = Address
        fields = [
            "id",
            "label",
            "street",
            "city",
            "county",
            "postal_code",
            "country",
            "phone",
            "is_default",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]
