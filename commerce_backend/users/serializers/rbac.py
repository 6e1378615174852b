# users/serializers/rbac.py

from rest_framework import serializers

from users.models import Permission, Role, RolePermission

ACTION_CHOICES = [choice for choice, _label in Permission.ACTION_CHOICES]


class PermissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Permission
        fields = ["id", "resource", "action", "created_at"]
        read_only_fields = fields


class PermissionCreateSerializer(serializers.Serializer):
    resource = serializers.CharField(max_length=100, trim_whitespace=True)
    action = serializers.ChoiceField(choices=ACTION_CHOICES)


class RoleSerializer(serializers.ModelSerializer):
    permissions = PermissionSerializer(many=True, read_only=True)

    class Meta:
        model = Role
        fields = ["id", "name", "description", "permissions", "created_at", "updated_at"]
        read_only_fields = fields


class RoleWriteSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=100, trim_whitespace=True)

    class Meta:
        model = Role
        fields = ["name", "description"]


class RoleUpdateSerializer(RoleWriteSerializer):
    id = serializers.IntegerField(min_value=1)

    class Meta(RoleWriteSerializer.Meta):
        fields = ["id", *RoleWriteSerializer.Meta.fields]


class ResourceGrantSerializer(serializers.Serializer):
    resource = serializers.CharField(max_length=100, trim_whitespace=True)
    actions = serializers.ListField(
        child=serializers.ChoiceField(choices=ACTION_CHOICES),
        allow_empty=True,
    )


class RolePermissionSyncSerializer(serializers.Serializer):
    permissions = ResourceGrantSerializer(many=True)


class RolePermissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = RolePermission
        fields = ["id", "role", "permission", "created_at"]
        read_only_fields = fields


class RolePermissionUpdateSerializer(serializers.Serializer):
    role_id = serializers.IntegerField(min_value=1, required=False)
    permission_id = serializers.IntegerField(min_value=1, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide role_id and/or permission_id.")
        return attrs
