"""
Serializers for authentication and registration endpoints.
"""

from rest_framework import serializers


class LoginRequestSerializer(serializers.Serializer):
    """Serializer for admin and reseller login requests."""

    username = serializers.CharField(required=True, max_length=150)
    password = serializers.CharField(required=True, trim_whitespace=False)


class RegisterRequestSerializer(serializers.Serializer):
    """Serializer for reseller registration."""

    username = serializers.CharField(required=True, min_length=3, max_length=50)
    password = serializers.CharField(required=True, min_length=6, trim_whitespace=False)
    referralToken = serializers.CharField(required=True, min_length=5)  # noqa: N815


class OperatorSerializer(serializers.Serializer):
    """Serializer for the operator stored in the session."""

    id = serializers.IntegerField(allow_null=True)
    username = serializers.CharField()
    role = serializers.CharField(source="role.value")


class ResellerSerializer(serializers.Serializer):
    """Serializer for ResellerDTO (shared with the admin API)."""

    id = serializers.IntegerField()
    username = serializers.CharField()
    credits = serializers.IntegerField()
    createdAt = serializers.DateTimeField(source="created_at")  # noqa: N815


class LoginResponseSerializer(serializers.Serializer):
    """Serializer for login response."""

    message = serializers.CharField()
    user = OperatorSerializer()


class RegisterResponseSerializer(serializers.Serializer):
    """Serializer for registration response."""

    message = serializers.CharField()
    reseller = ResellerSerializer()
