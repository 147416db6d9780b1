"""
Serializers for the public key verification endpoint.
"""

from rest_framework import serializers


class VerifyKeyRequestSerializer(serializers.Serializer):
    """Serializer for verify key request (query string or JSON body)."""

    key = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)
    deviceId = serializers.CharField(  # noqa: N815
        required=False, allow_blank=True, default="", trim_whitespace=False
    )


class VerifyKeySuccessSerializer(serializers.Serializer):
    """Serializer for an accepted verification."""

    success = serializers.BooleanField(source="accepted")
    message = serializers.CharField()
    game = serializers.CharField()
    expiresAt = serializers.DateTimeField(source="expires_at")  # noqa: N815


class VerifyKeyFailureSerializer(serializers.Serializer):
    """Serializer for a rejected verification."""

    success = serializers.BooleanField(source="accepted")
    message = serializers.CharField()
    reason = serializers.CharField(source="reason.value")
