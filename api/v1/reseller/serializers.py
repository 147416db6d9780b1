"""
Serializers for reseller API endpoints.
"""

from rest_framework import serializers


class IssueKeyRequestSerializer(serializers.Serializer):
    """
    Serializer for issue key request.

    Range checks (supported games, device limits, expiry window) are done
    by the domain so the limits stay configurable in one place.
    """

    game = serializers.CharField(required=True, max_length=64)
    deviceLimit = serializers.IntegerField(required=True)  # noqa: N815
    expiryDays = serializers.IntegerField(required=True)  # noqa: N815
    customKey = serializers.CharField(  # noqa: N815
        required=False, allow_blank=True, allow_null=True, max_length=100
    )


class LicenseKeySerializer(serializers.Serializer):
    """Serializer for LicenseKeyDTO (shared with the admin API)."""

    id = serializers.IntegerField()
    key = serializers.CharField()
    game = serializers.CharField()
    deviceLimit = serializers.IntegerField(source="device_limit")  # noqa: N815
    expiryDays = serializers.IntegerField(source="expiry_days")  # noqa: N815
    createdBy = serializers.CharField(source="created_by", allow_null=True)  # noqa: N815
    createdAt = serializers.DateTimeField(source="created_at")  # noqa: N815
    expiresAt = serializers.DateTimeField(source="expires_at")  # noqa: N815
    isActive = serializers.BooleanField(source="is_active")  # noqa: N815


class IssueKeyResponseSerializer(serializers.Serializer):
    """Serializer for issue key response."""

    key = LicenseKeySerializer(source="license_key")
    creditsRemaining = serializers.IntegerField(source="credits_remaining")  # noqa: N815


class KeyListResponseSerializer(serializers.Serializer):
    """Serializer for key list response."""

    keys = LicenseKeySerializer(many=True)


class KeyActionResponseSerializer(serializers.Serializer):
    """Serializer for revoke and reset responses."""

    message = serializers.CharField()
    key = LicenseKeySerializer()


class CreditsResponseSerializer(serializers.Serializer):
    """Serializer for credit balance response."""

    credits = serializers.IntegerField()


class DeviceRegistrationSerializer(serializers.Serializer):
    """Serializer for DeviceRegistrationDTO."""

    id = serializers.IntegerField()
    deviceId = serializers.CharField(source="device_id")  # noqa: N815
    registeredAt = serializers.DateTimeField(source="registered_at")  # noqa: N815


class DeviceListResponseSerializer(serializers.Serializer):
    """Serializer for a key's bound devices."""

    devices = DeviceRegistrationSerializer(many=True)
