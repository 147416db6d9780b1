"""
Serializers for admin API endpoints.
"""

from rest_framework import serializers

from api.v1.auth.serializers import ResellerSerializer
from api.v1.reseller.serializers import LicenseKeySerializer


class AddCreditsRequestSerializer(serializers.Serializer):
    """Serializer for add credits request."""

    credits = serializers.IntegerField(required=True)


class ResellerResponseSerializer(serializers.Serializer):
    """Serializer for a single reseller response."""

    reseller = ResellerSerializer()


class ResellerListResponseSerializer(serializers.Serializer):
    """Serializer for reseller list response."""

    resellers = ResellerSerializer(many=True)


class DeleteResellerResponseSerializer(serializers.Serializer):
    """Serializer for reseller deletion response."""

    message = serializers.CharField()
    keysRevoked = serializers.IntegerField(source="keys_revoked")  # noqa: N815


class AdminKeyListResponseSerializer(serializers.Serializer):
    """Serializer for the registry-wide key list."""

    keys = LicenseKeySerializer(many=True)


class ReferralTokenSerializer(serializers.Serializer):
    """Serializer for ReferralTokenDTO."""

    id = serializers.IntegerField()
    token = serializers.CharField()
    createdBy = serializers.CharField(source="created_by")  # noqa: N815
    used = serializers.BooleanField()
    usedBy = serializers.CharField(source="used_by", allow_null=True)  # noqa: N815
    createdAt = serializers.DateTimeField(source="created_at")  # noqa: N815
    usedAt = serializers.DateTimeField(source="used_at", allow_null=True)  # noqa: N815


class ReferralTokenResponseSerializer(serializers.Serializer):
    """Serializer for a newly issued referral token."""

    token = ReferralTokenSerializer()


class ReferralTokenListResponseSerializer(serializers.Serializer):
    """Serializer for referral token list response."""

    tokens = ReferralTokenSerializer(many=True)
