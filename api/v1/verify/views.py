"""
Public key verification API.

Client software calls this endpoint to check a key on a device. It
needs no session; the first successful call from a new device binds
that device to the key.
"""

import logging

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.verify_key import VerifyKeyCommand
from activations.application.handlers.verify_key_handler import VerifyKeyHandler
from activations.infrastructure.repositories.django_device_registration_repository import (
    DjangoDeviceRegistrationRepository,
)
from api.v1.verify.serializers import (
    VerifyKeyFailureSerializer,
    VerifyKeyRequestSerializer,
    VerifyKeySuccessSerializer,
)
from core.domain.value_objects import VerificationReason
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import errors_total
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)

logger = logging.getLogger(__name__)

# Initialize repositories (in production, use DI container)
_license_key_repo = DjangoLicenseKeyRepository()
_registration_repo = DjangoDeviceRegistrationRepository()

tracer = get_tracer(__name__)

REASON_STATUS = {
    VerificationReason.VALID: status.HTTP_200_OK,
    VerificationReason.DEVICE_REGISTERED: status.HTTP_200_OK,
    VerificationReason.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    VerificationReason.INVALID_KEY: status.HTTP_404_NOT_FOUND,
    VerificationReason.REVOKED: status.HTTP_403_FORBIDDEN,
    VerificationReason.EXPIRED: status.HTTP_403_FORBIDDEN,
    VerificationReason.DEVICE_LIMIT_REACHED: status.HTTP_403_FORBIDDEN,
}

VERIFY_RESPONSES = {
    200: VerifyKeySuccessSerializer,
    400: VerifyKeyFailureSerializer,
    403: VerifyKeyFailureSerializer,
    404: VerifyKeyFailureSerializer,
    500: {"description": "An error occurred during verification"},
}


class VerifyKeyView(APIView):
    """View for verifying a key on a device."""

    @extend_schema(
        operation_id="verify_key_get",
        summary="Verify Key (query string)",
        description=(
            "Check a key for a device. A new device consumes one slot of the "
            "key's device limit; a known device is accepted without a new slot."
        ),
        tags=["Verification"],
        parameters=[
            OpenApiParameter(name="key", type=str, location=OpenApiParameter.QUERY, required=True),
            OpenApiParameter(
                name="deviceId", type=str, location=OpenApiParameter.QUERY, required=True
            ),
        ],
        responses=VERIFY_RESPONSES,
    )
    def get(self, request: Request) -> Response:
        """Verify a key from query parameters."""
        return self._verify(request, request.query_params)

    @extend_schema(
        operation_id="verify_key_post",
        summary="Verify Key (JSON body)",
        description="Same as the GET form, with {key, deviceId} in the body.",
        tags=["Verification"],
        request=VerifyKeyRequestSerializer,
        responses=VERIFY_RESPONSES,
    )
    def post(self, request: Request) -> Response:
        """Verify a key from a JSON body."""
        try:
            data = request.data
        except (ParseError, UnsupportedMediaType) as exc:
            # Unreadable bodies are rejected as missing input.
            logger.info("Unreadable verify body: %s", exc.default_code)
            data = {}
        return self._verify(request, data)

    def _verify(self, request: Request, data) -> Response:
        try:
            return async_to_sync(self._handle_verify)(data)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Key verification failed")
            errors_total.labels(error_type="verification", endpoint="verify").inc()
            return Response(
                {"success": False, "message": "An error occurred during verification"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    async def _handle_verify(self, data) -> Response:
        """Async handler for verify key."""
        with tracer.start_as_current_span("verify_key") as span:
            span.set_attribute("operation", "verify_key")

            serializer = VerifyKeyRequestSerializer(data=data)
            if serializer.is_valid():
                key = serializer.validated_data["key"]
                device_id = serializer.validated_data["deviceId"]
            else:
                key, device_id = "", ""

            handler = VerifyKeyHandler(
                license_key_repository=_license_key_repo,
                registration_repository=_registration_repo,
            )
            result = await handler.handle(VerifyKeyCommand(key=key, device_id=device_id))

            span.set_attribute("verification.reason", result.reason.value)
            if result.accepted:
                span.set_status(Status(StatusCode.OK))
                body = VerifyKeySuccessSerializer(result).data
            else:
                span.set_status(Status(StatusCode.ERROR, result.reason.value))
                body = VerifyKeyFailureSerializer(result).data
            return Response(body, status=REASON_STATUS[result.reason])
