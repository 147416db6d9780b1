"""
Reseller API views.

These endpoints are used by resellers to:
- Check their credit balance
- Issue keys (one credit each) and list them
- Revoke or reset their own keys
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.handlers.list_key_devices_handler import ListKeyDevicesHandler
from activations.application.queries.list_key_devices import ListKeyDevicesQuery
from activations.infrastructure.repositories.django_device_registration_repository import (
    DjangoDeviceRegistrationRepository,
)
from api.exceptions import serializer_validation_error
from api.v1.reseller.serializers import (
    CreditsResponseSerializer,
    DeviceListResponseSerializer,
    IssueKeyRequestSerializer,
    IssueKeyResponseSerializer,
    KeyActionResponseSerializer,
    KeyListResponseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.issue_key import IssueKeyCommand
from licenses.application.commands.reset_key import ResetKeyCommand
from licenses.application.commands.revoke_key import RevokeKeyCommand
from licenses.application.handlers.issue_key_handler import IssueKeyHandler
from licenses.application.handlers.key_lifecycle_handlers import (
    ResetKeyHandler,
    RevokeKeyHandler,
)
from licenses.application.handlers.list_keys_handlers import ListResellerKeysHandler
from licenses.application.queries.list_keys import ListResellerKeysQuery
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from resellers.application.handlers.reseller_handlers import GetResellerHandler
from resellers.application.queries.get_reseller import GetResellerQuery
from resellers.infrastructure.repositories.django_reseller_repository import (
    DjangoResellerRepository,
)

# Initialize repositories (in production, use DI container)
_reseller_repo = DjangoResellerRepository()
_license_key_repo = DjangoLicenseKeyRepository()
_registration_repo = DjangoDeviceRegistrationRepository()

tracer = get_tracer(__name__)


class CreditsView(APIView):
    """View for the reseller's credit balance."""

    @extend_schema(
        operation_id="reseller_credits",
        summary="Credit Balance",
        tags=["Reseller API"],
        responses={200: CreditsResponseSerializer, 404: {"description": "Reseller not found"}},
    )
    def get(self, request: Request) -> Response:
        """Return the current balance."""
        return async_to_sync(self._handle_credits)(request)

    async def _handle_credits(self, request: Request) -> Response:
        with tracer.start_as_current_span("reseller_credits") as span:
            reseller_id = request.operator.id
            span.set_attribute("reseller.id", reseller_id)

            handler = GetResellerHandler(reseller_repository=_reseller_repo)
            reseller = await handler.handle(GetResellerQuery(reseller_id=reseller_id))

            span.set_status(Status(StatusCode.OK))
            return Response({"credits": reseller.credits}, status=status.HTTP_200_OK)


class KeysView(APIView):
    """View for listing and issuing the reseller's keys."""

    @extend_schema(
        operation_id="reseller_list_keys",
        summary="List Own Keys",
        description="List keys issued by the calling reseller, newest first.",
        tags=["Reseller API"],
        responses={200: KeyListResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """List own keys."""
        return async_to_sync(self._handle_list_keys)(request)

    async def _handle_list_keys(self, request: Request) -> Response:
        with tracer.start_as_current_span("reseller_list_keys") as span:
            span.set_attribute("reseller.id", request.operator.id)

            handler = ListResellerKeysHandler(
                license_key_repository=_license_key_repo,
                reseller_repository=_reseller_repo,
            )
            keys = await handler.handle(ListResellerKeysQuery(reseller_id=request.operator.id))

            span.set_attribute("keys.count", len(keys))
            span.set_status(Status(StatusCode.OK))
            return Response(KeyListResponseSerializer({"keys": keys}).data)

    @extend_schema(
        operation_id="reseller_issue_key",
        summary="Issue Key",
        description=(
            "Mint a key for a supported game. Costs one credit; the debit and "
            "the key are stored together or not at all."
        ),
        tags=["Reseller API"],
        request=IssueKeyRequestSerializer,
        responses={
            201: IssueKeyResponseSerializer,
            400: {"description": "Invalid parameters or insufficient credits"},
            404: {"description": "Reseller not found"},
            409: {"description": "Key already exists"},
        },
    )
    def post(self, request: Request) -> Response:
        """Issue a key."""
        return async_to_sync(self._handle_issue_key)(request)

    async def _handle_issue_key(self, request: Request) -> Response:
        """Async handler for issue key."""
        with tracer.start_as_current_span("issue_key") as span:
            span.set_attribute("operation", "issue_key")
            span.set_attribute("reseller.id", request.operator.id)

            serializer = IssueKeyRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                raise serializer_validation_error(serializer)

            handler = IssueKeyHandler(
                reseller_repository=_reseller_repo,
                license_key_repository=_license_key_repo,
            )
            result = await handler.handle(
                IssueKeyCommand(
                    reseller_id=request.operator.id,
                    game=serializer.validated_data["game"],
                    device_limit=serializer.validated_data["deviceLimit"],
                    expiry_days=serializer.validated_data["expiryDays"],
                    custom_key=serializer.validated_data.get("customKey"),
                )
            )

            span.set_attribute("key.id", result.license_key.id)
            span.set_status(Status(StatusCode.OK))
            return Response(
                IssueKeyResponseSerializer(result).data, status=status.HTTP_201_CREATED
            )


class KeyDetailView(APIView):
    """View for revoking one of the reseller's keys."""

    @extend_schema(
        operation_id="reseller_revoke_key",
        summary="Revoke Key",
        description="Deactivate a key. Verification of a revoked key fails with 'revoked'.",
        tags=["Reseller API"],
        responses={
            200: KeyActionResponseSerializer,
            403: {"description": "Key owned by another reseller"},
            404: {"description": "Key not found"},
        },
    )
    def delete(self, request: Request, key_id: int) -> Response:
        """Revoke a key."""
        return async_to_sync(self._handle_revoke_key)(request, key_id)

    async def _handle_revoke_key(self, request: Request, key_id: int) -> Response:
        with tracer.start_as_current_span("revoke_key") as span:
            span.set_attribute("key.id", key_id)

            handler = RevokeKeyHandler(
                license_key_repository=_license_key_repo,
                reseller_repository=_reseller_repo,
            )
            key = await handler.handle(
                RevokeKeyCommand(key_id=key_id, reseller_id=request.operator.id)
            )

            span.set_status(Status(StatusCode.OK))
            data = KeyActionResponseSerializer(
                {"message": "Key revoked successfully", "key": key}
            ).data
            return Response(data, status=status.HTTP_200_OK)


class KeyResetView(APIView):
    """View for resetting one of the reseller's keys."""

    @extend_schema(
        operation_id="reseller_reset_key",
        summary="Reset Key",
        description=(
            "Unbind every device from an active key and restart its validity "
            "period from now. No credit is charged."
        ),
        tags=["Reseller API"],
        request=None,
        responses={
            200: KeyActionResponseSerializer,
            403: {"description": "Key owned by another reseller"},
            404: {"description": "Key not found"},
            409: {"description": "Key has been revoked"},
        },
    )
    def post(self, request: Request, key_id: int) -> Response:
        """Reset a key."""
        return async_to_sync(self._handle_reset_key)(request, key_id)

    async def _handle_reset_key(self, request: Request, key_id: int) -> Response:
        with tracer.start_as_current_span("reset_key") as span:
            span.set_attribute("key.id", key_id)

            handler = ResetKeyHandler(
                license_key_repository=_license_key_repo,
                reseller_repository=_reseller_repo,
            )
            key = await handler.handle(
                ResetKeyCommand(key_id=key_id, reseller_id=request.operator.id)
            )

            span.set_status(Status(StatusCode.OK))
            data = KeyActionResponseSerializer(
                {"message": "Key reset successfully", "key": key}
            ).data
            return Response(data, status=status.HTTP_200_OK)


class KeyDevicesView(APIView):
    """View listing the devices bound to one of the reseller's keys."""

    @extend_schema(
        operation_id="reseller_key_devices",
        summary="List Bound Devices",
        tags=["Reseller API"],
        responses={
            200: DeviceListResponseSerializer,
            403: {"description": "Key owned by another reseller"},
            404: {"description": "Key not found"},
        },
    )
    def get(self, request: Request, key_id: int) -> Response:
        """List bound devices."""
        return async_to_sync(self._handle_list_devices)(request, key_id)

    async def _handle_list_devices(self, request: Request, key_id: int) -> Response:
        with tracer.start_as_current_span("list_key_devices") as span:
            span.set_attribute("key.id", key_id)

            handler = ListKeyDevicesHandler(
                license_key_repository=_license_key_repo,
                registration_repository=_registration_repo,
            )
            devices = await handler.handle(
                ListKeyDevicesQuery(key_id=key_id, reseller_id=request.operator.id)
            )

            span.set_status(Status(StatusCode.OK))
            return Response(DeviceListResponseSerializer({"devices": devices}).data)
