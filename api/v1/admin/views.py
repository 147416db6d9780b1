"""
Admin API views.

These endpoints are used by administrators to:
- Manage resellers (list, top up credits, delete)
- Inspect every key in the registry
- Issue referral tokens for new resellers
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import serializer_validation_error
from api.v1.admin.serializers import (
    AddCreditsRequestSerializer,
    AdminKeyListResponseSerializer,
    DeleteResellerResponseSerializer,
    ReferralTokenListResponseSerializer,
    ReferralTokenResponseSerializer,
    ResellerListResponseSerializer,
    ResellerResponseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.handlers.list_keys_handlers import ListAllKeysHandler
from licenses.application.queries.list_keys import ListAllKeysQuery
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from resellers.application.commands.add_credits import AddCreditsCommand
from resellers.application.commands.delete_reseller import DeleteResellerCommand
from resellers.application.commands.issue_referral_token import IssueReferralTokenCommand
from resellers.application.handlers.registration_handlers import (
    IssueReferralTokenHandler,
    ListReferralTokensHandler,
)
from resellers.application.handlers.reseller_handlers import (
    AddCreditsHandler,
    DeleteResellerHandler,
    ListResellersHandler,
)
from resellers.application.queries.list_referral_tokens import ListReferralTokensQuery
from resellers.application.queries.list_resellers import ListResellersQuery
from resellers.infrastructure.repositories.django_referral_token_repository import (
    DjangoReferralTokenRepository,
)
from resellers.infrastructure.repositories.django_reseller_repository import (
    DjangoResellerRepository,
)

# Initialize repositories (in production, use DI container)
_reseller_repo = DjangoResellerRepository()
_referral_token_repo = DjangoReferralTokenRepository()
_license_key_repo = DjangoLicenseKeyRepository()

tracer = get_tracer(__name__)


class ResellersView(APIView):
    """View for listing resellers."""

    @extend_schema(
        operation_id="admin_list_resellers",
        summary="List Resellers",
        tags=["Admin API"],
        responses={200: ResellerListResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """List every reseller."""
        return async_to_sync(self._handle_list_resellers)(request)

    async def _handle_list_resellers(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_list_resellers") as span:
            handler = ListResellersHandler(reseller_repository=_reseller_repo)
            resellers = await handler.handle(ListResellersQuery())

            span.set_attribute("resellers.count", len(resellers))
            span.set_status(Status(StatusCode.OK))
            return Response(ResellerListResponseSerializer({"resellers": resellers}).data)


class ResellerCreditsView(APIView):
    """View for topping up a reseller's credits."""

    @extend_schema(
        operation_id="admin_add_credits",
        summary="Add Credits",
        description="Add a positive number of credits to a reseller's balance.",
        tags=["Admin API"],
        request=AddCreditsRequestSerializer,
        responses={
            200: ResellerResponseSerializer,
            400: {"description": "Invalid credits value"},
            404: {"description": "Reseller not found"},
        },
    )
    def post(self, request: Request, reseller_id: int) -> Response:
        """Add credits."""
        return async_to_sync(self._handle_add_credits)(request, reseller_id)

    async def _handle_add_credits(self, request: Request, reseller_id: int) -> Response:
        """Async handler for add credits."""
        with tracer.start_as_current_span("add_credits") as span:
            span.set_attribute("reseller.id", reseller_id)

            serializer = AddCreditsRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                raise serializer_validation_error(serializer)

            handler = AddCreditsHandler(reseller_repository=_reseller_repo)
            reseller = await handler.handle(
                AddCreditsCommand(
                    reseller_id=reseller_id,
                    amount=serializer.validated_data["credits"],
                )
            )

            span.set_attribute("reseller.credits", reseller.credits)
            span.set_status(Status(StatusCode.OK))
            return Response(ResellerResponseSerializer({"reseller": reseller}).data)


class ResellerDetailView(APIView):
    """View for deleting a reseller."""

    @extend_schema(
        operation_id="admin_delete_reseller",
        summary="Delete Reseller",
        description=(
            "Delete a reseller. Its keys are revoked and kept in the registry "
            "without an owner."
        ),
        tags=["Admin API"],
        responses={
            200: DeleteResellerResponseSerializer,
            404: {"description": "Reseller not found"},
        },
    )
    def delete(self, request: Request, reseller_id: int) -> Response:
        """Delete a reseller."""
        return async_to_sync(self._handle_delete_reseller)(request, reseller_id)

    async def _handle_delete_reseller(self, request: Request, reseller_id: int) -> Response:
        with tracer.start_as_current_span("delete_reseller") as span:
            span.set_attribute("reseller.id", reseller_id)

            handler = DeleteResellerHandler(reseller_repository=_reseller_repo)
            result = await handler.handle(DeleteResellerCommand(reseller_id=reseller_id))

            span.set_attribute("keys.revoked", result.keys_revoked)
            span.set_status(Status(StatusCode.OK))
            data = DeleteResellerResponseSerializer(
                {"message": "Reseller deleted successfully", "keys_revoked": result.keys_revoked}
            ).data
            return Response(data, status=status.HTTP_200_OK)


class AdminKeysView(APIView):
    """View for listing every key."""

    @extend_schema(
        operation_id="admin_list_keys",
        summary="List All Keys",
        tags=["Admin API"],
        responses={200: AdminKeyListResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """List every key, newest first."""
        return async_to_sync(self._handle_list_keys)(request)

    async def _handle_list_keys(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_list_keys") as span:
            handler = ListAllKeysHandler(
                license_key_repository=_license_key_repo,
                reseller_repository=_reseller_repo,
            )
            keys = await handler.handle(ListAllKeysQuery())

            span.set_attribute("keys.count", len(keys))
            span.set_status(Status(StatusCode.OK))
            return Response(AdminKeyListResponseSerializer({"keys": keys}).data)


class ReferralTokensView(APIView):
    """View for issuing and listing referral tokens."""

    @extend_schema(
        operation_id="admin_list_referral_tokens",
        summary="List Referral Tokens",
        tags=["Admin API"],
        responses={200: ReferralTokenListResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """List referral tokens, newest first."""
        return async_to_sync(self._handle_list_tokens)(request)

    async def _handle_list_tokens(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_list_referral_tokens") as span:
            handler = ListReferralTokensHandler(referral_token_repository=_referral_token_repo)
            tokens = await handler.handle(ListReferralTokensQuery())

            span.set_status(Status(StatusCode.OK))
            return Response(ReferralTokenListResponseSerializer({"tokens": tokens}).data)

    @extend_schema(
        operation_id="admin_issue_referral_token",
        summary="Issue Referral Token",
        description="Mint a single-use token a new reseller redeems at registration.",
        tags=["Admin API"],
        request=None,
        responses={201: ReferralTokenResponseSerializer},
    )
    def post(self, request: Request) -> Response:
        """Issue a referral token."""
        return async_to_sync(self._handle_issue_token)(request)

    async def _handle_issue_token(self, request: Request) -> Response:
        with tracer.start_as_current_span("issue_referral_token") as span:
            handler = IssueReferralTokenHandler(referral_token_repository=_referral_token_repo)
            token = await handler.handle(
                IssueReferralTokenCommand(created_by=request.operator.username)
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                ReferralTokenResponseSerializer({"token": token}).data,
                status=status.HTTP_201_CREATED,
            )
