"""
Authentication API views.

Admins and resellers log in with a username and password and get a
session carrying their role. Resellers sign up with a referral token.
"""

from asgiref.sync import async_to_sync
from django.contrib.auth import authenticate
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import serializer_validation_error
from api.v1.auth.serializers import (
    LoginRequestSerializer,
    LoginResponseSerializer,
    OperatorSerializer,
    RegisterRequestSerializer,
    RegisterResponseSerializer,
)
from core.domain.exceptions import InvalidCredentialsError
from core.domain.value_objects import OperatorRole
from core.instrumentation import Status, StatusCode, get_tracer
from core.middleware.auth import Operator, login_operator, logout_operator
from resellers.application.commands.authenticate_reseller import (
    AuthenticateResellerCommand,
)
from resellers.application.commands.register_reseller import RegisterResellerCommand
from resellers.application.handlers.registration_handlers import RegisterResellerHandler
from resellers.application.handlers.reseller_handlers import AuthenticateResellerHandler
from resellers.infrastructure.repositories.django_reseller_repository import (
    DjangoResellerRepository,
)

# Initialize repositories (in production, use DI container)
_reseller_repo = DjangoResellerRepository()

tracer = get_tracer(__name__)


class AdminLoginView(APIView):
    """View for admin login."""

    @extend_schema(
        operation_id="admin_login",
        summary="Admin Login",
        description="Authenticate a staff user and start an admin session.",
        tags=["Auth"],
        request=LoginRequestSerializer,
        responses={
            200: LoginResponseSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Invalid credentials"},
        },
    )
    def post(self, request: Request) -> Response:
        """Log an admin in."""
        with tracer.start_as_current_span("admin_login") as span:
            serializer = LoginRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                raise serializer_validation_error(serializer)

            user = authenticate(
                request._request,  # pylint: disable=protected-access
                username=serializer.validated_data["username"],
                password=serializer.validated_data["password"],
            )
            if user is None or not user.is_staff:
                span.set_status(Status(StatusCode.ERROR, "Invalid credentials"))
                raise InvalidCredentialsError()

            operator = Operator(role=OperatorRole.ADMIN, id=user.pk, username=user.get_username())
            login_operator(request, operator)
            span.set_status(Status(StatusCode.OK))

            data = LoginResponseSerializer({"message": "Login successful", "user": operator}).data
            return Response(data, status=status.HTTP_200_OK)


class ResellerLoginView(APIView):
    """View for reseller login."""

    @extend_schema(
        operation_id="reseller_login",
        summary="Reseller Login",
        description="Authenticate a reseller and start a reseller session.",
        tags=["Auth"],
        request=LoginRequestSerializer,
        responses={
            200: LoginResponseSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Invalid credentials"},
        },
    )
    def post(self, request: Request) -> Response:
        """Log a reseller in."""
        reseller = async_to_sync(self._handle_authenticate)(request)

        # Session writes stay on the sync side.
        operator = Operator(role=OperatorRole.RESELLER, id=reseller.id, username=reseller.username)
        login_operator(request, operator)

        data = LoginResponseSerializer({"message": "Login successful", "user": operator}).data
        data["user"]["credits"] = reseller.credits
        return Response(data, status=status.HTTP_200_OK)

    async def _handle_authenticate(self, request: Request):
        """Async handler for reseller authentication."""
        with tracer.start_as_current_span("reseller_login") as span:
            serializer = LoginRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                raise serializer_validation_error(serializer)

            handler = AuthenticateResellerHandler(reseller_repository=_reseller_repo)
            reseller = await handler.handle(
                AuthenticateResellerCommand(
                    username=serializer.validated_data["username"],
                    password=serializer.validated_data["password"],
                )
            )
            span.set_attribute("reseller.id", reseller.id)
            span.set_status(Status(StatusCode.OK))
            return reseller


class RegisterResellerView(APIView):
    """View for reseller self-registration with a referral token."""

    @extend_schema(
        operation_id="register_reseller",
        summary="Register Reseller",
        description=(
            "Create a reseller account with zero credits. The referral token "
            "is consumed and cannot be used again."
        ),
        tags=["Auth"],
        request=RegisterRequestSerializer,
        responses={
            201: RegisterResponseSerializer,
            400: {"description": "Bad Request"},
            409: {"description": "Username taken or referral token invalid/used"},
        },
    )
    def post(self, request: Request) -> Response:
        """Register a reseller."""
        return async_to_sync(self._handle_register)(request)

    async def _handle_register(self, request: Request) -> Response:
        """Async handler for reseller registration."""
        with tracer.start_as_current_span("register_reseller") as span:
            serializer = RegisterRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                raise serializer_validation_error(serializer)

            handler = RegisterResellerHandler(reseller_repository=_reseller_repo)
            reseller = await handler.handle(
                RegisterResellerCommand(
                    username=serializer.validated_data["username"],
                    password=serializer.validated_data["password"],
                    referral_token=serializer.validated_data["referralToken"],
                )
            )
            span.set_attribute("reseller.id", reseller.id)
            span.set_status(Status(StatusCode.OK))

            data = RegisterResponseSerializer(
                {"message": "Registration successful", "reseller": reseller}
            ).data
            return Response(data, status=status.HTTP_201_CREATED)


class LogoutView(APIView):
    """View for ending the current session."""

    @extend_schema(
        operation_id="logout",
        summary="Logout",
        tags=["Auth"],
        request=None,
        responses={200: {"description": "Logout successful"}},
    )
    def post(self, request: Request) -> Response:
        logout_operator(request)
        return Response({"message": "Logout successful"}, status=status.HTTP_200_OK)


class MeView(APIView):
    """View returning the operator of the current session."""

    @extend_schema(
        operation_id="me",
        summary="Current Operator",
        tags=["Auth"],
        responses={200: OperatorSerializer, 401: {"description": "Not authenticated"}},
    )
    def get(self, request: Request) -> Response:
        operator = getattr(request, "operator", None)
        if operator is None:
            return Response(
                {"error": {"code": "UNAUTHENTICATED", "message": "Not authenticated"}},
                status=status.HTTP_401_UNAUTHORIZED,
            )
        return Response({"user": OperatorSerializer(operator).data}, status=status.HTTP_200_OK)
