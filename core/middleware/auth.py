"""
Operator authentication middleware.

This middleware resolves the operator (admin or reseller) stored in the
session and guards the management APIs by role. The public verification
endpoint is never guarded.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.domain.value_objects import OperatorRole

logger = logging.getLogger(__name__)

SESSION_KEY = "operator"

ADMIN_PREFIX = "/api/v1/admin/"
RESELLER_PREFIX = "/api/v1/reseller/"

# Reachable without a session
PUBLIC_PATHS = (
    "/api/v1/admin/login",
    "/api/v1/reseller/login",
    "/api/v1/reseller/register",
)


@dataclass(frozen=True)
class Operator:
    """Authenticated operator attached to the request."""

    role: OperatorRole
    id: Optional[int]
    username: str

    @property
    def is_admin(self) -> bool:
        return self.role == OperatorRole.ADMIN

    @property
    def is_reseller(self) -> bool:
        return self.role == OperatorRole.RESELLER

    def to_session(self) -> dict:
        return {"role": self.role.value, "id": self.id, "username": self.username}

    @classmethod
    def from_session(cls, data: dict) -> Optional["Operator"]:
        try:
            return cls(role=OperatorRole(data["role"]), id=data.get("id"), username=data["username"])
        except (KeyError, TypeError, ValueError):
            return None


def login_operator(request: HttpRequest, operator: Operator) -> None:
    """Store the operator in a fresh session."""
    request.session.cycle_key()
    request.session[SESSION_KEY] = operator.to_session()
    request.operator = operator  # type: ignore


def logout_operator(request: HttpRequest) -> None:
    """Drop the session and its operator."""
    request.session.flush()
    request.operator = None  # type: ignore


class OperatorAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for operator authentication.

    This middleware:
    1. Attaches request.operator from the session (or None)
    2. Requires the admin role for /api/v1/admin/*
    3. Requires the reseller role for /api/v1/reseller/*
    4. Returns 401 without a session, 403 if the role does not match
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate the operator role.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401/403 if the role check fails, None otherwise
        """
        data = request.session.get(SESSION_KEY) if hasattr(request, "session") else None
        operator = Operator.from_session(data) if data else None
        request.operator = operator  # type: ignore

        if request.path.rstrip("/") in PUBLIC_PATHS:
            return None

        if request.path.startswith(ADMIN_PREFIX):
            if operator is None:
                return self._unauthenticated(request)
            if not operator.is_admin:
                return self._forbidden(request, "Admin access required")

        if request.path.startswith(RESELLER_PREFIX):
            if operator is None:
                return self._unauthenticated(request)
            if not operator.is_reseller:
                return self._forbidden(request, "Reseller access required")

        return None

    def _unauthenticated(self, request: HttpRequest) -> HttpResponse:
        logger.info("Unauthenticated request for %s", request.path)
        return JsonResponse(
            {"error": {"code": "UNAUTHENTICATED", "message": "Authentication required"}},
            status=401,
        )

    def _forbidden(self, request: HttpRequest, message: str) -> HttpResponse:
        logger.warning("Rejected operator for %s: %s", request.path, message)
        return JsonResponse({"error": {"code": "FORBIDDEN", "message": message}}, status=403)
