"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. The API layer maps each
family to an HTTP status (see api.exceptions).
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised for malformed or out-of-range input."""

    def __init__(self, message: str = "Invalid input", code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class InvalidAmountError(ValidationError):
    """Raised when a credit amount is not a positive integer."""

    def __init__(self, message: str = "Credit amount must be a positive integer"):
        super().__init__(message, code="INVALID_AMOUNT")


class NotFoundError(DomainException):
    """Base exception for unknown entities."""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class ResellerNotFoundError(NotFoundError):
    """Raised when a reseller is not found."""

    def __init__(self, message: str = "Reseller not found"):
        super().__init__(message, code="RESELLER_NOT_FOUND")


class LicenseKeyNotFoundError(NotFoundError):
    """Raised when a license key is not found."""

    def __init__(self, message: str = "Key not found"):
        super().__init__(message, code="KEY_NOT_FOUND")


class AuthorizationError(DomainException):
    """Raised when an operator acts outside of its rights."""

    def __init__(self, message: str = "Not authorized", code: str = "FORBIDDEN"):
        super().__init__(message, code=code)


class KeyOwnershipError(AuthorizationError):
    """Raised when a reseller acts on a key it does not own."""

    def __init__(self, message: str = "Not authorized to modify this key"):
        super().__init__(message, code="KEY_NOT_OWNED")


class InvalidCredentialsError(AuthorizationError):
    """Raised when a login attempt fails."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class ConflictError(DomainException):
    """Base exception for uniqueness and state conflicts."""

    def __init__(self, message: str = "Conflict", code: str = "CONFLICT"):
        super().__init__(message, code=code)


class DuplicateKeyError(ConflictError):
    """Raised when a key string already exists in the registry."""

    def __init__(self, message: str = "Key already exists"):
        super().__init__(message, code="DUPLICATE_KEY")


class UsernameTakenError(ConflictError):
    """Raised when a reseller username is already registered."""

    def __init__(self, message: str = "Username already taken"):
        super().__init__(message, code="USERNAME_TAKEN")


class InvalidReferralTokenError(ConflictError):
    """Raised when a referral token is unknown or already used."""

    def __init__(self, message: str = "Invalid or used referral token"):
        super().__init__(message, code="INVALID_REFERRAL_TOKEN")


class KeyRevokedError(ConflictError):
    """Raised when an operation needs an active key but it was revoked."""

    def __init__(self, message: str = "Key has been revoked"):
        super().__init__(message, code="KEY_REVOKED")


class InsufficientCreditsError(DomainException):
    """Raised when a reseller cannot pay for a key."""

    def __init__(self, message: str = "Insufficient credits"):
        super().__init__(message, code="INSUFFICIENT_CREDITS")


class DeviceLimitReachedError(DomainException):
    """Raised by the binding ledger when every device slot of a key is taken."""

    def __init__(self, device_limit: int):
        super().__init__(
            f"Device limit reached ({device_limit})", code="DEVICE_LIMIT_REACHED"
        )
        self.device_limit = device_limit
