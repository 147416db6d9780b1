"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Username(ValueObject):
    """Reseller username value object."""

    value: str

    def __post_init__(self):
        """Validate username length and charset."""
        if not self.value or len(self.value) < 3:
            raise ValueError("Username must be at least 3 characters")
        if len(self.value) > 50:
            raise ValueError("Username must be at most 50 characters")
        if any(ch.isspace() for ch in self.value):
            raise ValueError("Username cannot contain whitespace")

    def __str__(self) -> str:
        """Return username as string."""
        return self.value


@dataclass(frozen=True)
class DeviceIdentifier(ValueObject):
    """Opaque client-supplied device identifier."""

    value: str

    def __post_init__(self):
        """Validate device identifier."""
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Device identifier cannot be empty")
        if len(self.value) > 255:
            raise ValueError("Device identifier too long")

    def __str__(self) -> str:
        """Return identifier as string."""
        return self.value


class OperatorRole(Enum):
    """Role of an authenticated operator."""

    ADMIN = "admin"
    RESELLER = "reseller"

    def __str__(self) -> str:
        """Return role as string."""
        return self.value


class VerificationReason(Enum):
    """Stable machine-checkable outcome of a key verification."""

    VALID = "valid"
    DEVICE_REGISTERED = "device_registered"
    INVALID_KEY = "invalid_key"
    REVOKED = "revoked"
    EXPIRED = "expired"
    DEVICE_LIMIT_REACHED = "device_limit_reached"
    INVALID_INPUT = "invalid_input"

    def __str__(self) -> str:
        """Return reason as string."""
        return self.value
