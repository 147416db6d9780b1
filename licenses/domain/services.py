"""
Key registry domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from dataclasses import dataclass
from typing import Optional

from core.conf import service_setting
from core.domain.exceptions import KeyOwnershipError, ValidationError
from licenses.domain.license_key import MAX_KEY_LENGTH, MIN_KEY_LENGTH


@dataclass(frozen=True)
class KeyTerms:
    """Validated parameters of a key to be issued."""

    game: str
    device_limit: int
    expiry_days: int
    custom_key: Optional[str] = None


class KeyIssuePolicy:
    """Domain service validating key issue requests against configuration."""

    @staticmethod
    def validate(
        game,
        device_limit,
        expiry_days,
        custom_key: Optional[str] = None,
    ) -> KeyTerms:
        """
        Validate raw issue parameters.

        Args:
            game: Game title (must be supported)
            device_limit: One of the allowed device limits
            expiry_days: Whole days in [1, MAX_EXPIRY_DAYS]
            custom_key: Optional caller-chosen key string

        Returns:
            KeyTerms

        Raises:
            ValidationError: With a message naming the offending field
        """
        if not isinstance(game, str) or not game.strip():
            raise ValidationError("Game is required")
        game = game.strip()
        supported = tuple(service_setting("SUPPORTED_GAMES"))
        if game not in supported:
            raise ValidationError(f"Unsupported game: {game}")

        allowed_limits = tuple(service_setting("ALLOWED_DEVICE_LIMITS"))
        if (
            isinstance(device_limit, bool)
            or not isinstance(device_limit, int)
            or device_limit not in allowed_limits
        ):
            allowed = ", ".join(str(v) for v in allowed_limits)
            raise ValidationError(f"Device limit must be one of: {allowed}")

        max_days = service_setting("MAX_EXPIRY_DAYS")
        if (
            isinstance(expiry_days, bool)
            or not isinstance(expiry_days, int)
            or not 1 <= expiry_days <= max_days
        ):
            raise ValidationError(f"Expiry days must be between 1 and {max_days}")

        if custom_key is not None:
            custom_key = custom_key.strip()
            if not custom_key:
                custom_key = None
            elif not MIN_KEY_LENGTH <= len(custom_key) <= MAX_KEY_LENGTH:
                raise ValidationError(
                    f"Custom key must be between {MIN_KEY_LENGTH} and "
                    f"{MAX_KEY_LENGTH} characters"
                )

        return KeyTerms(
            game=game,
            device_limit=device_limit,
            expiry_days=expiry_days,
            custom_key=custom_key,
        )


class KeyOwnership:
    """Domain service guarding reseller actions on keys."""

    @staticmethod
    def ensure_owned(license_key, reseller_id: int) -> None:
        """
        Raises:
            KeyOwnershipError: If ``reseller_id`` does not own the key
        """
        if not license_key.is_owned_by(reseller_id):
            raise KeyOwnershipError()
