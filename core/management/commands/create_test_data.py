"""
Django management command to create test data for development and testing.

Creates:
- An admin (staff superuser)
- A reseller registered through a fresh referral token, topped up with credits
- Optionally, a test license key issued by that reseller
"""

import logging

from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from core.conf import service_setting
from licenses.application.commands.issue_key import IssueKeyCommand
from licenses.application.handlers.issue_key_handler import IssueKeyHandler
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from resellers.application.commands.add_credits import AddCreditsCommand
from resellers.application.commands.issue_referral_token import IssueReferralTokenCommand
from resellers.application.commands.register_reseller import RegisterResellerCommand
from resellers.application.dto.reseller_dto import ResellerDTO
from resellers.application.handlers.registration_handlers import (
    IssueReferralTokenHandler,
    RegisterResellerHandler,
)
from resellers.application.handlers.reseller_handlers import AddCreditsHandler
from resellers.infrastructure.repositories.django_referral_token_repository import (
    DjangoReferralTokenRepository,
)
from resellers.infrastructure.repositories.django_reseller_repository import (
    DjangoResellerRepository,
)

logger = logging.getLogger(__name__)
User = get_user_model()


class Command(BaseCommand):
    """Command to create test data."""

    help = "Create test data (admin, referral token, reseller with credits, key)"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--skip-admin",
            action="store_true",
            help="Skip creating the admin user",
        )
        parser.add_argument(
            "--skip-key",
            action="store_true",
            help="Skip issuing a test key",
        )
        parser.add_argument(
            "--admin-username",
            type=str,
            default="admin",
            help="Admin username (default: admin)",
        )
        parser.add_argument(
            "--reseller-username",
            type=str,
            default="reseller",
            help="Reseller username (default: reseller)",
        )
        parser.add_argument(
            "--reseller-password",
            type=str,
            default="reseller123",
            help="Reseller password (default: reseller123)",
        )
        parser.add_argument(
            "--credits",
            type=int,
            default=10,
            help="Credits granted to the reseller (default: 10)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if not options["skip_admin"]:
            self.create_admin(options["admin_username"])

        reseller = async_to_sync(self.create_reseller)(
            options["admin_username"],
            options["reseller_username"],
            options["reseller_password"],
            options["credits"],
        )

        if not options["skip_key"] and reseller.credits > 0:
            key = async_to_sync(self.create_test_key)(reseller)
            # pylint: disable=no-member
            self.stdout.write(self.style.SUCCESS(f"Test license key: {key}"))

    def create_admin(self, username: str):
        """Create an admin superuser if it doesn't exist."""
        password = "admin"

        if User.objects.filter(username=username).exists():
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING(f"Admin '{username}' already exists"))
            return

        User.objects.create_superuser(
            username=username, email=f"{username}@example.com", password=password
        )
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Created admin: {username} / {password}"))

    async def create_reseller(
        self, admin_username: str, username: str, password: str, credits: int
    ) -> ResellerDTO:
        """Register a reseller through a new referral token and top it up."""
        reseller_repo = DjangoResellerRepository()

        existing = await reseller_repo.find_by_username(username)
        if existing:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING(f"Reseller '{username}' already exists"))
            return ResellerDTO.from_entity(existing)

        token = await IssueReferralTokenHandler(DjangoReferralTokenRepository()).handle(
            IssueReferralTokenCommand(created_by=admin_username)
        )
        reseller = await RegisterResellerHandler(reseller_repo).handle(
            RegisterResellerCommand(
                username=username, password=password, referral_token=token.token
            )
        )
        if credits > 0:
            reseller = await AddCreditsHandler(reseller_repo).handle(
                AddCreditsCommand(reseller_id=reseller.id, amount=credits)
            )

        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(
                f"Created reseller: {username} / {password} ({reseller.credits} credits)"
            )
        )
        return reseller

    async def create_test_key(self, reseller: ResellerDTO) -> str:
        """Issue one key for the first supported game."""
        handler = IssueKeyHandler(
            reseller_repository=DjangoResellerRepository(),
            license_key_repository=DjangoLicenseKeyRepository(),
        )
        result = await handler.handle(
            IssueKeyCommand(
                reseller_id=reseller.id,
                game=service_setting("SUPPORTED_GAMES")[0],
                device_limit=service_setting("ALLOWED_DEVICE_LIMITS")[0],
                expiry_days=30,
            )
        )
        return result.license_key.key
