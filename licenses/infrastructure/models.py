"""
LicenseKey Django ORM model.

One authoritative table for every key, indexed by key string and by
owning reseller.
"""
from django.db import models
from django.utils import timezone


class LicenseKey(models.Model):
    """
    A license key minted by a reseller and bound to a limited number
    of devices.
    """

    key = models.CharField(max_length=100, unique=True)
    game = models.CharField(max_length=64)
    device_limit = models.PositiveSmallIntegerField()
    expiry_days = models.PositiveSmallIntegerField()
    reseller = models.ForeignKey(
        "resellers.Reseller",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="license_keys",
    )
    created_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField()
    is_active = models.BooleanField(default=True, db_index=True)
    bound_devices = models.PositiveIntegerField(
        default=0, help_text="Device slots already claimed"
    )

    class Meta:
        db_table = "license_keys"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["reseller", "created_at"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(bound_devices__lte=models.F("device_limit")),
                name="license_key_bound_devices_within_limit",
            ),
        ]

    def __str__(self):
        return self.key
