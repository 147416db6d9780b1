"""
DeviceRegistration Django ORM model.

This is the infrastructure layer model for device bindings.
Domain entities are in activations.domain.device_registration.
"""
from django.db import models
from django.utils import timezone


class DeviceRegistration(models.Model):
    """
    A device that consumed one slot of a license key.
    Created on first successful verification; removed only by a key reset.
    """

    license_key = models.ForeignKey(
        "licenses.LicenseKey",
        on_delete=models.CASCADE,
        related_name="device_registrations",
    )
    device_id = models.CharField(max_length=255, help_text="Opaque client device identifier")
    registered_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "device_registrations"
        ordering = ["registered_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["license_key", "device_id"],
                name="uq_license_key_device",
            ),
        ]

    def __str__(self):
        return f"{self.license_key_id} @ {self.device_id}"
