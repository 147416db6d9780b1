"""
Reseller and ReferralToken Django ORM models.

This is the infrastructure layer model for resellers.
Domain entities are in resellers.domain.
"""
from django.db import models
from django.utils import timezone


class Reseller(models.Model):
    """
    A reseller account. Keys reference it by its numeric id.
    """

    username = models.CharField(max_length=50, unique=True)
    password = models.CharField(max_length=128, help_text="Salted password hash")
    credits = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "resellers"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(credits__gte=0),
                name="reseller_credits_non_negative",
            ),
        ]

    def __str__(self):
        return self.username


class ReferralToken(models.Model):
    """
    One-time code gating reseller registration. Never deleted.
    """

    token = models.CharField(max_length=64, unique=True)
    created_by = models.CharField(max_length=150)
    used = models.BooleanField(default=False, db_index=True)
    used_by = models.CharField(max_length=50, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "referral_tokens"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.token
