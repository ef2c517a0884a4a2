"""
Accounts models - application identities keyed by phone number.
"""

import uuid

from django.db import models

from apps.accounts.constants import UserRole
from apps.core.models import TimestampedModel


def _new_uid() -> str:
    return uuid.uuid4().hex


class AppUser(TimestampedModel):
    """
    A provisioned worker who may log in by phone.

    uid is the subject of issued identity tokens. Managers carry the sites
    they oversee; employees point at their manager and, optionally, the
    subcontractor that employs them.
    """

    uid = models.CharField(max_length=64, primary_key=True, default=_new_uid, editable=False)
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    phone = models.CharField(
        max_length=20,
        db_index=True,
        help_text="Digits-only phone with country code (older rows may have a leading +)",
    )
    # Not constrained at the database level: legacy rows hold free-form values
    role = models.CharField(max_length=32, choices=UserRole.choices, default=UserRole.EMPLOYEE)
    active = models.BooleanField(default=True)

    manager_id = models.CharField(max_length=64, null=True, blank=True)
    subcontractor_id = models.CharField(max_length=64, null=True, blank=True)
    site_ids = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} ({self.role})"


class PhoneIndex(models.Model):
    """
    Direct lookup from canonical phone key to AppUser uid.

    uid is a plain reference, not a foreign key: an entry may outlive the
    user it points at, and the resolver treats that as "not registered".
    """

    key = models.CharField(max_length=20, primary_key=True)
    uid = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "phone index entries"

    def __str__(self) -> str:
        return f"***{self.key[-4:]} -> {self.uid}"
