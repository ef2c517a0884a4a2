"""
Login code models.
"""

from django.db import models
from django.utils import timezone


class AuthCode(models.Model):
    """
    The in-flight login code for one phone number.

    There is at most one row per canonical phone key. Issuing a new code
    overwrites the whole row; a successful verification deletes it.
    Only the keyed hash of the code is stored.
    """

    key = models.CharField(
        max_length=20,
        primary_key=True,
        help_text="Canonical phone key (digits only, with country code)",
    )
    code_hash = models.CharField(max_length=64, help_text="HMAC-SHA256 of key and code")

    created_at = models.DateTimeField()
    expires_at = models.DateTimeField()
    last_sent_at = models.DateTimeField()
    attempts = models.PositiveSmallIntegerField(
        default=0,
        help_text="Wrong verification attempts against the current code",
    )
    delete_after = models.DateTimeField(
        db_index=True,
        help_text="Equals expires_at; rows past this are purged by cleanup_auth_codes",
    )

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Login code for ***{self.key[-4:]}"

    @property
    def is_expired(self) -> bool:
        """Check if the code has expired."""
        return timezone.now() > self.expires_at
