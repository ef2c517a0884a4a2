"""
Login code issuance.

A code is minted when there is no record, the stored code has expired, or
the last send is older than the cooldown. Otherwise the request is rejected
without touching the record. Minting always replaces the whole record, so
attempts start again from zero.
"""

import secrets
from datetime import datetime, timedelta

from django.utils import timezone

from apps.core.logging import get_logger, mask_phone
from apps.otp.constants import DIGITS
from apps.otp.exceptions import CodeDeliveryError, ResendTooSoonError
from apps.otp.hashing import CodeHasher
from apps.otp.phone import CanonicalPhone
from apps.otp.store import CodeRecord, CodeRecordStore
from apps.sms.backends import SMSBackend

logger = get_logger(__name__)


def generate_otp_code(length: int) -> str:
    """Generate a numeric code, uniform over digits, using the secrets RNG."""
    return "".join(secrets.choice(DIGITS) for _ in range(length))


class CodeIssuer:
    """Decides whether to mint a code and persists and sends it."""

    def __init__(
        self,
        store: CodeRecordStore,
        hasher: CodeHasher,
        sms_backend: SMSBackend,
        *,
        code_length: int,
        ttl_seconds: int,
        cooldown_seconds: int,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.sms_backend = sms_backend
        self.code_length = code_length
        self.ttl = timedelta(seconds=ttl_seconds)
        self.cooldown = timedelta(seconds=cooldown_seconds)

    def issue(self, phone: CanonicalPhone, now: datetime | None = None) -> CodeRecord:
        """
        Mint, store and send a new code for phone.

        Returns:
            The stored record

        Raises:
            ResendTooSoonError: If the current code is live and was sent within the cooldown
            CodeDeliveryError: If the SMS failed; the record is kept so the cooldown applies
        """
        now = now or timezone.now()
        existing = self.store.get(phone.key)

        if existing is not None and not existing.is_expired(now):
            elapsed = now - existing.last_sent_at
            if elapsed <= self.cooldown:
                retry_after = max(1, int((self.cooldown - elapsed).total_seconds()) + 1)
                logger.info(
                    "login_code_resend_too_soon",
                    phone_suffix=mask_phone(phone.key),
                    retry_after=retry_after,
                )
                raise ResendTooSoonError("A code was sent recently. Please wait before retrying.", retry_after)

        return self._mint(phone, now)

    def _mint(self, phone: CanonicalPhone, now: datetime) -> CodeRecord:
        code = generate_otp_code(self.code_length)
        expires_at = now + self.ttl
        record = CodeRecord(
            key=phone.key,
            code_hash=self.hasher.hash(phone.key, code),
            created_at=now,
            expires_at=expires_at,
            last_sent_at=now,
            attempts=0,
            delete_after=expires_at,
        )
        self.store.put(record)

        if not self.sms_backend.send_code(phone.e164, code):
            logger.warning("login_code_delivery_failed", phone_suffix=mask_phone(phone.key))
            raise CodeDeliveryError("Failed to send verification code")

        logger.info(
            "login_code_sent",
            phone_suffix=mask_phone(phone.key),
            expires_at=expires_at.isoformat(),
        )
        return record
