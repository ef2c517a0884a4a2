"""
Login code verification.

Checks run in a fixed order and the first failing one decides the outcome:
missing record, expiry, lockout, then the hash comparison. A wrong code
bumps the attempt counter in the store; the right one deletes the record.
Neither expiry nor lockout removes the record; it stays until a new code is
minted or the TTL purge runs.
"""

from datetime import datetime

from django.utils import timezone

from apps.core.logging import get_logger, mask_phone
from apps.otp.exceptions import (
    InvalidCodeError,
    InvalidOrExpiredCodeError,
    TooManyAttemptsError,
)
from apps.otp.hashing import CodeHasher
from apps.otp.phone import CanonicalPhone
from apps.otp.store import CodeRecordStore

logger = get_logger(__name__)


class CodeVerifier:
    """Validates submitted codes with attempt-limited lockout."""

    def __init__(self, store: CodeRecordStore, hasher: CodeHasher, *, max_attempts: int) -> None:
        self.store = store
        self.hasher = hasher
        self.max_attempts = max_attempts

    def verify(self, phone: CanonicalPhone, code: str, now: datetime | None = None) -> None:
        """
        Verify code for phone and consume the record on success.

        Raises:
            InvalidOrExpiredCodeError: No record, expired, or consumed concurrently
            TooManyAttemptsError: The record is locked, or became locked before it could be consumed
            InvalidCodeError: Wrong code with attempts remaining
        """
        now = now or timezone.now()
        suffix = mask_phone(phone.key)
        record = self.store.get(phone.key)

        if record is None:
            logger.info("login_code_not_found", phone_suffix=suffix)
            raise InvalidOrExpiredCodeError("Invalid or expired verification code")

        if record.is_expired(now):
            logger.info("login_code_expired", phone_suffix=suffix)
            raise InvalidOrExpiredCodeError("Invalid or expired verification code")

        if record.attempts >= self.max_attempts:
            logger.warning("login_code_locked", phone_suffix=suffix, attempts=record.attempts)
            raise TooManyAttemptsError("Too many incorrect attempts. Please request a new code later.")

        if not self.hasher.matches(phone.key, code.strip(), record.code_hash):
            attempts = self.store.increment_attempts(phone.key, record.code_hash)
            if attempts is None:
                # Record was re-minted or consumed between read and write
                raise InvalidOrExpiredCodeError("Invalid or expired verification code")
            if attempts >= self.max_attempts:
                logger.warning("login_code_lockout", phone_suffix=suffix, attempts=attempts)
                raise TooManyAttemptsError("Too many incorrect attempts. Please request a new code later.")
            remaining = self.max_attempts - attempts
            logger.info("login_code_mismatch", phone_suffix=suffix, attempts_remaining=remaining)
            raise InvalidCodeError(f"Invalid verification code. {remaining} attempts remaining.", remaining)

        if not self.store.consume(phone.key, record.code_hash, self.max_attempts):
            current = self.store.get(phone.key)
            if current is not None and current.code_hash == record.code_hash:
                logger.warning("login_code_locked", phone_suffix=suffix, attempts=current.attempts)
                raise TooManyAttemptsError("Too many incorrect attempts. Please request a new code later.")
            logger.info("login_code_already_consumed", phone_suffix=suffix)
            raise InvalidOrExpiredCodeError("Invalid or expired verification code")

        logger.info("login_code_verified", phone_suffix=suffix)
