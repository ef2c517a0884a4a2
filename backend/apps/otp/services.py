"""
Phone login services.

request_login_code() and verify_login_code() are the two operations behind
the login endpoints. They raise OTPError subclasses for every expected
outcome; anything else is an infrastructure failure for the caller to map.
"""

from dataclasses import dataclass
from datetime import datetime

from django.conf import settings
from django.utils import timezone

from apps.accounts.constants import UserRole
from apps.accounts.resolver import IdentityResolver
from apps.accounts.tokens import create_identity_token
from apps.core.logging import get_logger, mask_phone
from apps.otp.exceptions import MissingParamsError, UserNotRegisteredError
from apps.otp.hashing import get_code_hasher
from apps.otp.issuer import CodeIssuer
from apps.otp.phone import canonicalize
from apps.otp.store import CodeRecord, get_code_store
from apps.otp.verifier import CodeVerifier
from apps.sms.backends import get_sms_backend

logger = get_logger(__name__)


@dataclass
class LoginResult:
    """Result of a successful code verification."""

    token: str
    uid: str
    role: UserRole


def get_code_issuer() -> CodeIssuer:
    """Build a CodeIssuer from settings."""
    return CodeIssuer(
        store=get_code_store(),
        hasher=get_code_hasher(),
        sms_backend=get_sms_backend(),
        code_length=settings.OTP_CODE_LENGTH,
        ttl_seconds=settings.OTP_CODE_TTL_SECONDS,
        cooldown_seconds=settings.OTP_SEND_COOLDOWN_SECONDS,
    )


def get_code_verifier() -> CodeVerifier:
    """Build a CodeVerifier from settings."""
    return CodeVerifier(
        store=get_code_store(),
        hasher=get_code_hasher(),
        max_attempts=settings.OTP_MAX_ATTEMPTS,
    )


def request_login_code(raw_phone: str | None, now: datetime | None = None) -> CodeRecord:
    """
    Send a login code to a phone number.

    Args:
        raw_phone: Phone number as typed by the user
        now: Evaluation time (defaults to the current time)

    Returns:
        The stored code record

    Raises:
        MissingParamsError: If no phone was supplied
        EmptyPhoneInputError / InvalidPhoneFormatError: If the phone is unusable
        ResendTooSoonError: If a code was sent within the cooldown
        CodeDeliveryError: If the SMS could not be sent
    """
    if not raw_phone:
        raise MissingParamsError("phone_number is required")

    phone = canonicalize(raw_phone)
    return get_code_issuer().issue(phone, now=now)


def verify_login_code(raw_phone: str | None, code: str | None, now: datetime | None = None) -> LoginResult:
    """
    Verify a login code and issue an identity token.

    The code is consumed as soon as it matches, so a UserNotRegisteredError
    still burns it.

    Args:
        raw_phone: Phone number as typed by the user
        code: The code received by SMS
        now: Evaluation time (defaults to the current time)

    Returns:
        LoginResult with the signed token, uid and role

    Raises:
        MissingParamsError: If phone or code is missing
        EmptyPhoneInputError / InvalidPhoneFormatError: If the phone is unusable
        InvalidOrExpiredCodeError, TooManyAttemptsError, InvalidCodeError: Code rejected
        UserNotRegisteredError: Code accepted but no identity for the phone
    """
    if not raw_phone or not code:
        raise MissingParamsError("phone_number and code are required")

    phone = canonicalize(raw_phone)
    get_code_verifier().verify(phone, code, now=now)

    identity = IdentityResolver().resolve(phone.key)
    if identity is None:
        logger.warning("login_user_not_registered", phone_suffix=mask_phone(phone.key))
        raise UserNotRegisteredError("User is not registered")

    token = create_identity_token(identity.uid, identity.role)
    logger.info("login_succeeded", uid=identity.uid, role=identity.role.value)
    return LoginResult(token=token, uid=identity.uid, role=identity.role)


def cleanup_expired_codes(now: datetime | None = None) -> int:
    """
    Delete code records past their delete_after time.

    Intended to be called from a scheduled task.

    Returns:
        Number of records deleted
    """
    deleted = get_code_store().purge_expired(now or timezone.now())
    if deleted:
        logger.info("expired_login_codes_cleaned", deleted=deleted)
    return deleted
