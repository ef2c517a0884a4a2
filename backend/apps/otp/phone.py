"""
Phone number canonicalization.

Every phone-keyed lookup (login code records, the phone index, legacy user
records) goes through canonicalize() so that "054-643-2705",
"+972 54 643 2705" and "00972546432705" all address the same record.
"""

from dataclasses import dataclass

import phonenumbers
from django.conf import settings

from apps.otp.exceptions import EmptyPhoneInputError, InvalidPhoneFormatError


@dataclass(frozen=True)
class CanonicalPhone:
    """
    A validated phone number.

    Attributes:
        e164: International format used for SMS delivery, e.g. "+972546432705"
        key: Digits-only storage key, e.g. "972546432705"
    """

    e164: str
    key: str

    @property
    def plus_key(self) -> str:
        """Key with a leading "+", the other spelling found in legacy records."""
        return f"+{self.key}"


def _parse(raw: str, region: str | None) -> phonenumbers.PhoneNumber | None:
    try:
        number = phonenumbers.parse(raw, region)
    except phonenumbers.NumberParseException:
        return None
    return number if phonenumbers.is_valid_number(number) else None


def canonicalize(raw: str | None, default_region: str | None = None) -> CanonicalPhone:
    """
    Normalize user-typed phone text into a CanonicalPhone.

    Numbers without a country code are read in default_region (falling back
    to OTP_DEFAULT_REGION). Digits-only input that already carries a country
    code (e.g. "972546432705") is accepted as well.

    Raises:
        EmptyPhoneInputError: If raw is empty or whitespace
        InvalidPhoneFormatError: If raw is not a valid number
    """
    text = (raw or "").strip()
    if not text:
        raise EmptyPhoneInputError("Phone number is required")

    region = default_region or settings.OTP_DEFAULT_REGION
    number = _parse(text, region)
    if number is None and not text.startswith("+"):
        number = _parse(f"+{text}", None)
    if number is None:
        raise InvalidPhoneFormatError("Invalid phone number")

    e164 = phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.E164)
    return CanonicalPhone(e164=e164, key=e164.lstrip("+"))
