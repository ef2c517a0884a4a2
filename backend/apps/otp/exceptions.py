"""
Exceptions for the otp app.

Each exception maps to exactly one ErrorCode so the request boundary can
turn any OTPError into a response without inspecting messages.
"""

from apps.otp.constants import ErrorCode


class OTPError(Exception):
    """Base exception for login code operations."""

    error_code: ErrorCode = ErrorCode.SERVER_ERROR


class MissingParamsError(OTPError):
    """A required request field was not supplied."""

    error_code = ErrorCode.MISSING_PARAMS


class EmptyPhoneInputError(OTPError):
    """Phone input is empty or whitespace."""

    error_code = ErrorCode.EMPTY_INPUT


class InvalidPhoneFormatError(OTPError):
    """Phone input does not parse to a valid number."""

    error_code = ErrorCode.INVALID_PHONE_FORMAT


class ResendTooSoonError(OTPError):
    """A code was sent to this phone within the cooldown window."""

    error_code = ErrorCode.RESEND_TOO_SOON

    def __init__(self, message: str, retry_after: int) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class CodeDeliveryError(OTPError):
    """The code was stored but the SMS could not be delivered."""

    error_code = ErrorCode.FAILED_TO_SEND_CODE


class InvalidOrExpiredCodeError(OTPError):
    """No usable code exists for this phone."""

    error_code = ErrorCode.INVALID_OR_EXPIRED_CODE


class TooManyAttemptsError(OTPError):
    """The current code is locked after too many wrong submissions."""

    error_code = ErrorCode.TOO_MANY_ATTEMPTS_LOCKED


class InvalidCodeError(OTPError):
    """Submitted code does not match."""

    error_code = ErrorCode.INVALID_CODE

    def __init__(self, message: str, attempts_remaining: int) -> None:
        super().__init__(message)
        self.attempts_remaining = attempts_remaining


class UserNotRegisteredError(OTPError):
    """Code was correct but the phone is not provisioned."""

    error_code = ErrorCode.USER_NOT_REGISTERED
