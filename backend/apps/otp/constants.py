"""
Constants for the otp app.
"""

from enum import StrEnum


class ErrorCode(StrEnum):
    """
    Error codes returned in the error_code field of auth responses.

    Clients branch on these values, so they are part of the public API.
    """

    MISSING_PARAMS = "MissingParams"
    EMPTY_INPUT = "EmptyInput"
    INVALID_PHONE_FORMAT = "InvalidPhoneFormat"
    FAILED_TO_SEND_CODE = "FailedToSendCode"
    RESEND_TOO_SOON = "ResendTooSoon"
    INVALID_OR_EXPIRED_CODE = "InvalidOrExpiredCode"
    TOO_MANY_ATTEMPTS_LOCKED = "TooManyAttemptsLocked"
    INVALID_CODE = "InvalidCode"
    USER_NOT_REGISTERED = "UserNotRegistered"
    SERVER_ERROR = "ServerError"


HTTP_STATUS_BY_ERROR_CODE: dict[ErrorCode, int] = {
    ErrorCode.MISSING_PARAMS: 400,
    ErrorCode.EMPTY_INPUT: 400,
    ErrorCode.INVALID_PHONE_FORMAT: 400,
    ErrorCode.INVALID_OR_EXPIRED_CODE: 400,
    ErrorCode.INVALID_CODE: 400,
    ErrorCode.USER_NOT_REGISTERED: 403,
    ErrorCode.RESEND_TOO_SOON: 429,
    ErrorCode.TOO_MANY_ATTEMPTS_LOCKED: 429,
    ErrorCode.FAILED_TO_SEND_CODE: 502,
    ErrorCode.SERVER_ERROR: 500,
}

DIGITS = "0123456789"
