"""
API endpoints for phone login.

Both endpoints always answer with the response envelope. The HTTP status
mirrors the error class; the error_code field is what clients branch on.
"""

from django.conf import settings
from django.http import HttpRequest
from ninja import Router
from ninja.responses import codes_4xx, codes_5xx

from apps.core.logging import get_logger
from apps.otp.constants import HTTP_STATUS_BY_ERROR_CODE, ErrorCode
from apps.otp.exceptions import OTPError, ResendTooSoonError
from apps.otp.schemas import (
    RequestCodeRequest,
    RequestCodeResponse,
    VerifyCodeRequest,
    VerifyCodeResponse,
)
from apps.otp.services import request_login_code, verify_login_code

logger = get_logger(__name__)

router = Router(tags=["auth"])


def _public_error_code(error: OTPError) -> ErrorCode:
    """Collapse internal error codes onto the public set."""
    if error.error_code == ErrorCode.EMPTY_INPUT:
        return ErrorCode.MISSING_PARAMS
    return error.error_code


@router.post(
    "/login",
    response={200: RequestCodeResponse, codes_4xx: RequestCodeResponse, codes_5xx: RequestCodeResponse},
    operation_id="requestLoginCode",
    summary="Send a login code by SMS",
)
def request_code(request: HttpRequest, payload: RequestCodeRequest) -> tuple[int, RequestCodeResponse]:
    """
    Send a one-time login code to a phone number.

    A new code is sent only when none is pending, the pending one has
    expired, or the resend cooldown has passed.
    """
    try:
        request_login_code(payload.phone_number)
    except ResendTooSoonError as e:
        return 429, RequestCodeResponse(
            error_code=e.error_code,
            resend_after_seconds=e.retry_after,
        )
    except OTPError as e:
        code = _public_error_code(e)
        return HTTP_STATUS_BY_ERROR_CODE[code], RequestCodeResponse(error_code=code)
    except Exception:
        logger.exception("login_code_request_failed")
        return 500, RequestCodeResponse(error_code=ErrorCode.SERVER_ERROR)

    return 200, RequestCodeResponse(
        success=True,
        expires_in_seconds=settings.OTP_CODE_TTL_SECONDS,
        resend_after_seconds=settings.OTP_SEND_COOLDOWN_SECONDS,
    )


@router.post(
    "/verify",
    response={200: VerifyCodeResponse, codes_4xx: VerifyCodeResponse, codes_5xx: VerifyCodeResponse},
    operation_id="verifyLoginCode",
    summary="Exchange a login code for an identity token",
)
def verify_code(request: HttpRequest, payload: VerifyCodeRequest) -> tuple[int, VerifyCodeResponse]:
    """
    Verify a login code.

    On success returns a signed identity token with the user's uid and
    role. A correct code is consumed even if the phone is not registered.
    """
    try:
        result = verify_login_code(payload.phone_number, payload.code)
    except OTPError as e:
        code = _public_error_code(e)
        return HTTP_STATUS_BY_ERROR_CODE[code], VerifyCodeResponse(error_code=code)
    except Exception:
        logger.exception("login_code_verification_failed")
        return 500, VerifyCodeResponse(error_code=ErrorCode.SERVER_ERROR)

    return 200, VerifyCodeResponse(
        success=True,
        token=result.token,
        uid=result.uid,
        role=result.role.value,
    )
