"""
Schemas for phone login endpoints.

Request fields are optional so that a missing value is reported as
MissingParams in the response envelope rather than a validation error.
JSON numbers are accepted for phone and code and read as their digits.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from apps.core.schemas import BaseResponse

_PHONE_ALIASES = AliasChoices("phone_number", "phoneNumber", "phone")


class RequestCodeRequest(BaseModel):
    """Request a login code for a phone number."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    phone_number: str | None = Field(
        default=None,
        validation_alias=_PHONE_ALIASES,
        max_length=32,
        description="Phone number, local or international format",
        examples=["054-643-2705", "+972546432705"],
    )


class RequestCodeResponse(BaseResponse):
    """Result of a login code request."""

    expires_in_seconds: int | None = Field(default=None, description="Seconds until the code expires")
    resend_after_seconds: int | None = Field(
        default=None,
        description="Seconds until another code may be requested",
    )


class VerifyCodeRequest(BaseModel):
    """Submit a login code."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    phone_number: str | None = Field(
        default=None,
        validation_alias=_PHONE_ALIASES,
        max_length=32,
        description="Phone number the code was sent to",
        examples=["+972546432705"],
    )
    code: str | None = Field(
        default=None,
        max_length=12,
        description="The code received via SMS",
        examples=["123456"],
    )


class VerifyCodeResponse(BaseResponse):
    """Result of a login code verification."""

    token: str | None = Field(default=None, description="Signed identity token (RS256 JWT)")
    uid: str | None = None
    role: str | None = Field(default=None, description="manager or employee")
