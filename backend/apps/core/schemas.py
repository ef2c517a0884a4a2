"""
Core schemas - shared Pydantic models for API responses.
"""

from pydantic import BaseModel, Field


class BaseResponse(BaseModel):
    """
    Envelope shared by every auth endpoint.

    success is False whenever error_code is set.
    """

    success: bool = False
    error_code: str | None = Field(
        default=None,
        description="Machine-readable error code, present only on failure",
    )

    model_config = {"json_schema_extra": {"example": {"success": False, "error_code": "MissingParams"}}}
