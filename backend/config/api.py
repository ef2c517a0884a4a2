"""
Django Ninja API configuration.
"""

from django.http import HttpRequest, HttpResponse
from ninja import NinjaAPI
from ninja.errors import HttpError, ValidationError

from apps.otp.api import router as auth_router
from apps.otp.constants import ErrorCode

api = NinjaAPI(
    title="Crew Phone Login API",
    version="1.0.0",
    description="Phone number login with SMS one-time codes.",
    openapi_extra={
        "tags": [
            {
                "name": "auth",
                "description": "Request and verify SMS login codes",
            },
            {
                "name": "health",
                "description": "Service health and readiness checks",
            },
        ],
    },
)

# Register routers
api.add_router("/auth", auth_router)


@api.exception_handler(ValidationError)
def request_validation_error(request: HttpRequest, exc: ValidationError) -> HttpResponse:
    """Malformed request bodies get the auth envelope instead of ninja's default 422."""
    return api.create_response(
        request,
        {"success": False, "error_code": ErrorCode.MISSING_PARAMS},
        status=400,
    )


@api.exception_handler(HttpError)
def request_http_error(request: HttpRequest, exc: HttpError) -> HttpResponse:
    """Unparseable bodies and other framework errors keep the auth envelope."""
    return api.create_response(
        request,
        {"success": False, "error_code": ErrorCode.MISSING_PARAMS},
        status=exc.status_code,
    )


@api.get("/health", tags=["health"], operation_id="healthCheck", summary="Health check")
def health_check(request: HttpRequest) -> dict:
    """Health check endpoint for load balancer."""
    return {"status": "ok"}
