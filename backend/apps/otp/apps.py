"""
OTP app configuration.
"""

from django.apps import AppConfig


class OtpConfig(AppConfig):
    """Configuration for the phone login code app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.otp"
    verbose_name = "Login codes"
