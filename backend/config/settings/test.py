"""
Test settings.

SQLite database, fixed pepper and console SMS so the suite runs without
external services.
"""

from .base import *  # noqa: F403

DEBUG = False
ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

SMS_BACKEND = "console"
OTP_CODE_PEPPER = "test-pepper"
OTP_CODE_LENGTH = 6
OTP_CODE_TTL_SECONDS = 300
OTP_SEND_COOLDOWN_SECONDS = 60
OTP_MAX_ATTEMPTS = 5
OTP_DEFAULT_REGION = "IL"

OTP_AUTH_JWT_PRIVATE_KEY = ""
JWT_SIGNING_KEY_ID = "test-key-1"
OTP_AUTH_TOKEN_ISSUER = "test-issuer"
OTP_AUTH_TOKEN_AUDIENCE = "test-audience"

LOG_JSON = False
LOG_LEVEL = "WARNING"
