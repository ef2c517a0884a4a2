"""
Base Django settings for the Crew phone login backend.

Shared configuration for all environments.
"""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Environment-based configuration using pydantic-settings."""

    SECRET_KEY: str = "django-insecure-change-me-in-production"
    DEBUG: bool = False
    ALLOWED_HOSTS: str = ""
    DATABASE_NAME: str = "crew"
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: str = "5432"

    # One-time login codes
    OTP_CODE_PEPPER: str = ""
    OTP_CODE_LENGTH: int = 6
    OTP_CODE_TTL_SECONDS: int = 300
    OTP_SEND_COOLDOWN_SECONDS: int = 60
    OTP_MAX_ATTEMPTS: int = 5
    OTP_DEFAULT_REGION: str = "IL"
    OTP_SMS_APP_NAME: str = "Crew"

    # SMS delivery
    SMS_BACKEND: str = "console"
    AWS_SMS_REGION: str = "us-east-1"
    AWS_SMS_ORIGINATION_IDENTITY: str = ""

    # Identity tokens
    OTP_AUTH_JWT_PRIVATE_KEY: str = ""
    JWT_SIGNING_KEY_ID: str = "crew-auth-1"
    OTP_AUTH_TOKEN_ISSUER: str = "crew-auth"
    OTP_AUTH_TOKEN_AUDIENCE: str = "crew-api"
    OTP_AUTH_TOKEN_EXPIRY_SECONDS: int = 3600

    # Logging
    LOG_JSON: bool = True
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = settings.SECRET_KEY

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = settings.DEBUG

ALLOWED_HOSTS = [h.strip() for h in settings.ALLOWED_HOSTS.split(",") if h.strip()]

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Local apps
    "apps.core",
    "apps.accounts",
    "apps.otp",
    "apps.sms",
]

MIDDLEWARE = [
    "apps.core.middleware.RequestContextMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# Database
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": settings.DATABASE_NAME,
        "USER": settings.DATABASE_USER,
        "PASSWORD": settings.DATABASE_PASSWORD,
        "HOST": settings.DATABASE_HOST,
        "PORT": settings.DATABASE_PORT,
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# One-time login codes
OTP_CODE_PEPPER = settings.OTP_CODE_PEPPER
OTP_CODE_LENGTH = settings.OTP_CODE_LENGTH
OTP_CODE_TTL_SECONDS = settings.OTP_CODE_TTL_SECONDS
OTP_SEND_COOLDOWN_SECONDS = settings.OTP_SEND_COOLDOWN_SECONDS
OTP_MAX_ATTEMPTS = settings.OTP_MAX_ATTEMPTS
OTP_DEFAULT_REGION = settings.OTP_DEFAULT_REGION
OTP_SMS_APP_NAME = settings.OTP_SMS_APP_NAME

# SMS delivery ("console" logs codes locally, "aws" sends via End User Messaging)
SMS_BACKEND = settings.SMS_BACKEND
AWS_SMS_REGION = settings.AWS_SMS_REGION
AWS_SMS_ORIGINATION_IDENTITY = settings.AWS_SMS_ORIGINATION_IDENTITY

# Identity tokens (RS256)
OTP_AUTH_JWT_PRIVATE_KEY = settings.OTP_AUTH_JWT_PRIVATE_KEY
JWT_SIGNING_KEY_ID = settings.JWT_SIGNING_KEY_ID
OTP_AUTH_TOKEN_ISSUER = settings.OTP_AUTH_TOKEN_ISSUER
OTP_AUTH_TOKEN_AUDIENCE = settings.OTP_AUTH_TOKEN_AUDIENCE
OTP_AUTH_TOKEN_EXPIRY_SECONDS = settings.OTP_AUTH_TOKEN_EXPIRY_SECONDS

# Logging (configured by apps.core on startup)
LOG_JSON = settings.LOG_JSON
LOG_LEVEL = settings.LOG_LEVEL
