"""
Local development settings.

Extends base settings with development-friendly defaults.
"""

from .base import *  # noqa: F403
from .base import settings

DEBUG = True
ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

# Codes are printed to the console instead of texted
SMS_BACKEND = "console"
OTP_CODE_PEPPER = settings.OTP_CODE_PEPPER or "dev_pepper_change_me"

LOG_JSON = False
LOG_LEVEL = "DEBUG"
