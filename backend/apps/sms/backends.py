"""
SMS backends - pluggable delivery of login codes.

ConsoleSMSBackend: Logs the code (local development only)
AWSSMSBackend: Sends through AWS End User Messaging (production)

Backends report failure by returning False; they never raise for a
failed delivery.
"""

from abc import ABC, abstractmethod

from django.conf import settings

from apps.core.logging import get_logger, mask_phone
from apps.sms.aws_client import SMSError, send_otp_message

logger = get_logger(__name__)


class SMSBackend(ABC):
    """Abstract base class for login code delivery."""

    @abstractmethod
    def send_code(self, destination: str, code: str) -> bool:
        """Send code to an E.164 destination. Returns True on success."""


class ConsoleSMSBackend(SMSBackend):
    """
    Local development backend.

    Writes the plaintext code to the log so it can be typed into the
    client. Never configure this in production.
    """

    def send_code(self, destination: str, code: str) -> bool:
        logger.warning("dev_sms_code", destination=destination, code=code, backend="console")
        return True


class AWSSMSBackend(SMSBackend):
    """Sends codes as transactional SMS through pinpoint-sms-voice-v2."""

    def __init__(self, app_name: str) -> None:
        self.app_name = app_name

    def send_code(self, destination: str, code: str) -> bool:
        try:
            send_otp_message(destination, code, app_name=self.app_name)
        except SMSError as e:
            logger.warning("sms_code_delivery_failed", phone_suffix=mask_phone(destination), error=str(e))
            return False
        return True


def get_sms_backend() -> SMSBackend:
    """
    Get the configured SMS backend.

    Uses SMS_BACKEND setting: 'console' or 'aws'
    """
    backend_type = getattr(settings, "SMS_BACKEND", "console")

    if backend_type == "aws":
        return AWSSMSBackend(app_name=settings.OTP_SMS_APP_NAME)
    if backend_type == "console":
        return ConsoleSMSBackend()

    raise ValueError(f"Unknown SMS_BACKEND: {backend_type!r}")
