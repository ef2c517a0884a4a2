"""
AWS End User Messaging SMS client wrapper.

Uses boto3 pinpoint-sms-voice-v2 API to send SMS messages.
"""

from functools import lru_cache
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings

from apps.core.logging import get_logger, mask_phone

logger = get_logger(__name__)

# The request handler waits on this call, so keep it short
CONNECT_TIMEOUT = 3
READ_TIMEOUT = 5


class SMSError(Exception):
    """Exception raised when SMS sending fails."""

    pass


@lru_cache(maxsize=1)
def get_sms_client() -> Any:
    """
    Get AWS SMS client (pinpoint-sms-voice-v2).

    Uses lru_cache to reuse the client instance.
    Credentials come from the environment or the task IAM role.
    """
    return boto3.client(
        "pinpoint-sms-voice-v2",
        region_name=settings.AWS_SMS_REGION,
        config=Config(
            connect_timeout=CONNECT_TIMEOUT,
            read_timeout=READ_TIMEOUT,
            retries={"max_attempts": 2},
        ),
    )


def send_sms(phone_number: str, message: str) -> str | None:
    """
    Send an SMS message to a phone number.

    Args:
        phone_number: E.164 format phone number (e.g., +972546432705)
        message: The message body to send

    Returns:
        The AWS message ID

    Raises:
        SMSError: If sending fails
    """
    if not settings.AWS_SMS_ORIGINATION_IDENTITY:
        logger.error("sms_origination_identity_missing")
        raise SMSError("SMS service not configured")

    client = get_sms_client()

    try:
        response = client.send_text_message(
            DestinationPhoneNumber=phone_number,
            OriginationIdentity=settings.AWS_SMS_ORIGINATION_IDENTITY,
            MessageBody=message,
            MessageType="TRANSACTIONAL",
        )
    except ClientError as e:
        error = e.response.get("Error", {})
        logger.error(
            "sms_send_client_error",
            error_code=error.get("Code", "Unknown"),
            error_message=error.get("Message", str(e)),
            phone_suffix=mask_phone(phone_number),
        )
        raise SMSError(f"Failed to send SMS: {error.get('Message', str(e))}") from e
    except BotoCoreError as e:
        logger.error("sms_send_botocore_error", error=str(e), phone_suffix=mask_phone(phone_number))
        raise SMSError(f"SMS service error: {e}") from e

    message_id = response.get("MessageId")
    logger.info("sms_sent", phone_suffix=mask_phone(phone_number), message_id=message_id)
    return message_id


def send_otp_message(phone_number: str, otp_code: str, app_name: str) -> str | None:
    """
    Send a login code message.

    Args:
        phone_number: E.164 format phone number
        otp_code: The plaintext code
        app_name: App name for the message

    Returns:
        The AWS message ID
    """
    message = f"Your {app_name} login code is: {otp_code}"
    return send_sms(phone_number, message)
