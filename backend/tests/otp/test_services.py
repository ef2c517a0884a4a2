"""
Tests for phone login services.
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from django.utils import timezone

from apps.accounts.constants import UserRole
from apps.accounts.tokens import decode_identity_token
from apps.otp.exceptions import (
    CodeDeliveryError,
    EmptyPhoneInputError,
    InvalidCodeError,
    InvalidOrExpiredCodeError,
    InvalidPhoneFormatError,
    MissingParamsError,
    ResendTooSoonError,
    UserNotRegisteredError,
)
from apps.otp.models import AuthCode
from apps.otp.services import (
    cleanup_expired_codes,
    get_code_issuer,
    get_code_verifier,
    request_login_code,
    verify_login_code,
)
from tests.accounts.factories import AppUserFactory, PhoneIndexFactory
from tests.otp.factories import AuthCodeFactory

E164 = "+972546432705"
KEY = "972546432705"


@pytest.mark.django_db
class TestRequestLoginCode:
    """Tests for request_login_code()."""

    def test_sends_code_to_canonical_number(self, sms_outbox):
        record = request_login_code("054-643-2705")

        assert record.key == KEY
        assert sms_outbox.last_code_for(E164) is not None
        assert AuthCode.objects.filter(pk=KEY).exists()

    def test_spellings_share_cooldown(self, sms_outbox):
        """Different spellings of one number address one record."""
        now = timezone.now()
        request_login_code("054-643-2705", now=now)

        with pytest.raises(ResendTooSoonError):
            request_login_code("+972 54 643 2705", now=now + timedelta(seconds=5))

    def test_resend_within_cooldown(self, sms_outbox):
        now = timezone.now()
        request_login_code(E164, now=now)

        with pytest.raises(ResendTooSoonError):
            request_login_code(E164, now=now + timedelta(seconds=30))

        assert len(sms_outbox.sent) == 1

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing_phone(self, raw, sms_outbox):
        with pytest.raises(MissingParamsError):
            request_login_code(raw)

    def test_whitespace_phone(self, sms_outbox):
        with pytest.raises(EmptyPhoneInputError):
            request_login_code("   ")

    def test_invalid_phone(self, sms_outbox):
        with pytest.raises(InvalidPhoneFormatError):
            request_login_code("not-a-phone")

        assert not sms_outbox.sent

    def test_delivery_failure(self, sms_outbox):
        sms_outbox.fail = True

        with pytest.raises(CodeDeliveryError):
            request_login_code(E164)

    def test_uses_settings(self, settings, sms_outbox):
        settings.OTP_CODE_LENGTH = 4
        settings.OTP_CODE_TTL_SECONDS = 120
        now = timezone.now()

        record = request_login_code(E164, now=now)

        assert len(sms_outbox.last_code_for(E164)) == 4
        assert record.expires_at == now + timedelta(seconds=120)


@pytest.mark.django_db
class TestVerifyLoginCode:
    """Tests for verify_login_code()."""

    def test_issues_token_for_indexed_user(self, sms_outbox, signing_key):
        entry = PhoneIndexFactory.create(key=KEY)
        request_login_code(E164)

        result = verify_login_code("054-643-2705", sms_outbox.last_code_for(E164))

        assert result.uid == entry.uid
        assert result.role == UserRole.EMPLOYEE
        claims = decode_identity_token(result.token)
        assert claims["uid"] == entry.uid
        assert claims["role"] == "employee"

    def test_legacy_user_without_index(self, sms_outbox, signing_key):
        user = AppUserFactory.create(phone=f"+{KEY}", role=UserRole.MANAGER)
        request_login_code(E164)

        result = verify_login_code(E164, sms_outbox.last_code_for(E164))

        assert result.uid == user.uid
        assert result.role == UserRole.MANAGER

    def test_unregistered_phone_burns_code(self, sms_outbox, signing_key):
        request_login_code(E164)
        code = sms_outbox.last_code_for(E164)

        with pytest.raises(UserNotRegisteredError):
            verify_login_code(E164, code)

        assert not AuthCode.objects.filter(pk=KEY).exists()

    @pytest.mark.parametrize("phone,code", [(None, "123456"), (E164, None), ("", ""), (E164, "")])
    def test_missing_params(self, phone, code):
        with pytest.raises(MissingParamsError):
            verify_login_code(phone, code)

    def test_no_pending_code(self):
        with pytest.raises(InvalidOrExpiredCodeError):
            verify_login_code(E164, "123456")

    def test_token_signing_not_configured(self, settings):
        """A missing signing key is an infrastructure failure, not an OTPError."""
        settings.OTP_AUTH_JWT_PRIVATE_KEY = ""
        PhoneIndexFactory.create(key=KEY)
        AuthCodeFactory.create(key=KEY, code="123456")

        with pytest.raises(ValueError, match="OTP_AUTH_JWT_PRIVATE_KEY"):
            verify_login_code(E164, "123456")


@pytest.mark.django_db
class TestLoginFlow:
    """End-to-end flows across request and verify."""

    def test_wrong_then_right_then_request_again(self, sms_outbox, signing_key):
        t0 = timezone.now()
        entry = PhoneIndexFactory.create(key=KEY)

        request_login_code(E164, now=t0)
        code = sms_outbox.last_code_for(E164)
        wrong = "000000" if code != "000000" else "111111"

        with pytest.raises(InvalidCodeError):
            verify_login_code(E164, wrong, now=t0 + timedelta(seconds=10))
        assert AuthCode.objects.get(pk=KEY).attempts == 1

        result = verify_login_code(E164, code, now=t0 + timedelta(seconds=20))
        assert result.uid == entry.uid
        assert not AuthCode.objects.filter(pk=KEY).exists()

        # Record was consumed, so the cooldown no longer applies
        request_login_code(E164, now=t0 + timedelta(seconds=20))
        assert len(sms_outbox.sent) == 2

    def test_resend_too_soon(self, sms_outbox):
        t0 = timezone.now()
        request_login_code(E164, now=t0)

        with pytest.raises(ResendTooSoonError):
            request_login_code(E164, now=t0 + timedelta(seconds=30))

    def test_new_code_invalidates_old(self, sms_outbox, signing_key):
        PhoneIndexFactory.create(key=KEY)
        t0 = timezone.now()
        with patch("apps.otp.issuer.generate_otp_code", side_effect=["111111", "222222"]):
            first = request_login_code(E164, now=t0)
            second = request_login_code(E164, now=t0 + timedelta(seconds=61))

        assert second.code_hash != first.code_hash
        assert second.attempts == 0
        with pytest.raises(InvalidCodeError):
            verify_login_code(E164, "111111", now=t0 + timedelta(seconds=62))
        verify_login_code(E164, "222222", now=t0 + timedelta(seconds=63))


class TestComponentFactories:
    """Tests that services build components from settings."""

    def test_issuer_settings(self, settings):
        settings.OTP_CODE_LENGTH = 8
        settings.OTP_CODE_TTL_SECONDS = 600
        settings.OTP_SEND_COOLDOWN_SECONDS = 30

        with patch("apps.otp.services.get_sms_backend") as mock_backend:
            issuer = get_code_issuer()

        assert issuer.code_length == 8
        assert issuer.ttl == timedelta(seconds=600)
        assert issuer.cooldown == timedelta(seconds=30)
        assert issuer.sms_backend is mock_backend.return_value

    def test_verifier_settings(self, settings):
        settings.OTP_MAX_ATTEMPTS = 3

        assert get_code_verifier().max_attempts == 3


@pytest.mark.django_db
class TestCleanupExpiredCodes:
    """Tests for cleanup_expired_codes()."""

    def test_deletes_only_past_delete_after(self):
        now = timezone.now()
        AuthCodeFactory.create(created_at=now - timedelta(hours=1))
        AuthCodeFactory.create(created_at=now - timedelta(hours=2))
        AuthCodeFactory.create(created_at=now)

        assert cleanup_expired_codes(now) == 2
        assert AuthCode.objects.count() == 1

    def test_nothing_to_delete(self):
        assert cleanup_expired_codes() == 0
