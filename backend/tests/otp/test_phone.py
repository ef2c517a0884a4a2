"""
Tests for phone canonicalization.
"""

import pytest

from apps.otp.exceptions import EmptyPhoneInputError, InvalidPhoneFormatError
from apps.otp.phone import CanonicalPhone, canonicalize


class TestCanonicalize:
    """Tests for canonicalize()."""

    @pytest.mark.parametrize(
        "raw",
        [
            "054-643-2705",
            "0546432705",
            "+972 54 643 2705",
            "+972546432705",
            "972546432705",
            "00972546432705",
            "  054 643 2705  ",
        ],
    )
    def test_spellings_of_one_number_share_a_key(self, raw):
        """Every accepted spelling addresses the same record."""
        phone = canonicalize(raw)

        assert phone == CanonicalPhone(e164="+972546432705", key="972546432705")

    def test_key_is_digits_only(self):
        phone = canonicalize("+972546432705")

        assert phone.key.isdigit()
        assert phone.plus_key == "+972546432705"

    def test_explicit_country_code_overrides_region(self):
        phone = canonicalize("+1 650 253 0000")

        assert phone.key == "16502530000"

    def test_default_region_argument(self):
        phone = canonicalize("(650) 253-0000", default_region="US")

        assert phone.e164 == "+16502530000"

    def test_default_region_from_settings(self, settings):
        settings.OTP_DEFAULT_REGION = "US"

        assert canonicalize("650-253-0000").key == "16502530000"

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_input(self, raw):
        with pytest.raises(EmptyPhoneInputError):
            canonicalize(raw)

    @pytest.mark.parametrize("raw", ["abc", "123", "+999 1234", "054-643"])
    def test_invalid_input(self, raw):
        with pytest.raises(InvalidPhoneFormatError):
            canonicalize(raw)
