"""
Keyed hashing of login codes.

Codes are stored as HMAC-SHA256(pepper, "<phone key>:<code>"). The phone key
separates domains between records, so no per-record salt is stored. Without
the pepper a leaked table cannot be brute-forced offline even though the
code space is small.

The pepper is read once per process by get_code_hasher(). Rotating it
invalidates every in-flight code, which is acceptable for codes that live
a few minutes.
"""

import hashlib
import hmac
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


class CodeHasher:
    """HMAC-SHA256 hasher bound to a single pepper."""

    __slots__ = ("_pepper",)

    def __init__(self, pepper: str) -> None:
        if not pepper:
            raise ImproperlyConfigured("OTP_CODE_PEPPER is not configured")
        self._pepper = pepper.encode("utf-8")

    def hash(self, key: str, code: str) -> str:
        """Return the hex digest for (key, code)."""
        message = f"{key}:{code}".encode("utf-8")
        return hmac.new(self._pepper, message, hashlib.sha256).hexdigest()

    def matches(self, key: str, code: str, expected_hash: str) -> bool:
        """Constant-time check of a submitted code against a stored hash."""
        return hmac.compare_digest(self.hash(key, code), expected_hash)


@lru_cache(maxsize=1)
def get_code_hasher() -> CodeHasher:
    """
    Get the process-wide CodeHasher.

    Uses lru_cache so the pepper is loaded exactly once.
    """
    return CodeHasher(settings.OTP_CODE_PEPPER)
