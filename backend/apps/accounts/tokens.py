"""
Identity tokens issued after a successful phone login.

Tokens are RS256 JWTs carrying the user's uid and role. Downstream services
verify them with the public key derived from OTP_AUTH_JWT_PRIVATE_KEY.
"""

import time
from functools import lru_cache
from typing import Any

import jwt
from django.conf import settings

from apps.accounts.constants import UserRole


def get_signing_private_key() -> str:
    """
    Get the RSA private key for JWT signing.

    Handles escaped newlines from environment variables.

    Raises:
        ValueError: If OTP_AUTH_JWT_PRIVATE_KEY is not configured
    """
    private_key = settings.OTP_AUTH_JWT_PRIVATE_KEY
    if not private_key:
        raise ValueError("OTP_AUTH_JWT_PRIVATE_KEY is not configured")

    if "\\n" in private_key:
        private_key = private_key.replace("\\n", "\n")

    return private_key


@lru_cache(maxsize=1)
def get_signing_public_key() -> str:
    """
    Derive public key from private key for JWT verification.

    Cached since key derivation is expensive and key doesn't change.
    """
    from cryptography.hazmat.primitives import serialization
    from cryptography.hazmat.primitives.serialization import load_pem_private_key

    private_key = load_pem_private_key(get_signing_private_key().encode(), password=None)
    public_key_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return public_key_pem.decode()


def create_identity_token(uid: str, role: UserRole) -> str:
    """
    Create a signed identity token.

    Args:
        uid: AppUser uid (token subject)
        role: Resolved role, embedded as the "role" claim

    Returns:
        Signed JWT string
    """
    now = int(time.time())

    payload: dict[str, Any] = {
        "sub": uid,
        "uid": uid,
        "role": UserRole(role).value,
        "iss": settings.OTP_AUTH_TOKEN_ISSUER,
        "aud": settings.OTP_AUTH_TOKEN_AUDIENCE,
        "iat": now,
        "exp": now + settings.OTP_AUTH_TOKEN_EXPIRY_SECONDS,
    }

    return jwt.encode(
        payload,
        get_signing_private_key(),
        algorithm="RS256",
        headers={"kid": settings.JWT_SIGNING_KEY_ID},
    )


def decode_identity_token(token: str) -> dict[str, Any]:
    """
    Verify an identity token and return its claims.

    Raises:
        jwt.InvalidTokenError: If the signature, issuer, audience or expiry is invalid
    """
    return jwt.decode(
        token,
        get_signing_public_key(),
        algorithms=["RS256"],
        audience=settings.OTP_AUTH_TOKEN_AUDIENCE,
        issuer=settings.OTP_AUTH_TOKEN_ISSUER,
    )
