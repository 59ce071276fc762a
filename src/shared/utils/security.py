"""
Security Utilities

Share-token generation and JWT session management.

Share Tokens:
=============
Profiles and share links are opened by an unguessable capability token:

    - 16 characters drawn with `secrets` (CSPRNG)
    - Alphabet of 55 symbols without the look-alikes 0 O 1 l I i o
    - 55^16 ≈ 2^92 possible tokens

    Example: "Hk7mPq2RxWv9NbT4"

The format check runs before any storage lookup, so malformed tokens never
cost a database round-trip.

JWT Tokens:
===========
Uses PyJWT for session token creation and validation.

Usage:
======
    from src.shared.utils.security import SecurityUtils, generate_share_token

    token = generate_share_token()
    SecurityUtils.is_valid_token_format(token)   # True

    jwt_token = SecurityUtils.create_access_token(
        data={"sub": "dev-user"},
        secret_key="secret",
        expires_delta=timedelta(hours=1)
    )
    payload = SecurityUtils.decode_access_token(jwt_token, "secret")
"""

from datetime import datetime, timedelta, timezone
import re
import secrets
from typing import Any, Optional

import jwt


# ═══════════════════════════════════════════════════════════════════════════════
# SHARE TOKEN FORMAT
# ═══════════════════════════════════════════════════════════════════════════════

SHARE_TOKEN_ALPHABET = "23456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz"
SHARE_TOKEN_LENGTH = 16

# Anything longer is rejected before the pattern is even tried
MAX_TOKEN_INPUT_LENGTH = 100

_TOKEN_PATTERN = re.compile(rf"^[{SHARE_TOKEN_ALPHABET}]{{{SHARE_TOKEN_LENGTH}}}$")


def generate_share_token() -> str:
    """
    Generate a fresh share token.

    Returns:
        16-character token from SHARE_TOKEN_ALPHABET
    """
    return "".join(secrets.choice(SHARE_TOKEN_ALPHABET) for _ in range(SHARE_TOKEN_LENGTH))


class SecurityUtils:
    """
    Security utilities for share links and authentication.

    Provides:
    - Share token generation and format validation
    - JWT token creation and validation
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # SHARE TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    generate_share_token = staticmethod(generate_share_token)

    @staticmethod
    def is_valid_token_format(token: Any) -> bool:
        """
        Check the shape of a share token without touching storage.

        Args:
            token: Candidate token from the URL

        Returns:
            True only for a str of exactly 16 alphabet characters
        """
        if not isinstance(token, str) or len(token) > MAX_TOKEN_INPUT_LENGTH:
            return False
        return _TOKEN_PATTERN.fullmatch(token) is not None

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create JWT access token.

        Args:
            data: Payload data to encode (e.g., sub, email)
            secret_key: Secret key for signing
            expires_delta: Token expiration time (default: 7 days)
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()
        now = datetime.now(timezone.utc)

        to_encode.update({
            "exp": now + (expires_delta or timedelta(days=7)),
            "iat": now,
        })

        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
        audience: Optional[str] = None,
    ) -> dict:
        """
        Decode and verify JWT token.

        Args:
            token: JWT token string
            secret_key: Secret key used for signing
            algorithm: JWT algorithm (default: HS256)
            audience: Expected "aud" claim; not checked when empty

        Returns:
            Decoded token payload

        Raises:
            ValueError: If token is expired or invalid

        Example:
            try:
                payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
            except ValueError as e:
                raise AuthenticationError(str(e))
        """
        options = {} if audience else {"verify_aud": False}
        try:
            return jwt.decode(
                token,
                secret_key,
                algorithms=[algorithm],
                audience=audience or None,
                options=options,
            )
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")
