"""JWT authentication middleware and utilities."""

import json
from enum import Enum
from typing import Any

import jwt
from jwt import PyJWK

from src.core.config import get_settings
from src.schemas.auth import TokenPayload


class AuthErrorCode(str, Enum):
    """Authentication error codes."""

    UNAUTHORIZED = "UNAUTHORIZED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    MISSING_EMAIL = "MISSING_EMAIL"


class AuthError(Exception):
    """Authentication error with specific error code.

    Raised when JWT validation fails for any reason.
    The error code indicates the specific failure reason.
    """

    def __init__(self, message: str, code: AuthErrorCode) -> None:
        """Initialize authentication error.

        Args:
            message: Human-readable error description.
            code: Specific error code for programmatic handling.
        """
        self.message = message
        self.code = code
        super().__init__(message)


def get_signing_key() -> Any:
    """Load the verification key from settings.

    HS* algorithms use the configured value as the shared secret; every
    other algorithm expects a JWK JSON document holding the public key.

    Returns:
        Key usable by ``jwt.decode``.
    """
    settings = get_settings()
    key_material = settings.jwt_signing_key

    if not key_material:
        raise AuthError(
            "Signing key not configured",
            AuthErrorCode.INVALID_TOKEN,
        )

    if settings.uses_shared_secret:
        return key_material

    try:
        jwk_data = json.loads(key_material)
    except json.JSONDecodeError as e:
        raise AuthError(
            f"Invalid signing key JWK format: {e}",
            AuthErrorCode.INVALID_TOKEN,
        ) from e

    return PyJWK.from_dict(jwk_data, algorithm=settings.jwt_algorithm).key


def decode_jwt(token: str) -> TokenPayload:
    """Decode and validate a JWT token.

    Validates the token signature, expiration, and structure.

    Args:
        token: The JWT token string to decode.

    Returns:
        TokenPayload: Validated token payload.

    Raises:
        AuthError: If token is invalid, expired, or has wrong signature.
    """
    settings = get_settings()

    try:
        key = get_signing_key()

        payload: dict[str, Any] = jwt.decode(
            token,
            key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={
                "verify_signature": True,
                "verify_exp": True,
                "verify_iat": True,
                "verify_aud": settings.jwt_audience is not None,
                "require": ["exp", "iat", "sub"],
            },
        )

        return TokenPayload(
            sub=payload["sub"],
            email=payload.get("email"),
            role=payload.get("role"),
            exp=payload["exp"],
            iat=payload["iat"],
            aud=payload.get("aud"),
            iss=payload.get("iss"),
        )

    except AuthError:
        raise

    except jwt.ExpiredSignatureError as e:
        raise AuthError(
            "Token has expired",
            AuthErrorCode.TOKEN_EXPIRED,
        ) from e

    except jwt.InvalidSignatureError as e:
        raise AuthError(
            "Invalid token signature",
            AuthErrorCode.INVALID_SIGNATURE,
        ) from e

    except jwt.DecodeError as e:
        raise AuthError(
            f"Invalid token format: {e}",
            AuthErrorCode.INVALID_TOKEN,
        ) from e

    except jwt.MissingRequiredClaimError as e:
        raise AuthError(
            f"Token missing required claim: {e}",
            AuthErrorCode.INVALID_TOKEN,
        ) from e

    except Exception as e:
        # Any other PyJWT or key error
        raise AuthError(
            f"Token validation failed: {e}",
            AuthErrorCode.INVALID_TOKEN,
        ) from e


def verify_principal(token: str) -> TokenPayload:
    """Decode a token and require the email claim the API keys owners on.

    Raises:
        AuthError: If the token is invalid or carries no email.
    """
    payload = decode_jwt(token)
    if not payload.email:
        raise AuthError(
            "Token missing email claim",
            AuthErrorCode.MISSING_EMAIL,
        )
    return payload
