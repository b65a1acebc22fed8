"""Bearer access tokens (JWT).

Identity management lives elsewhere; this module only issues and verifies
the signed tokens that guard the write and listing endpoints.
"""

import time
from typing import Any

import jwt

from niente.config import get_settings
from niente.domain.exceptions import AuthenticationError


def build_access_token(subject: str, expires_in_minutes: int | None = None) -> str:
    """Issue a signed access token for ``subject``."""
    settings = get_settings()
    issued_at = int(time.time())
    minutes = expires_in_minutes if expires_in_minutes is not None else settings.access_token_expire_minutes

    payload = {
        "sub": subject,
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + minutes * 60,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify ``token`` and return its payload."""
    raw = (token or "").strip()
    if not raw:
        raise AuthenticationError("Access token is empty.")

    settings = get_settings()
    try:
        payload = jwt.decode(raw, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid access token.") from exc

    if str(payload.get("type") or "").lower() != "access":
        raise AuthenticationError("Token is not an access token.")
    if not str(payload.get("sub") or "").strip():
        raise AuthenticationError("Token has no subject.")

    return payload
