"""Bearer token identity for API routes.

Tokens are HS256 JWTs signed with ``settings.jwt_secret`` (the Supabase JWT
secret); the ``sub`` claim is the user id. Identity is optional: requests
without a valid token are served with ``user_id=None``.
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger

from leadscout.config import settings

security = HTTPBearer(auto_error=False)


@dataclass
class AuthUser:
    """Authenticated user from JWT token."""

    user_id: str
    email: Optional[str] = None


def _b64decode(segment: str) -> bytes:
    padding = 4 - len(segment) % 4
    if padding != 4:
        segment += "=" * padding
    return base64.urlsafe_b64decode(segment)


def verify_token(token: str, secret: Optional[str] = None) -> Optional[AuthUser]:
    """Verify an HS256 JWT and return its user, or None if invalid or expired."""
    secret = secret or settings.jwt_secret
    parts = token.split(".")
    if len(parts) != 3:
        return None

    header_b64, payload_b64, signature_b64 = parts
    expected_signature = hmac.new(
        secret.encode(),
        f"{header_b64}.{payload_b64}".encode(),
        hashlib.sha256,
    ).digest()
    expected_signature_b64 = base64.urlsafe_b64encode(expected_signature).rstrip(b"=")
    if not hmac.compare_digest(signature_b64.encode(), expected_signature_b64):
        return None

    try:
        payload = json.loads(_b64decode(payload_b64))
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None

    exp = payload.get("exp")
    if exp is not None:
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            return None
        if exp < time.time():
            return None

    user_id = payload.get("sub")
    if not user_id:
        return None
    return AuthUser(user_id=str(user_id), email=payload.get("email"))


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthUser]:
    """Dependency resolving the bearer token to a user, if one was sent."""
    if credentials is None:
        return None
    user = verify_token(credentials.credentials)
    if user is None:
        logger.debug("Ignoring invalid bearer token")
    return user
