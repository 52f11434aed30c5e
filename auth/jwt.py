"""
JWT token creation and verification.

Tokens are compact HS256 JWS strings (``header.payload.signature``)
carrying ``{_id, email, name, iat, exp}``. The signing secret is handed
in by the caller; :class:`TokenService` binds it once at startup.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_EXPIRY_SECONDS = 7 * 24 * 60 * 60


class TokenRejection(str, Enum):
    MISSING = "No token provided"
    INVALID = "Invalid token"
    EXPIRED = "Token expired"
    FAILED = "Authentication failed"


@dataclass(frozen=True)
class TokenCheck:
    claims: Optional[Dict[str, Any]] = None
    rejection: Optional[TokenRejection] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None


def create_token(
    claims: Dict[str, Any],
    secret: str,
    ttl_seconds: int = DEFAULT_EXPIRY_SECONDS,
    now: Optional[int] = None,
) -> str:
    """Sign ``claims`` with an issued-at time and an expiry ``ttl_seconds`` later."""
    issued_at = int(time.time()) if now is None else int(now)
    payload = dict(claims)
    payload["iat"] = issued_at
    payload["exp"] = issued_at + ttl_seconds
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_token(token: Optional[str], secret: str) -> TokenCheck:
    """
    Verify ``token`` and return its claims.

    Never raises: every failure is reported as a :class:`TokenRejection`.
    """
    if not token:
        return TokenCheck(rejection=TokenRejection.MISSING)
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        return TokenCheck(rejection=TokenRejection.EXPIRED)
    except JWTError as exc:
        logger.debug("Rejected token: %s", exc)
        return TokenCheck(rejection=TokenRejection.INVALID)

    if not payload.get("_id"):
        return TokenCheck(rejection=TokenRejection.FAILED)
    return TokenCheck(claims=payload)


class TokenService:
    """Issuer + verifier bound to one secret and lifetime."""

    def __init__(self, secret: str, ttl_seconds: int = DEFAULT_EXPIRY_SECONDS) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self.ttl_seconds = ttl_seconds

    def issue(self, claims: Dict[str, Any], now: Optional[int] = None) -> str:
        return create_token(claims, self._secret, self.ttl_seconds, now=now)

    def verify(self, token: Optional[str]) -> TokenCheck:
        return decode_token(token, self._secret)
