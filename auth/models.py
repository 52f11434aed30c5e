"""Auth-facing types: the ``User`` model, token claim sets and tagged
outcomes returned by the signup / login orchestration.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from database.models import User

__all__ = ["AuthOutcome", "ErrorKind", "User", "build_claims", "public_user"]

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"


@dataclass(frozen=True)
class AuthOutcome(Generic[T]):
    """Success with a value, or failure with a kind and a client-safe message."""

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "AuthOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "AuthOutcome[T]":
        return cls(error=kind, message=message)


def build_claims(user: User) -> Dict[str, Any]:
    """Claim set embedded in a token, taken from the record at issue time."""
    return {"_id": str(user.user_id), "email": user.email, "name": user.name}


def public_user(user: User) -> Dict[str, Any]:
    """User fields safe to return to a client (never the digest)."""
    return {"_id": str(user.user_id), "email": user.email, "name": user.name}
