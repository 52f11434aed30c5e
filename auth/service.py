"""
Signup and login orchestration.

Each step validates locally and returns the first failure as an
:class:`AuthOutcome`; only the route layer turns outcomes into HTTP
responses. Store failures other than a duplicate email propagate to the
application's error boundary.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenService
from auth.models import AuthOutcome, ErrorKind, build_claims, public_user
from auth.password import DEFAULT_ROUNDS, hash_password, hash_password_async, verify_password_async
from database.helpers import create_user, find_user_by_email

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6

MSG_ALL_FIELDS = "All fields are required"
MSG_BAD_EMAIL = "Invalid email format"
MSG_SHORT_PASSWORD = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
MSG_USER_EXISTS = "User already exists"
MSG_CREDENTIALS_REQUIRED = "Email and password are required"
MSG_BAD_CREDENTIALS = "Invalid email or password"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(self, tokens: TokenService, hash_rounds: int = DEFAULT_ROUNDS) -> None:
        self.tokens = tokens
        self.hash_rounds = hash_rounds
        # Unknown emails are checked against this so every login pays for one bcrypt.
        self._dummy_digest = hash_password("cohort-tools-unknown-user", hash_rounds)

    async def signup(
        self,
        session: AsyncSession,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str],
    ) -> AuthOutcome[Dict[str, Any]]:
        if not email or not password or not name:
            return AuthOutcome.failure(ErrorKind.VALIDATION, MSG_ALL_FIELDS)

        email = normalize_email(email)
        if not EMAIL_RE.match(email):
            return AuthOutcome.failure(ErrorKind.VALIDATION, MSG_BAD_EMAIL)

        if len(password) < MIN_PASSWORD_LENGTH:
            return AuthOutcome.failure(ErrorKind.VALIDATION, MSG_SHORT_PASSWORD)

        if await find_user_by_email(session, email) is not None:
            return AuthOutcome.failure(ErrorKind.VALIDATION, MSG_USER_EXISTS)

        digest = await hash_password_async(password, self.hash_rounds)
        try:
            user = await create_user(session, email=email, password_hash=digest, name=name)
        except IntegrityError:
            # A concurrent signup won the race for this email.
            logger.info("Duplicate signup rejected by unique index: %s", email)
            return AuthOutcome.failure(ErrorKind.VALIDATION, MSG_USER_EXISTS)

        token = self.tokens.issue(build_claims(user))
        logger.info("Registered user %s (%s)", user.email, user.user_id)
        return AuthOutcome.success({"user": public_user(user), "authToken": token})

    async def login(
        self,
        session: AsyncSession,
        email: Optional[str],
        password: Optional[str],
    ) -> AuthOutcome[Dict[str, Any]]:
        if not email or not password:
            return AuthOutcome.failure(ErrorKind.VALIDATION, MSG_CREDENTIALS_REQUIRED)

        user = await find_user_by_email(session, normalize_email(email))
        digest = user.password_hash if user is not None else self._dummy_digest
        matched = await verify_password_async(password, digest)
        if user is None or not matched:
            return AuthOutcome.failure(ErrorKind.AUTHENTICATION, MSG_BAD_CREDENTIALS)

        token = self.tokens.issue(build_claims(user))
        logger.info("Login: %s (%s)", user.email, user.user_id)
        return AuthOutcome.success({"user": public_user(user), "authToken": token})
