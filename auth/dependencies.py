"""
FastAPI dependencies for authentication.

Provides ``db_session``, the service accessors and ``require_auth``, the
access-control gate used across all protected routes.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenService
from auth.service import AuthService
from database.session import get_db_session

logger = logging.getLogger(__name__)

# auto_error=False so a missing token gets the gate's own 401 message.
_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_token_service(request: Request) -> TokenService:
    return request.app.state.auth_service.tokens


async def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """
    Verify the Bearer token and attach its claims to ``request.state.user``.

    Raises ``HTTPException(401)`` with the rejection reason otherwise.
    """
    check = tokens.verify(credentials.credentials if credentials else None)
    if not check.ok:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, check.rejection.value)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=check.rejection.value,
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.user = check.claims
    return check.claims
