"""
Auth API routes — signup, login, verify.

Route prefix: /auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_auth_service, require_auth
from auth.models import AuthOutcome, ErrorKind
from auth.service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
}


# ── Request / response schemas ─────────────────────────────────────────

# Fields are optional so missing input is reported as a 400 with a
# message instead of a schema error.


class SignupRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


def _respond(outcome: AuthOutcome[Dict[str, Any]], success_status: int) -> JSONResponse:
    if outcome.ok:
        return JSONResponse(status_code=success_status, content=outcome.value)
    return JSONResponse(
        status_code=_STATUS_BY_KIND[outcome.error],
        content={"message": outcome.message},
    )


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    session: AsyncSession = Depends(db_session),
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Create a new user account and return it with a token."""
    outcome = await service.signup(session, req.email, req.password, req.name)
    return _respond(outcome, status.HTTP_201_CREATED)


@router.post("/login")
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Verify credentials and return a token."""
    outcome = await service.login(session, req.email, req.password)
    return _respond(outcome, status.HTTP_200_OK)


@router.get("/verify")
async def verify(claims: Dict[str, Any] = Depends(require_auth)) -> Dict[str, Any]:
    """Echo the claims of a token that passed the gate."""
    return {"user": claims}
