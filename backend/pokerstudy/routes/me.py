"""
Poker Study Backend — Claimed Name Route Handlers
==================================================

What:  Claim a display name, log in with it, check whether a name is taken,
       and read/write the owner's private improvement notes.
How:   The improvement-notes endpoints take HTTP Basic credentials
       (name:password) on every request; there is no session or token.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.database import get_db_session
from pokerstudy.exceptions import AuthenticationError, ValidationError
from pokerstudy.models.claimed_user import ClaimedUser
from pokerstudy.schemas.claimed_user import (
    ClaimedCheckResponse,
    ClaimedUserResponse,
    ClaimRequest,
    ImprovementNotes,
    LoginRequest,
)
from pokerstudy.schemas.common import ErrorResponse
from pokerstudy.services.claimed_user_service import claimed_user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/me", tags=["Claimed names"])

# auto_error=False: missing credentials go through AuthenticationError so the
# 401 body has the same shape as every other error
_basic = HTTPBasic(auto_error=False)


async def require_claimed_user(
    credentials: Optional[HTTPBasicCredentials] = Depends(_basic),
    db: AsyncSession = Depends(get_db_session),
) -> ClaimedUser:
    """Dependency resolving Basic credentials to the claimed user they belong to."""
    if credentials is None:
        raise AuthenticationError(
            message="Missing or invalid authorization. Use Basic auth with your name and password."
        )
    return await claimed_user_service.authenticate(db, credentials.username, credentials.password)


@router.post(
    "/claim",
    response_model=ClaimedUserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Name or password missing", "model": ErrorResponse},
        409: {"description": "Name already claimed", "model": ErrorResponse},
    },
)
async def claim_name(
    data: ClaimRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ClaimedUserResponse:
    user = await claimed_user_service.claim(db, data.name, data.password)
    return ClaimedUserResponse(name=user.name)


@router.post(
    "/login",
    response_model=ClaimedUserResponse,
    responses={401: {"description": "Invalid name or password", "model": ErrorResponse}},
)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ClaimedUserResponse:
    user = await claimed_user_service.login(db, data.name, data.password)
    return ClaimedUserResponse(name=user.name)


@router.get("/claimed", response_model=ClaimedCheckResponse)
async def is_claimed(
    name: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> ClaimedCheckResponse:
    if not (name or "").strip():
        raise ValidationError(message='Query parameter "name" is required.', field="name")
    return ClaimedCheckResponse(claimed=await claimed_user_service.is_name_claimed(db, name))


@router.get(
    "/improvement-notes",
    response_model=ImprovementNotes,
    responses={401: {"description": "Missing or invalid credentials", "model": ErrorResponse}},
)
async def get_improvement_notes(
    user: ClaimedUser = Depends(require_claimed_user),
) -> ImprovementNotes:
    return ImprovementNotes(content=user.improvement_notes or "")


@router.put(
    "/improvement-notes",
    response_model=ImprovementNotes,
    responses={401: {"description": "Missing or invalid credentials", "model": ErrorResponse}},
)
async def save_improvement_notes(
    data: ImprovementNotes,
    user: ClaimedUser = Depends(require_claimed_user),
    db: AsyncSession = Depends(get_db_session),
) -> ImprovementNotes:
    content = await claimed_user_service.set_improvement_notes(db, user, data.content)
    return ImprovementNotes(content=content)
