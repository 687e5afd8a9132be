"""
Poker Study Backend — Reviewer Route Handlers
==============================================

What:  GET lists reviewer names; POST registers one. Registering an existing
       name is not an error: it answers 200 instead of 201.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.database import get_db_session
from pokerstudy.schemas.common import ErrorResponse
from pokerstudy.schemas.reviewer import ReviewerCreate, ReviewerResponse
from pokerstudy.services.reviewer_service import reviewer_service

router = APIRouter(prefix="/api/reviewers", tags=["Reviewers"])


@router.get("", response_model=List[str], summary="List reviewer names")
async def list_reviewers(db: AsyncSession = Depends(get_db_session)) -> List[str]:
    return await reviewer_service.list_names(db)


@router.post(
    "",
    response_model=ReviewerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"description": "Name already registered", "model": ReviewerResponse},
        400: {"description": "Name is required", "model": ErrorResponse},
    },
    summary="Register a reviewer name",
)
async def register_reviewer(
    data: ReviewerCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ReviewerResponse:
    name, created = await reviewer_service.register(db, data.name)
    if not created:
        response.status_code = status.HTTP_200_OK
    return ReviewerResponse(name=name)
