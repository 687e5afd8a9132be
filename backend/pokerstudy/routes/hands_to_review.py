"""
Poker Study Backend — Hands-To-Review Route Handlers
=====================================================

What:  Hands posted for discussion: list, create, comment, rate, archive, delete.
Who:   Called by the "Hands to review" view.

Delete is gated: without `?confirm=true` the server answers 428 with the
dialog the client should show, and nothing is deleted.
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.confirmation import DELETE_HAND_DIALOG, resolve_confirmation
from pokerstudy.database import get_db_session
from pokerstudy.exceptions import ConfirmationRequiredError
from pokerstudy.schemas.common import ErrorResponse
from pokerstudy.schemas.hand_to_review import (
    HandToReviewCreate,
    HandToReviewResponse,
    HandToReviewUpdate,
)
from pokerstudy.services.hand_review_service import hand_review_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/hands-to-review", tags=["Hands to review"])


@router.get("", response_model=List[HandToReviewResponse], summary="List hands, newest first")
async def list_hands(
    status_filter: Optional[str] = Query(
        default=None,
        alias="status",
        description="'open' or 'archived'; any other value returns every hand",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[HandToReviewResponse]:
    return await hand_review_service.list_hands(db, status=status_filter)


@router.get(
    "/{hand_id}",
    response_model=HandToReviewResponse,
    responses={404: {"description": "Hand not found", "model": ErrorResponse}},
)
async def get_hand(
    hand_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> HandToReviewResponse:
    return await hand_review_service.get_hand(db, hand_id)


@router.post(
    "",
    response_model=HandToReviewResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Hand text is required", "model": ErrorResponse}},
    summary="Post a hand for review",
)
async def create_hand(
    data: HandToReviewCreate,
    db: AsyncSession = Depends(get_db_session),
) -> HandToReviewResponse:
    return await hand_review_service.create_hand(db, data)


@router.put(
    "/{hand_id}",
    response_model=HandToReviewResponse,
    responses={404: {"description": "Hand not found", "model": ErrorResponse}},
    summary="Rate, comment on, or edit a hand",
    description=(
        "Performs one action per request, in this priority order: rateHand, "
        "addComment, deleteCommentIndex, then title/handText/status updates."
    ),
)
async def update_hand(
    hand_id: UUID,
    data: HandToReviewUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> HandToReviewResponse:
    return await hand_review_service.update_hand(db, hand_id, data)


@router.delete(
    "/{hand_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"description": "Hand not found", "model": ErrorResponse},
        428: {"description": "Confirmation required; details carry the dialog", "model": ErrorResponse},
    },
    summary="Delete a hand (requires confirm=true)",
)
async def delete_hand(
    hand_id: UUID,
    confirm: bool = Query(default=False, description="Set after the user confirmed the dialog"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    async def on_confirm() -> bool:
        return await hand_review_service.delete_hand(db, hand_id)

    deleted = await resolve_confirmation(confirm, on_confirm)
    if not deleted:
        logger.info("Delete of hand %s awaiting confirmation", hand_id)
        raise ConfirmationRequiredError(dialog=DELETE_HAND_DIALOG.to_dict())
    return Response(status_code=status.HTTP_204_NO_CONTENT)
