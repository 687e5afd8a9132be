"""
Poker Study Backend — Learning Route Handlers
==============================================

What:  The per-user study tracker under /api/learning:
       - /leaks            weaknesses, with a spaced-repetition review once resolved
       - /leaks/{id}/review  outcome of a scheduled check
       - /due              resolved leaks whose next check has come
       - /edges            advantages the user wants to keep exploiting
       - /mental           the mental game journal
How:   The user is identified by the `userId` query parameter (or, on POST,
       the body field). There is no authentication on these routes.
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.database import get_db_session
from pokerstudy.schemas.common import ErrorResponse
from pokerstudy.schemas.learning import (
    EdgeCreate,
    EdgeResponse,
    EdgeUpdate,
    LeakCreate,
    LeakResponse,
    LeakReview,
    LeakUpdate,
)
from pokerstudy.schemas.mental_game import MentalGameEntryCreate, MentalGameEntryResponse
from pokerstudy.services.edge_service import edge_service
from pokerstudy.services.leak_service import leak_service
from pokerstudy.services.mental_game_service import mental_game_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/learning", tags=["Learning"])

_USER_MISSING = {400: {"description": "userId missing", "model": ErrorResponse}}


# ══════════════════════════════════════════════════════════════════════════
# Leaks
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/leaks",
    response_model=List[LeakResponse],
    responses=_USER_MISSING,
    summary="List a user's leaks, newest first",
)
async def list_leaks(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    player_id: Optional[str] = Query(default=None, alias="playerId"),
    db: AsyncSession = Depends(get_db_session),
) -> List[LeakResponse]:
    return await leak_service.list_leaks(db, user_id, status=status_filter, player_id=player_id)


@router.post(
    "/leaks",
    response_model=LeakResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "userId missing or unknown category", "model": ErrorResponse}},
)
async def create_leak(
    data: LeakCreate,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db_session),
) -> LeakResponse:
    return await leak_service.create_leak(db, data, fallback_user_id=user_id)


@router.patch(
    "/leaks/{leak_id}",
    response_model=LeakResponse,
    responses={
        400: {"description": "Unknown category", "model": ErrorResponse},
        404: {"description": "Leak not found", "model": ErrorResponse},
    },
)
async def update_leak(
    leak_id: UUID,
    data: LeakUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> LeakResponse:
    return await leak_service.update_leak(db, leak_id, data)


@router.patch(
    "/leaks/{leak_id}/review",
    response_model=LeakResponse,
    responses={404: {"description": "Leak not found", "model": ErrorResponse}},
    summary="Record a scheduled review: still fixed advances the schedule, otherwise reopen",
)
async def review_leak(
    leak_id: UUID,
    data: LeakReview,
    db: AsyncSession = Depends(get_db_session),
) -> LeakResponse:
    return await leak_service.review_leak(db, leak_id, data)


@router.delete(
    "/leaks/{leak_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Leak not found", "model": ErrorResponse}},
)
async def delete_leak(
    leak_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await leak_service.delete_leak(db, leak_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/due",
    response_model=List[LeakResponse],
    responses=_USER_MISSING,
    summary="Resolved leaks due for review, soonest first",
)
async def list_due_leaks(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db_session),
) -> List[LeakResponse]:
    return await leak_service.list_due(db, user_id)


# ══════════════════════════════════════════════════════════════════════════
# Edges
# ══════════════════════════════════════════════════════════════════════════

@router.get("/edges", response_model=List[EdgeResponse], responses=_USER_MISSING)
async def list_edges(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    db: AsyncSession = Depends(get_db_session),
) -> List[EdgeResponse]:
    return await edge_service.list_edges(db, user_id, status=status_filter)


@router.post(
    "/edges",
    response_model=EdgeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "userId missing or unknown category", "model": ErrorResponse}},
)
async def create_edge(
    data: EdgeCreate,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db_session),
) -> EdgeResponse:
    return await edge_service.create_edge(db, data, fallback_user_id=user_id)


@router.patch(
    "/edges/{edge_id}",
    response_model=EdgeResponse,
    responses={404: {"description": "Edge not found", "model": ErrorResponse}},
)
async def update_edge(
    edge_id: UUID,
    data: EdgeUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> EdgeResponse:
    return await edge_service.update_edge(db, edge_id, data)


@router.delete(
    "/edges/{edge_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Edge not found", "model": ErrorResponse}},
)
async def delete_edge(
    edge_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await edge_service.delete_edge(db, edge_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ══════════════════════════════════════════════════════════════════════════
# Mental game
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/mental",
    response_model=List[MentalGameEntryResponse],
    responses=_USER_MISSING,
    summary="List a user's mental game entries, latest session first",
)
async def list_mental_entries(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db_session),
) -> List[MentalGameEntryResponse]:
    return await mental_game_service.list_entries(db, user_id)


@router.post(
    "/mental",
    response_model=MentalGameEntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "userId missing or stateRating outside 1-5", "model": ErrorResponse}},
)
async def create_mental_entry(
    data: MentalGameEntryCreate,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db_session),
) -> MentalGameEntryResponse:
    return await mental_game_service.create_entry(db, data, fallback_user_id=user_id)


@router.delete(
    "/mental/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Entry not found", "model": ErrorResponse}},
)
async def delete_mental_entry(
    entry_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await mental_game_service.delete_entry(db, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
