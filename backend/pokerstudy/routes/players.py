"""
Poker Study Backend — Player Route Handlers
============================================

What:  CRUD for opponent profiles, note appends and bulk import.
Who:   Called by the player list, player detail and import views.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.database import get_db_session
from pokerstudy.schemas.common import ErrorResponse
from pokerstudy.schemas.player import (
    AppendNoteRequest,
    PlayerCreate,
    PlayerImportRequest,
    PlayerImportResult,
    PlayerResponse,
    PlayerUpdate,
)
from pokerstudy.services.player_service import player_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/players", tags=["Players"])


@router.get("", response_model=List[PlayerResponse], summary="List players")
async def list_players(db: AsyncSession = Depends(get_db_session)) -> List[PlayerResponse]:
    return await player_service.list_players(db)


@router.post(
    "/import",
    response_model=PlayerImportResult,
    responses={400: {"description": "Empty or missing player list", "model": ErrorResponse}},
    summary="Import players, merging into existing usernames",
)
async def import_players(
    request: PlayerImportRequest,
    db: AsyncSession = Depends(get_db_session),
) -> PlayerImportResult:
    return await player_service.import_players(db, request)


@router.get(
    "/{player_id}",
    response_model=PlayerResponse,
    responses={404: {"description": "Player not found", "model": ErrorResponse}},
    summary="Get one player",
)
async def get_player(
    player_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> PlayerResponse:
    return await player_service.get_player(db, player_id)


@router.post(
    "",
    response_model=PlayerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid player type or stakes", "model": ErrorResponse}},
    summary="Create a player",
)
async def create_player(
    data: PlayerCreate,
    db: AsyncSession = Depends(get_db_session),
) -> PlayerResponse:
    return await player_service.create_player(db, data)


@router.put(
    "/{player_id}",
    response_model=PlayerResponse,
    responses={
        400: {"description": "Invalid field value", "model": ErrorResponse},
        404: {"description": "Player not found", "model": ErrorResponse},
    },
    summary="Update a player",
)
async def update_player(
    player_id: UUID,
    data: PlayerUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PlayerResponse:
    return await player_service.update_player(db, player_id, data)


@router.post(
    "/{player_id}/notes",
    response_model=PlayerResponse,
    responses={
        400: {"description": "Blank note text", "model": ErrorResponse},
        404: {"description": "Player not found", "model": ErrorResponse},
    },
    summary="Append a hand history to the player's notes as one line",
)
async def append_note(
    player_id: UUID,
    request: AppendNoteRequest,
    db: AsyncSession = Depends(get_db_session),
) -> PlayerResponse:
    return await player_service.append_note(db, player_id, request.text)


@router.delete(
    "/{player_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Player not found", "model": ErrorResponse}},
    summary="Delete a player",
)
async def delete_player(
    player_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await player_service.delete_player(db, player_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
