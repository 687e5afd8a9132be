"""
Poker Study Backend — Backup Route Handlers
============================================

What:  GET /api/backup/export dumps players and hands; POST /api/backup/restore
       replaces them with a dump. Restore is destructive and all-or-nothing.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.database import get_db_session
from pokerstudy.schemas.backup import BackupPayload, RestoreRequest, RestoreResult
from pokerstudy.schemas.common import ErrorResponse
from pokerstudy.services.backup_service import backup_service

router = APIRouter(prefix="/api/backup", tags=["Backup"])


@router.get("/export", response_model=BackupPayload, summary="Export all players and hands")
async def export_backup(db: AsyncSession = Depends(get_db_session)) -> BackupPayload:
    return await backup_service.export(db)


@router.post(
    "/restore",
    response_model=RestoreResult,
    responses={400: {"description": "A record failed validation; nothing changed", "model": ErrorResponse}},
    summary="Replace all players and hands with a backup",
)
async def restore_backup(
    request: RestoreRequest,
    db: AsyncSession = Depends(get_db_session),
) -> RestoreResult:
    return await backup_service.restore(db, request)
