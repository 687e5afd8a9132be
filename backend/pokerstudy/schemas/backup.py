"""
Backup export/restore schemas.

Restore accepts the same records export produced; ids and timestamps are
optional so hand-written backups can be restored too.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from pokerstudy.schemas.common import ApiModel
from pokerstudy.schemas.hand_to_review import Comment, HandToReviewResponse, Rating
from pokerstudy.schemas.player import PlayerCreate, PlayerResponse


class PlayerBackupRecord(PlayerCreate):
    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class HandBackupRecord(ApiModel):
    id: Optional[uuid.UUID] = None
    title: str
    hand_text: str
    status: str = "open"
    created_by: str
    comments: List[Comment] = Field(default_factory=list)
    star_ratings: List[Rating] = Field(default_factory=list)
    spicy_ratings: List[Rating] = Field(default_factory=list)
    archived_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BackupPayload(ApiModel):
    exported_at: datetime
    players: List[PlayerResponse]
    hands_to_review: List[HandToReviewResponse]


class RestoreRequest(ApiModel):
    players: Optional[List[PlayerBackupRecord]] = None
    hands_to_review: Optional[List[HandBackupRecord]] = None


class RestoreResult(ApiModel):
    players_restored: int
    hands_to_review_restored: int
