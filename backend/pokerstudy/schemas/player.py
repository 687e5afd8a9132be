"""Player request/response schemas."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from pokerstudy.constants import DEFAULT_PLAYER_TYPE
from pokerstudy.schemas.common import ApiModel


class PlayerCreate(ApiModel):
    username: str = Field(description="Screen name of the opponent")
    player_type: str = Field(default=DEFAULT_PLAYER_TYPE, description="One of PLAYER_TYPES")
    stakes_seen_at: List[int] = Field(default_factory=list, description="Big-blind amounts")
    notes: str = Field(default="", description="Free-form notes, one hand per line")


class PlayerUpdate(ApiModel):
    """Partial update; only fields present in the body are applied."""
    username: Optional[str] = None
    player_type: Optional[str] = None
    stakes_seen_at: Optional[List[int]] = None
    notes: Optional[str] = None


class PlayerResponse(ApiModel):
    id: uuid.UUID
    username: str
    player_type: str
    stakes_seen_at: List[int]
    notes: str
    created_at: datetime
    updated_at: datetime


class ImportPlayer(ApiModel):
    username: str
    player_type: Optional[str] = None
    stakes_seen_at: Optional[List[int]] = None
    notes: str = ""


class PlayerImportRequest(ApiModel):
    players: Optional[List[ImportPlayer]] = None


class PlayerImportResult(ApiModel):
    created: int = 0
    updated: int = 0


class AppendNoteRequest(ApiModel):
    text: str = Field(description="Line to append; newlines are collapsed to ' // '")
