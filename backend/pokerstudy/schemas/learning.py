"""
Leak and edge schemas.

Inputs are lenient the same way the client's forms are: linked hand ids may
hold junk that is filtered out, and notes may omit their id and timestamp.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from pokerstudy.schemas.common import ApiModel


class LearningNoteInput(ApiModel):
    id: Optional[str] = None
    content: Optional[str] = None
    created_at: Optional[datetime] = None


class LearningNote(ApiModel):
    id: str
    content: str
    created_at: datetime


class LeakCreate(ApiModel):
    user_id: Optional[str] = None
    title: Optional[str] = Field(default=None, description='Defaults to "Untitled leak"')
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, description='Defaults to "other"')
    linked_hand_ids: Optional[List[Any]] = None
    player_id: Optional[str] = None
    player_username: Optional[str] = None


class LeakUpdate(ApiModel):
    """
    Partial update. Moving into `resolved` starts the review schedule;
    moving to any other status clears it.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    linked_hand_ids: Optional[List[Any]] = None
    notes: Optional[List[LearningNoteInput]] = None


class LeakReview(ApiModel):
    # Anything other than an explicit false counts as "still fixed"
    still_fixed: Any = None


class LeakResponse(ApiModel):
    id: uuid.UUID
    user_id: str
    title: str
    description: str
    category: str
    status: str
    linked_hand_ids: List[str] = Field(default_factory=list)
    notes: List[LearningNote] = Field(default_factory=list)
    player_id: Optional[str] = None
    player_username: Optional[str] = None
    resolved_at: Optional[datetime] = None
    next_review_at: Optional[datetime] = None
    review_stage: int
    created_at: datetime
    updated_at: datetime


class EdgeCreate(ApiModel):
    user_id: Optional[str] = None
    title: Optional[str] = Field(default=None, description='Defaults to "Untitled edge"')
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, description='Defaults to "other"')
    linked_hand_ids: Optional[List[Any]] = None


class EdgeUpdate(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    linked_hand_ids: Optional[List[Any]] = None
    notes: Optional[List[LearningNoteInput]] = None


class EdgeResponse(ApiModel):
    id: uuid.UUID
    user_id: str
    title: str
    description: str
    category: str
    status: str
    linked_hand_ids: List[str] = Field(default_factory=list)
    notes: List[LearningNote] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
