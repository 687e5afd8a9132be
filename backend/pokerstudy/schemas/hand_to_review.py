"""Hand-to-review request/response schemas."""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from pokerstudy.schemas.common import ApiModel


class Comment(ApiModel):
    text: str
    added_by: str
    added_at: datetime


class Rating(ApiModel):
    user: str
    rating: float


class HandToReviewCreate(ApiModel):
    title: Optional[str] = None
    hand_text: Optional[str] = Field(default=None, description="Hand history, usually one line")
    created_by: Optional[str] = None


class AddComment(ApiModel):
    text: Optional[str] = None
    added_by: Optional[str] = None


class RateHand(ApiModel):
    # Raw JSON values: only numbers count, so "4" is ignored rather than coerced
    star_rating: Any = None
    spicy_rating: Any = None
    user_name: Optional[str] = None


class HandToReviewUpdate(ApiModel):
    """
    One PUT covers several actions. Applied in priority order:
    rate_hand, add_comment, delete_comment_index, then plain field updates.
    """
    title: Optional[str] = None
    hand_text: Optional[str] = None
    status: Optional[str] = None
    add_comment: Optional[AddComment] = None
    delete_comment_index: Optional[int] = None
    rate_hand: Optional[RateHand] = None


class HandToReviewResponse(ApiModel):
    id: uuid.UUID
    title: str
    hand_text: str
    status: str
    created_by: str
    comments: List[Comment] = Field(default_factory=list)
    star_ratings: List[Rating] = Field(default_factory=list)
    spicy_ratings: List[Rating] = Field(default_factory=list)
    archived_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
