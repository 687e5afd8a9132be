"""
Mental game journal schemas.

The rating and the three flags are taken as raw JSON values: a rating that
is not a number falls back to the default, and a flag is set only by a
literal `true`. Coercing "4" or "yes" here would bypass both rules.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from pokerstudy.schemas.common import ApiModel


class MentalGameEntryCreate(ApiModel):
    user_id: Optional[str] = None
    session_date: Optional[datetime] = Field(default=None, description="Defaults to now")
    state_rating: Any = Field(default=None, description="1-5, defaults to 3 unless a number")
    observation: Optional[str] = Field(default=None, description="Truncated to 280 characters")
    tilt_affected: Any = None
    fatigue_affected: Any = None
    confidence_affected: Any = None


class MentalGameEntryResponse(ApiModel):
    id: uuid.UUID
    user_id: str
    session_date: datetime
    state_rating: int
    observation: str
    tilt_affected: bool
    fatigue_affected: bool
    confidence_affected: bool
    created_at: datetime
    updated_at: datetime
