"""Reviewer request/response schemas."""

from typing import Optional

from pokerstudy.schemas.common import ApiModel


class ReviewerCreate(ApiModel):
    name: Optional[str] = None


class ReviewerResponse(ApiModel):
    name: str
