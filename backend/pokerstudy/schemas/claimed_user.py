"""Schemas for /api/me: claiming a name, logging in, improvement notes."""

from typing import Optional

from pokerstudy.schemas.common import ApiModel


class ClaimRequest(ApiModel):
    name: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(ApiModel):
    name: Optional[str] = None
    password: Optional[str] = None


class ClaimedUserResponse(ApiModel):
    name: str


class ClaimedCheckResponse(ApiModel):
    claimed: bool


class ImprovementNotes(ApiModel):
    content: Optional[str] = None
