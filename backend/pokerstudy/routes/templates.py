"""
Poker Study Backend — Template & Note Utility Routes
=====================================================

What:  Read-only access to the hand template catalog, and the one-liner
       normalizer used before a hand history is appended to a note.
How:   No database access; both are pure functions of their input.
"""

from typing import List

from fastapi import APIRouter

from pokerstudy.schemas.common import ErrorResponse
from pokerstudy.schemas.templates import HandTemplateResponse, OneLinerRequest, OneLinerResponse
from pokerstudy.text import get_template, list_templates, to_note_one_liner

router = APIRouter(prefix="/api", tags=["Templates"])


@router.get("/templates", response_model=List[HandTemplateResponse], summary="List hand templates")
async def get_templates() -> List[HandTemplateResponse]:
    return [HandTemplateResponse(**t.to_dict()) for t in list_templates()]


@router.get(
    "/templates/{template_id}",
    response_model=HandTemplateResponse,
    responses={404: {"description": "No template with that id", "model": ErrorResponse}},
)
async def get_template_by_id(template_id: str) -> HandTemplateResponse:
    return HandTemplateResponse(**get_template(template_id).to_dict())


@router.post(
    "/notes/one-liner",
    response_model=OneLinerResponse,
    summary="Collapse a multiline hand history to one line",
)
async def one_liner(request: OneLinerRequest) -> OneLinerResponse:
    return OneLinerResponse(text=to_note_one_liner(request.text))
