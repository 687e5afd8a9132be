"""Schemas for the template catalog and the note one-liner endpoint."""

from pydantic import Field

from pokerstudy.schemas.common import ApiModel


class HandTemplateResponse(ApiModel):
    id: str
    label: str
    text: str


class OneLinerRequest(ApiModel):
    text: str = Field(description="Multiline hand history")


class OneLinerResponse(ApiModel):
    text: str = Field(description="Single-line form, lines joined with ' // '")
