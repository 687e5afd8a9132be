"""
Poker Study Backend — Hand Template Catalog
============================================

What:  The fixed, ordered set of skeleton notes offered to the note editor.
How:   A tuple of frozen dataclasses built once at import; there is no way
       to add, remove or edit a template while the process runs.

Placeholder convention:
    `x` in backticks marks "a card value goes here". It is an editing hint
    only; nothing in the backend parses it.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

from pokerstudy.exceptions import NotFoundError


@dataclass(frozen=True)
class HandTemplate:
    """A named skeleton note body."""

    id: str
    label: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Trailing spaces after street names are part of the template text.
HAND_TEMPLATE_PFR = (
    "hero opens `x` `x` in the \n"
    "villain calls in \n"
    "flop \n"
    "\n"
    "turn \n"
    "\n"
    "river \n"
)

HAND_TEMPLATE_VS_PFR = (
    "villain opens `x` `x` from the \n"
    "hero \n"
    "flop \n"
    "\n"
    "turn \n"
    "\n"
    "river \n"
)

# Order is display order.
HAND_TEMPLATES: Tuple[HandTemplate, ...] = (
    HandTemplate(id="pfr", label="PFR", text=HAND_TEMPLATE_PFR),
    HandTemplate(id="vsPfr", label="vs PFR", text=HAND_TEMPLATE_VS_PFR),
)

_TEMPLATES_BY_ID: Dict[str, HandTemplate] = {t.id: t for t in HAND_TEMPLATES}

if len(_TEMPLATES_BY_ID) != len(HAND_TEMPLATES):
    raise RuntimeError("Hand template ids must be unique")


def list_templates() -> Tuple[HandTemplate, ...]:
    """Return every template in display order."""
    return HAND_TEMPLATES


def get_template(template_id: str) -> HandTemplate:
    """
    Look up a template by id.

    Raises:
        NotFoundError: no template has that id. Callers usually fall back to
            an empty editor.
    """
    template = _TEMPLATES_BY_ID.get(template_id)
    if template is None:
        raise NotFoundError(resource="template", resource_id=template_id)
    return template
