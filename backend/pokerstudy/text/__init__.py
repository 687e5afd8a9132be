"""
Poker Study Backend — Note Text Helpers
========================================

What:  Pure, I/O-free helpers for hand-history note text.
Who:   Used by the note routes and the player service; safe to import anywhere.

Modules:
    - normalizer:      one-line normalization of multiline hand histories
    - hand_templates:  the fixed catalog of note templates
"""

from pokerstudy.text.hand_templates import (
    HAND_TEMPLATES,
    HandTemplate,
    get_template,
    list_templates,
)
from pokerstudy.text.normalizer import (
    NOTE_SEPARATOR,
    append_note_line,
    merge_notes,
    to_note_one_liner,
)

__all__ = [
    "HAND_TEMPLATES",
    "HandTemplate",
    "NOTE_SEPARATOR",
    "append_note_line",
    "get_template",
    "list_templates",
    "merge_notes",
    "to_note_one_liner",
]
