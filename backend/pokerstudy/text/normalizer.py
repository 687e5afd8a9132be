"""
Poker Study Backend — Hand History Normalizer
==============================================

What:  Collapses a multiline hand history into the single line stored in a
       note field.
How:   Every maximal run of line-break characters becomes " // ", and the
       outer whitespace is removed first so a run at either end never turns
       into a dangling separator.

Examples:
    >>> to_note_one_liner("hero opens AK\\nvillain calls")
    'hero opens AK // villain calls'
    >>> to_note_one_liner("  a\\n\\nb  ")
    'a // b'
    >>> to_note_one_liner("\\n\\n\\n")
    ''
"""

import re

NOTE_SEPARATOR = " // "

# CRLF, LF and a stray CR all belong to the same run
_LINE_BREAK_RUN = re.compile(r"[\r\n]+")


def to_note_one_liner(s: str) -> str:
    """
    Replace newlines with " // " so a multiline hand history becomes one line.

    Total on strings and idempotent; whitespace other than line breaks is
    preserved verbatim.
    """
    return _LINE_BREAK_RUN.sub(NOTE_SEPARATOR, s.strip()).strip()


def append_note_line(existing: str, addition: str) -> str:
    """Append a normalized line to an existing multiline note."""
    line = to_note_one_liner(addition)
    if not line:
        return existing
    if not existing:
        return line
    return f"{existing.rstrip()}\n{line}"


def merge_notes(*notes: str) -> str:
    """Join non-empty notes with a blank line between them."""
    return "\n\n".join(note for note in notes if note)
