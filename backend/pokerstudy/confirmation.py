"""
Poker Study Backend — Confirmation Gate
========================================

What:  The contract of the "are you sure?" dialog that stands in front of
       destructive actions such as deleting a hand.
How:   `ConfirmDialog` describes what the user is asked; `resolve_confirmation`
       runs the caller's continuations once the user has answered.

The gate never performs the destructive work. The caller passes it in as
`on_confirm`, and the gate only decides whether it runs.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ConfirmDialog:
    """Text and styling of a confirmation prompt."""

    title: str = "Discard changes?"
    message: str = "Are you sure you want to discard your changes?"
    confirm_text: str = "Discard"
    cancel_text: str = "Cancel"
    # confirm button rendered as an error/danger action
    confirm_danger: bool = True

    def with_overrides(self, **overrides: Any) -> "ConfirmDialog":
        """Copy of this dialog with some fields replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DISCARD_CHANGES_DIALOG = ConfirmDialog()

DELETE_HAND_DIALOG = ConfirmDialog(
    title="Delete hand?",
    message="Are you sure you want to delete this hand? This cannot be undone.",
    confirm_text="Delete",
)


async def resolve_confirmation(
    confirmed: bool,
    on_confirm: Callable[[], Awaitable[T]],
    on_close: Optional[Callable[[], Awaitable[None]]] = None,
) -> Optional[T]:
    """
    Run the continuation matching the user's answer.

    Confirmed: awaits `on_confirm`, then `on_close`, and returns what
    `on_confirm` returned. Cancelled or dismissed: awaits only `on_close`
    and returns None.
    """
    result: Optional[T] = None
    if confirmed:
        result = await on_confirm()
    if on_close is not None:
        await on_close()
    return result
