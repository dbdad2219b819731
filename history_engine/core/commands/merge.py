"""
Merge pipeline - decides whether a freshly executed command folds into the
entry at the top of the undo stack.
"""
from typing import Any, Optional

from .entry import HistoryEntry


def is_mergeable(command: Any) -> bool:
    """True when the command provides both optional merge hooks."""
    return (
        callable(getattr(command, "can_merge_with", None))
        and callable(getattr(command, "merge_with", None))
    )


def should_merge(command: Any, top: Optional[HistoryEntry], merge_window: float, now: float) -> bool:
    """
    Args:
        command: Command that has just executed
        top: Current top of the undo stack
        merge_window: Window in milliseconds; 0 disables merging
        now: Current engine clock reading in seconds
    """
    if merge_window <= 0 or top is None:
        return False
    if not is_mergeable(command):
        return False
    if (now - top.timestamp) * 1000 > merge_window:
        return False
    return bool(command.can_merge_with(top.command))


def merge_into(command: Any, top: HistoryEntry) -> None:
    """Let the surviving command absorb the pre-state of the top command."""
    command.merge_with(top.command)
