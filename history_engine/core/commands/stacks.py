"""
Dual-stack history store.

Both stacks keep the oldest entry at index 0 and the top at index -1.
"""
from typing import List, Optional, Tuple

from .entry import HistoryEntry


class HistoryStacks:
    """Undo and redo stacks with bottom-first eviction."""

    def __init__(self) -> None:
        self._undo: List[HistoryEntry] = []
        self._redo: List[HistoryEntry] = []

    @property
    def undo_size(self) -> int:
        return len(self._undo)

    @property
    def redo_size(self) -> int:
        return len(self._redo)

    # --- undo stack ---

    def push_undo(self, entry: HistoryEntry, max_history: Optional[int] = None) -> List[HistoryEntry]:
        """
        Push onto the undo stack, evicting the oldest entries while the
        stack exceeds max_history.

        Returns:
            Evicted entries, oldest first
        """
        self._undo.append(entry)
        if max_history is None:
            return []
        return self.truncate_undo(max_history)

    def pop_undo(self) -> Optional[HistoryEntry]:
        if not self._undo:
            return None
        return self._undo.pop()

    def peek_undo(self) -> Optional[HistoryEntry]:
        if not self._undo:
            return None
        return self._undo[-1]

    def truncate_undo(self, max_history: int) -> List[HistoryEntry]:
        """Keep only the max_history most recent undo entries."""
        overflow = len(self._undo) - max_history
        if overflow <= 0:
            return []
        evicted = self._undo[:overflow]
        del self._undo[:overflow]
        return evicted

    def index_in_undo(self, entry_id: str) -> Optional[int]:
        for index, entry in enumerate(self._undo):
            if entry.id == entry_id:
                return index
        return None

    def undo_entries(self) -> Tuple[HistoryEntry, ...]:
        """Snapshot in storage order (oldest first)."""
        return tuple(self._undo)

    # --- redo stack ---

    def push_redo(self, entry: HistoryEntry) -> None:
        self._redo.append(entry)

    def pop_redo(self) -> Optional[HistoryEntry]:
        if not self._redo:
            return None
        return self._redo.pop()

    def peek_redo(self) -> Optional[HistoryEntry]:
        if not self._redo:
            return None
        return self._redo[-1]

    def clear_redo(self) -> None:
        self._redo.clear()

    def index_in_redo(self, entry_id: str) -> Optional[int]:
        for index, entry in enumerate(self._redo):
            if entry.id == entry_id:
                return index
        return None

    def redo_entries(self) -> Tuple[HistoryEntry, ...]:
        """Snapshot in storage order (first undone first)."""
        return tuple(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
