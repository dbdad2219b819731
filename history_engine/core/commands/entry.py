"""
History entries - engine-owned metadata wrapped around one command.
"""
import secrets
import string
from dataclasses import dataclass
from typing import Any

_ID_ALPHABET = string.ascii_letters + string.digits


def generate_scoped_id(prefix: str, length: int = 10) -> str:
    """Return an id like ``cmd_Ab3kZ0q9Lm``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))
    return f"{prefix}_{suffix}"


@dataclass(frozen=True)
class HistoryEntry:
    """
    Immutable record occupying one slot of the undo or redo stack.

    Attributes:
        id: Unique opaque id
        description: Command description captured at creation time
        timestamp: Creation instant in seconds (engine clock)
        command: The wrapped command
        undoable: Always True for entries created by the engine
    """
    id: str
    description: str
    timestamp: float
    command: Any
    undoable: bool = True

    @classmethod
    def create(cls, command: Any, timestamp: float) -> "HistoryEntry":
        return cls(
            id=generate_scoped_id("cmd"),
            description=command.description,
            timestamp=timestamp,
            command=command,
        )
