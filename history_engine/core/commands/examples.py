"""
Example Undoable Commands - Reusable command implementations.

Provides common command patterns for typical use cases:
- SetPropertyCommand: Generic property setter with undo and merging
- CompositeCommand: Group multiple commands as one
"""
from typing import Any, List

from .base import UndoableCommand, invoke

_UNSET = object()


class SetPropertyCommand(UndoableCommand):
    """
    Generic command to set a property with undo support.

    Captures the old value on construction for undo. Consecutive sets of
    the same property on the same target merge into one history entry
    (when executed within the manager's merge window).

    Example:
        # Drag a window: many small moves collapse into one undo step
        await manager.execute(SetPropertyCommand(window, "x", 120))
        await manager.execute(SetPropertyCommand(window, "x", 140))

        # Later: one undo restores the original x
        await manager.undo()
    """

    def __init__(self, target: Any, property_name: str, new_value: Any,
                 old_value: Any = _UNSET):
        """
        Initialize property change command.

        Args:
            target: Object to modify
            property_name: Name of property to change
            new_value: New value to set
            old_value: Previous value (auto-captured if omitted)
        """
        self.target = target
        self.property_name = property_name
        self.new_value = new_value

        if old_value is _UNSET:
            self.old_value = getattr(target, property_name, None)
        else:
            self.old_value = old_value

    @property
    def description(self) -> str:
        return f"Set {self.property_name} to {self.new_value}"

    def execute(self) -> None:
        setattr(self.target, self.property_name, self.new_value)

    def undo(self) -> None:
        setattr(self.target, self.property_name, self.old_value)

    def can_merge_with(self, other: Any) -> bool:
        return (
            isinstance(other, SetPropertyCommand)
            and other.target is self.target
            and other.property_name == self.property_name
        )

    def merge_with(self, other: "SetPropertyCommand") -> None:
        # Undo must go back to the value before the earlier command
        self.old_value = other.old_value


class CompositeCommand(UndoableCommand):
    """
    Groups multiple commands as a single undoable unit.

    All sub-commands execute together and undo together.
    Undo happens in reverse order of execution. Sub-commands may be
    sync or async.

    Example:
        # Resize + move a window in one step
        commands = [
            SetPropertyCommand(window, "width", 640),
            SetPropertyCommand(window, "x", 40),
        ]
        await manager.execute(CompositeCommand(commands, "Snap window left"))

        # Single undo reverts both changes
        await manager.undo()
    """

    def __init__(self, commands: List[Any],
                 description: str = "Composite Command"):
        """
        Initialize composite command.

        Args:
            commands: List of commands to execute together
            description: Description for this composite
        """
        self._commands = list(commands)
        self._description = description

    @property
    def description(self) -> str:
        return self._description

    @property
    def commands(self) -> List[Any]:
        return list(self._commands)

    async def execute(self) -> None:
        """Execute all sub-commands in order."""
        for cmd in self._commands:
            await invoke(cmd.execute)

    async def undo(self) -> None:
        """Undo all sub-commands in reverse order."""
        for cmd in reversed(self._commands):
            await invoke(cmd.undo)

    async def redo(self) -> None:
        """Redo all sub-commands in order."""
        for cmd in self._commands:
            await invoke(cmd.redo)
