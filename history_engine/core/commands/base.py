"""
Command Pattern - Base Interfaces.

Provides:
- Command: Protocol describing what the history engine needs from a command
- UndoableCommand: Convenience ABC with default redo/description
- invoke: Run a command step that may be sync or async
"""
import inspect
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class Command(Protocol):
    """
    Reversible unit of work recorded by CommandManager.

    Methods may be coroutine functions or plain functions. Commands may
    additionally define the optional merge hooks:

        def can_merge_with(self, other) -> bool
        def merge_with(self, other) -> None

    `other` is always the command at the top of the undo stack.
    """

    @property
    def description(self) -> str: ...

    def execute(self) -> Union[None, Awaitable[None]]: ...

    def undo(self) -> Union[None, Awaitable[None]]: ...

    def redo(self) -> Union[None, Awaitable[None]]: ...


class UndoableCommand(ABC):
    """
    Command that supports undo/redo operations.

    Use this for operations that modify state and should be reversible.
    Execute via CommandManager to enable undo/redo functionality.
    Subclassing is optional: any object matching the Command protocol works.

    Example:
        class RenameCardCommand(UndoableCommand):
            def __init__(self, card, old_name, new_name):
                self.card = card
                self.old_name = old_name
                self.new_name = new_name

            @property
            def description(self) -> str:
                return f"Rename to {self.new_name}"

            async def execute(self):
                await self.card.rename(self.new_name)

            async def undo(self):
                await self.card.rename(self.old_name)
    """

    @property
    def description(self) -> str:
        """
        Human-readable description for UI display.

        Returns:
            Description string (default: class name)
        """
        return self.__class__.__name__

    @abstractmethod
    def execute(self) -> Optional[Awaitable[None]]:
        """
        Execute the command (forward operation).

        Called once when the command is first run.
        """
        pass

    @abstractmethod
    def undo(self) -> Optional[Awaitable[None]]:
        """
        Reverse the command.

        Must restore state to exactly what it was before execute().
        """
        pass

    def redo(self) -> Optional[Awaitable[None]]:
        """
        Re-execute the command after undo.

        Default implementation calls execute().
        Override if redo requires different logic (e.g. cached state).
        """
        return self.execute()


async def invoke(step: Callable[[], Any]) -> Any:
    """Call a command step and await its result if it is awaitable."""
    result = step()
    if inspect.isawaitable(result):
        result = await result
    return result
