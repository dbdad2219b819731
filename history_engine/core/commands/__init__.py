"""
Command History System.

Provides Command pattern infrastructure:
- Command: Protocol for reversible commands
- UndoableCommand: Convenience base class
- HistoryEntry: Immutable record of one executed command
- CommandManager: Undo/redo engine with merging and bounded history
- use_command_manager / reset_command_manager: Shared instance accessors
- Example commands for common patterns
"""
from .base import Command, UndoableCommand, invoke
from .entry import HistoryEntry, generate_scoped_id
from .guard import ExecutionGuard, GuardBusyError
from .stacks import HistoryStacks
from .manager import CommandManager, use_command_manager, reset_command_manager
from .examples import SetPropertyCommand, CompositeCommand

__all__ = [
    # Base interfaces
    "Command",
    "UndoableCommand",
    "invoke",
    # History
    "HistoryEntry",
    "generate_scoped_id",
    "HistoryStacks",
    "ExecutionGuard",
    "GuardBusyError",
    # Engine
    "CommandManager",
    "use_command_manager",
    "reset_command_manager",
    # Example implementations
    "SetPropertyCommand",
    "CompositeCommand",
]
