"""
History Engine - Undo/Redo Command History

In-memory, session-scoped command history for editors: bounded undo/redo
stacks, time-windowed merging of rapid edits, and arbitrary-point
navigation. The Qt binding adapter lives in history_engine.ui.
"""

from history_engine.core.base_system import BaseSystem
from history_engine.core.config import ConfigManager, AppConfig, GeneralSettings, HistoryConfig
from history_engine.core.events import Signal, EventBus, Events
from history_engine.core.logging import setup_logging
from history_engine.core.commands import (
    Command,
    UndoableCommand,
    HistoryEntry,
    CommandManager,
    use_command_manager,
    reset_command_manager,
    SetPropertyCommand,
    CompositeCommand,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "BaseSystem",
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "HistoryConfig",
    "Signal",
    "EventBus",
    "Events",
    "setup_logging",

    # Commands
    "Command",
    "UndoableCommand",
    "HistoryEntry",
    "CommandManager",
    "use_command_manager",
    "reset_command_manager",
    "SetPropertyCommand",
    "CompositeCommand",
]
