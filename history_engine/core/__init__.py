"""
History Engine Core.

Provides:
- BaseSystem: Abstract base for engine systems
- ConfigManager / HistoryConfig: Configuration with optional persistence
- EventBus / Events: Pub/sub notifications
- CommandManager: Undo/redo engine
"""
from .base_system import BaseSystem
from .events import Signal, EventBus, EventPublisher, Events
from .config import ConfigManager, AppConfig, GeneralSettings, HistoryConfig
from .logging import setup_logging, setup_logging_from_config
from .commands import (
    Command,
    UndoableCommand,
    HistoryEntry,
    ExecutionGuard,
    GuardBusyError,
    CommandManager,
    use_command_manager,
    reset_command_manager,
    SetPropertyCommand,
    CompositeCommand,
)

__all__ = [
    # Core infrastructure
    "BaseSystem",

    # Configuration
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "HistoryConfig",

    # Logging
    "setup_logging",
    "setup_logging_from_config",

    # Events
    "Signal",
    "EventBus",
    "EventPublisher",
    "Events",

    # Commands
    "Command",
    "UndoableCommand",
    "HistoryEntry",
    "ExecutionGuard",
    "GuardBusyError",
    "CommandManager",
    "use_command_manager",
    "reset_command_manager",
    "SetPropertyCommand",
    "CompositeCommand",
]
