"""
Command Manager - undo/redo history engine.

Executes commands, records them as HistoryEntry objects on a bounded
undo stack, merges rapid successive edits, and navigates the history with
undo/redo/go_to_history. Lifecycle notifications go to an EventPublisher.
"""
import time
from typing import Any, Callable, List, Mapping, Optional, Union
from loguru import logger

from .base import Command, invoke
from .entry import HistoryEntry
from .guard import ExecutionGuard
from .merge import merge_into, should_merge
from .stacks import HistoryStacks
from ..base_system import BaseSystem
from ..config import ConfigManager, HistoryConfig
from ..events import EventBus, EventPublisher, Events
from ..service_decorator import Service

ConfigInput = Union[HistoryConfig, Mapping[str, Any], None]


def _coerce_config(config: ConfigInput) -> HistoryConfig:
    if config is None:
        return HistoryConfig()
    if isinstance(config, HistoryConfig):
        return config.model_copy()
    return HistoryConfig.model_validate(dict(config))


@Service
class CommandManager(BaseSystem):
    """
    Manages undo/redo stacks for commands.

    Features:
    - Bounded history (max_history, oldest evicted first)
    - Time-windowed command merging (merge_window, milliseconds)
    - Execution guard: calls made while an operation is in flight are dropped
    - Arbitrary-point navigation via go_to_history()
    - Lifecycle events for UI binding (see Events)

    Usage:
        manager = CommandManager({"max_history": 50})

        await manager.execute(MoveWindowCommand(window, 100, 200))
        await manager.undo()
        await manager.redo()

        manager.on(Events.STATE_CHANGED, lambda state: toolbar.update(**state))
    """

    def __init__(
        self,
        config: ConfigInput = None,
        *,
        publisher: Optional[EventPublisher] = None,
        config_manager: Optional[ConfigManager] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize CommandManager.

        Args:
            config: HistoryConfig or mapping of its fields
            publisher: Event publisher (defaults to a private EventBus)
            config_manager: Optional ConfigManager; supplies the initial
                history settings when config is None and pushes later
                `history.*` updates into this manager
            clock: Returns the current time in seconds
        """
        super().__init__(config_manager)

        if config is None and config_manager is not None:
            config = config_manager.data.history
        self._settings = _coerce_config(config)

        self._stacks = HistoryStacks()
        self._guard = ExecutionGuard()
        self._publisher = publisher if publisher is not None else EventBus()
        self._clock = clock

        if config_manager is not None:
            config_manager.on_changed.connect(self._on_config_changed)

    async def initialize(self):
        """Initialize the CommandManager."""
        await super().initialize()

    async def shutdown(self):
        """Shutdown: clear stacks and stop following config changes."""
        self.close()
        await super().shutdown()

    def close(self) -> None:
        """Clear history and detach from the ConfigManager."""
        self.clear()
        if self.config is not None:
            self.config.on_changed.disconnect(self._on_config_changed)

    # ==================== State ====================

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self._stacks.undo_size > 0

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self._stacks.redo_size > 0

    @property
    def undo_stack_size(self) -> int:
        return self._stacks.undo_size

    @property
    def redo_stack_size(self) -> int:
        return self._stacks.redo_size

    @property
    def executing(self) -> bool:
        """True while a command, undo or redo is in flight."""
        return self._guard.busy

    @property
    def undo_description(self) -> Optional[str]:
        """Get description of next undo action."""
        top = self._stacks.peek_undo()
        return top.description if top else None

    @property
    def redo_description(self) -> Optional[str]:
        """Get description of next redo action."""
        top = self._stacks.peek_redo()
        return top.description if top else None

    # ==================== Execution ====================

    async def execute(self, command: Command) -> None:
        """
        Execute a command and record it in history.

        Dropped silently when another operation is in flight.

        Args:
            command: Command to execute

        Raises:
            Exception: Whatever the command raises; history is untouched
        """
        if self._guard.busy:
            self._log("Command execution skipped: another operation is running ({.description})", command)
            return

        with self._guard.hold():
            try:
                await invoke(command.execute)
            except Exception as e:
                logger.error(f"Command execution failed: {e}")
                raise

            now = self._clock()
            top = self._stacks.peek_undo()
            merged = should_merge(command, top, self._settings.merge_window, now)
            if merged:
                merge_into(command, top)
                self._stacks.pop_undo()

            entry = HistoryEntry.create(command, now)
            evicted = self._stacks.push_undo(entry, self._settings.max_history)
            self._stacks.clear_redo()

        if merged:
            self._log("Command merged: {} (replaced {})", entry.description, top.id)
        else:
            self._log("Command executed: {}", entry.description)
        for old in evicted:
            self._log("History limit reached, evicted: {}", old.description)

        self._publish(Events.COMMAND_EXECUTED, {"command": command, "history": entry})
        self._emit_state_change()

    async def undo(self) -> bool:
        """
        Undo the last command.

        Returns:
            True if undo was performed, False if nothing to undo or busy
        """
        if self._guard.busy:
            self._log("Undo skipped: another operation is running")
            return False
        if not self.can_undo():
            self._log("Cannot undo: undo stack is empty")
            return False

        with self._guard.hold():
            entry = self._stacks.pop_undo()
            try:
                await invoke(entry.command.undo)
            except Exception as e:
                logger.error(f"Undo failed: {e}")
                # Put it back on undo stack
                self._stacks.push_undo(entry)
                raise
            self._stacks.push_redo(entry)

        self._log("Command undone: {}", entry.description)
        self._publish(Events.COMMAND_UNDONE, {"command": entry.command, "history": entry})
        self._emit_state_change()
        return True

    async def redo(self) -> bool:
        """
        Redo the last undone command.

        Returns:
            True if redo was performed, False if nothing to redo or busy
        """
        if self._guard.busy:
            self._log("Redo skipped: another operation is running")
            return False
        if not self.can_redo():
            self._log("Cannot redo: redo stack is empty")
            return False

        with self._guard.hold():
            entry = self._stacks.pop_redo()
            try:
                await invoke(entry.command.redo)
            except Exception as e:
                logger.error(f"Redo failed: {e}")
                # Put it back on redo stack
                self._stacks.push_redo(entry)
                raise
            evicted = self._stacks.push_undo(entry, self._settings.max_history)

        self._log("Command redone: {}", entry.description)
        for old in evicted:
            self._log("History limit reached, evicted: {}", old.description)
        self._publish(Events.COMMAND_REDONE, {"command": entry.command, "history": entry})
        self._emit_state_change()
        return True

    # ==================== History ====================

    def get_history(self, limit: Optional[int] = None) -> List[HistoryEntry]:
        """
        Get undoable history, most recent first.

        Args:
            limit: Maximum number of entries (None or 0 for all)
        """
        history = list(reversed(self._stacks.undo_entries()))
        return history[:limit] if limit else history

    def get_redo_history(self, limit: Optional[int] = None) -> List[HistoryEntry]:
        """
        Get redoable history, most recently undone first.

        Args:
            limit: Maximum number of entries (None or 0 for all)
        """
        history = list(reversed(self._stacks.redo_entries()))
        return history[:limit] if limit else history

    async def go_to_history(self, history_id: str) -> bool:
        """
        Move to the state right after the given entry was executed.

        Walks with undo()/redo() so every intermediate command runs.

        Returns:
            True if the entry was reached, False if it is unknown or a
            step could not run
        """
        if self._guard.busy:
            self._log("Navigation skipped: another operation is running")
            return False

        if self._is_current(history_id):
            return True

        if self._stacks.index_in_undo(history_id) is not None:
            while not self._is_current(history_id):
                # Subscribers may trim history mid-walk
                if self._stacks.index_in_undo(history_id) is None:
                    return False
                if not await self.undo():
                    return False
            return True

        if self._stacks.index_in_redo(history_id) is not None:
            while True:
                if not await self.redo():
                    return False
                if self._is_current(history_id):
                    return True

        self._log("History entry not found: {}", history_id)
        return False

    def clear(self) -> None:
        """Clear all undo/redo history."""
        self._stacks.clear()
        self._log("History cleared")
        self._publish(Events.HISTORY_CLEARED, {})
        self._emit_state_change()

    # ==================== Events ====================

    def on(self, event: str, handler: Callable) -> None:
        """Subscribe to one of the Events names."""
        self._publisher.subscribe(event, handler)

    def off(self, event: str, handler: Callable) -> None:
        """Unsubscribe a handler added with on()."""
        self._publisher.unsubscribe(event, handler)

    # ==================== Configuration ====================

    def get_config(self) -> HistoryConfig:
        """Get a copy of the current configuration."""
        return self._settings.model_copy()

    def set_config(self, **changes: Any) -> None:
        """
        Shallow-merge configuration changes.

        Raises:
            pydantic.ValidationError: On unknown keys or invalid values
        """
        merged = {**self._settings.model_dump(), **changes}
        self._settings = HistoryConfig.model_validate(merged)
        self._enforce_history_limit()

    def set_max_history(self, max_history: int) -> None:
        """
        Set the maximum history size, trimming the undo stack immediately.

        Raises:
            pydantic.ValidationError: If max_history is not positive
        """
        self.set_config(max_history=max_history)

    def _on_config_changed(self, section: str, key: str, value: Any) -> None:
        if section == "history":
            self.set_config(**{key: value})

    # ==================== Internals ====================

    def _enforce_history_limit(self) -> None:
        evicted = self._stacks.truncate_undo(self._settings.max_history)
        if evicted:
            self._log("History trimmed by {} entries", len(evicted))
            self._emit_state_change()

    def _publish(self, event: str, data: Any) -> None:
        self._publisher.publish(event, data)

    def _emit_state_change(self) -> None:
        self._publish(Events.STATE_CHANGED, {
            "can_undo": self.can_undo(),
            "can_redo": self.can_redo(),
        })

    def _is_current(self, history_id: str) -> bool:
        top = self._stacks.peek_undo()
        return top is not None and top.id == history_id

    def _log(self, message: str, *args: Any) -> None:
        if self._settings.debug:
            logger.debug("[CommandManager] " + message, *args)


# Process-wide instance
_command_manager: Optional[CommandManager] = None


def use_command_manager(config: ConfigInput = None) -> CommandManager:
    """
    Get the shared CommandManager, creating it on first call.

    Args:
        config: Only honored when the instance is created
    """
    global _command_manager
    if _command_manager is None:
        _command_manager = CommandManager(config)
    return _command_manager


def reset_command_manager() -> None:
    """Tear down the shared CommandManager (mainly for tests)."""
    global _command_manager
    if _command_manager is not None:
        _command_manager.close()
    _command_manager = None
