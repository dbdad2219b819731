"""
Qt binding for CommandManager.

Turns engine events into Qt signals so undo/redo actions and history
panels can connect without touching the engine's pub/sub API.
"""
from typing import Optional
from loguru import logger
from PySide6.QtCore import QObject, Signal

from history_engine.core.commands.manager import CommandManager
from history_engine.core.events import Events

_HISTORY_EVENTS = (
    Events.COMMAND_EXECUTED,
    Events.COMMAND_UNDONE,
    Events.COMMAND_REDONE,
    Events.HISTORY_CLEARED,
)


class HistorySignals(QObject):
    """
    Qt signal holder bound to one CommandManager.

    can_undo_changed/can_redo_changed fire only on transitions;
    state_changed fires on every engine state:changed event;
    history_changed fires whenever entries move between stacks.

    Usage:
        signals = HistorySignals()
        signals.bind(manager)
        signals.can_undo_changed.connect(undo_action.setEnabled)
        signals.can_redo_changed.connect(redo_action.setEnabled)
    """
    can_undo_changed = Signal(bool)
    can_redo_changed = Signal(bool)
    state_changed = Signal()
    history_changed = Signal()

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._manager: Optional[CommandManager] = None

        # Track previous state for signal emission
        self._last_can_undo = False
        self._last_can_redo = False

    @property
    def manager(self) -> Optional[CommandManager]:
        return self._manager

    def bind(self, manager: CommandManager) -> None:
        """Follow a manager, replacing any previous binding."""
        if self._manager is not None:
            self.unbind()

        self._manager = manager
        manager.on(Events.STATE_CHANGED, self._on_state_changed)
        for event in _HISTORY_EVENTS:
            manager.on(event, self._on_history_changed)

        logger.debug("HistorySignals bound to CommandManager")
        self._on_state_changed({
            "can_undo": manager.can_undo(),
            "can_redo": manager.can_redo(),
        })

    def unbind(self) -> None:
        if self._manager is None:
            return
        self._manager.off(Events.STATE_CHANGED, self._on_state_changed)
        for event in _HISTORY_EVENTS:
            self._manager.off(event, self._on_history_changed)
        self._manager = None

    def _on_state_changed(self, state: dict) -> None:
        """Emit signals if can_undo/can_redo state changed."""
        current_can_undo = state["can_undo"]
        current_can_redo = state["can_redo"]

        if current_can_undo != self._last_can_undo:
            self._last_can_undo = current_can_undo
            self.can_undo_changed.emit(current_can_undo)

        if current_can_redo != self._last_can_redo:
            self._last_can_redo = current_can_redo
            self.can_redo_changed.emit(current_can_redo)

        self.state_changed.emit()

    def _on_history_changed(self, _data: dict) -> None:
        self.history_changed.emit()
