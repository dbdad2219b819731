"""
Event Type Constants.

Standard event names published by the command history engine.
Use these constants with EventBus (or CommandManager.on) for type-safe
subscriptions.

Usage:
    from history_engine.core.events import Events

    manager.on(Events.STATE_CHANGED, on_state_changed)
"""


class Events:
    """
    Event names published by CommandManager.

    Payloads:
        COMMAND_EXECUTED: {"command": Command, "history": HistoryEntry}
        COMMAND_UNDONE:   {"command": Command, "history": HistoryEntry}
        COMMAND_REDONE:   {"command": Command, "history": HistoryEntry}
        HISTORY_CLEARED:  {}
        STATE_CHANGED:    {"can_undo": bool, "can_redo": bool}
    """

    # Command lifecycle
    COMMAND_EXECUTED = "command:executed"
    COMMAND_UNDONE = "command:undone"
    COMMAND_REDONE = "command:redone"

    # History bookkeeping
    HISTORY_CLEARED = "history:cleared"
    STATE_CHANGED = "state:changed"

    ALL = (
        COMMAND_EXECUTED,
        COMMAND_UNDONE,
        COMMAND_REDONE,
        HISTORY_CLEARED,
        STATE_CHANGED,
    )
