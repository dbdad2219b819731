"""
Event System - Pub/Sub Messaging for the history engine.

Provides:
- Signal: Simple observer pattern for sync notifications (e.g., config changes)
- EventBus: Default publisher used by CommandManager
- EventPublisher: Protocol any injected publisher must satisfy
- Events: Event name constants published by CommandManager

Usage:
    from history_engine.core.events import EventBus, Events

    bus = EventBus()
    bus.subscribe(Events.COMMAND_EXECUTED, on_executed)
"""
from .observer import Signal
from .bus import EventBus, EventPublisher
from .constants import Events


__all__ = ["Signal", "EventBus", "EventPublisher", "Events"]
