"""
EventBus - Default Event Publisher

Provides the publish/subscribe collaborator the command history engine
reports to. Any object implementing the EventPublisher protocol can be
injected into CommandManager instead.
"""
import asyncio
import inspect
from typing import Any, Callable, Dict, List, Protocol, Set, runtime_checkable
from loguru import logger

from history_engine.core.base_system import BaseSystem


@runtime_checkable
class EventPublisher(Protocol):
    """Minimal pub/sub capability required by CommandManager."""

    def subscribe(self, event: str, handler: Callable) -> None: ...

    def unsubscribe(self, event: str, handler: Callable) -> None: ...

    def publish(self, event: str, data: Any = None) -> None: ...


class EventBus(BaseSystem):
    """
    In-process event bus for history notifications.

    Usage:
        # Subscribe
        event_bus.subscribe("state:changed", handle_state)

        # Publish (synchronous, handlers run in subscription order)
        event_bus.publish("state:changed", {"can_undo": True, "can_redo": False})
    """

    def __init__(self, config=None):
        super().__init__(config)
        self._subscribers: Dict[str, List[Callable]] = {}
        self._tasks: Set[asyncio.Task] = set()

    async def initialize(self):
        """Initialize event bus."""
        logger.info("EventBus initialized")
        await super().initialize()

    async def shutdown(self):
        """Shutdown event bus."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._subscribers.clear()
        await super().shutdown()

    def subscribe(self, event: str, handler: Callable) -> None:
        """
        Subscribe to an event.

        Args:
            event: Event name (e.g., "command:executed", "state:changed")
            handler: Callback function (sync or async)
        """
        if event not in self._subscribers:
            self._subscribers[event] = []

        if handler not in self._subscribers[event]:
            self._subscribers[event].append(handler)
            logger.debug(f"Subscribed to {event}: {_handler_name(handler)}")

    def unsubscribe(self, event: str, handler: Callable) -> None:
        """
        Unsubscribe from an event.

        Args:
            event: Event name
            handler: Handler to remove
        """
        if event in self._subscribers and handler in self._subscribers[event]:
            self._subscribers[event].remove(handler)
            logger.debug(f"Unsubscribed from {event}: {_handler_name(handler)}")

    def subscriber_count(self, event: str) -> int:
        return len(self._subscribers.get(event, []))

    def publish(self, event: str, data: Any = None) -> None:
        """
        Publish an event synchronously.

        Coroutine handlers are scheduled as tasks on the running loop.
        Without a running loop they are skipped with a warning; use
        publish_async() to reach them.

        Args:
            event: Event name
            data: Optional data to pass to handlers
        """
        handlers = list(self._subscribers.get(event, []))

        for handler in handlers:
            try:
                if inspect.iscoroutinefunction(handler):
                    self._schedule(event, handler, data)
                else:
                    handler(data)
            except Exception as e:
                logger.error(f"Error in handler for {event}: {e}")

    def _schedule(self, event: str, handler: Callable, data: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"No running event loop, skipped async handler for {event}: {_handler_name(handler)}")
            return

        task = loop.create_task(handler(data))
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._on_task_done(event, t))

    def _on_task_done(self, event: str, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Error in handler for {event}: {error}")

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    async def publish_async(self, event: str, data: Any = None) -> None:
        """
        Publish an event to all subscribers, awaiting coroutine handlers.

        Args:
            event: Event name
            data: Optional data to pass to handlers
        """
        handlers = list(self._subscribers.get(event, []))

        for handler in handlers:
            try:
                if inspect.iscoroutinefunction(handler):
                    await handler(data)
                else:
                    handler(data)
            except Exception as e:
                logger.error(f"Error in handler for {event}: {e}")


def _handler_name(handler: Callable) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)
