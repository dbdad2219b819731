"""
Execution guard - concurrency and failure tests.

In-flight operations drop concurrent calls; failing commands release the
guard and propagate their exception.
"""
import asyncio

import pytest

from history_engine.core.commands import CommandManager, ExecutionGuard, GuardBusyError, UndoableCommand
from history_engine.core.events import Events


class Box:
    def __init__(self):
        self.value = 0


class SlowSetCommand(UndoableCommand):
    """Sets a value once `gate` is released."""

    def __init__(self, box: Box, value: int, gate: asyncio.Event, slow_step: str = "execute"):
        self.box = box
        self.value = value
        self.gate = gate
        self.slow_step = slow_step
        self.previous = None

    async def execute(self):
        if self.slow_step == "execute":
            await self.gate.wait()
        self.previous = self.box.value
        self.box.value = self.value

    async def undo(self):
        if self.slow_step == "undo":
            await self.gate.wait()
        self.box.value = self.previous


class SetCommand(UndoableCommand):
    def __init__(self, box: Box, value: int):
        self.box = box
        self.value = value
        self.previous = None

    async def execute(self):
        self.previous = self.box.value
        self.box.value = self.value

    async def undo(self):
        self.box.value = self.previous


class FailingCommand(UndoableCommand):
    def __init__(self, fail_on: str):
        self.fail_on = fail_on

    async def execute(self):
        if self.fail_on == "execute":
            raise RuntimeError("execute failed")

    async def undo(self):
        if self.fail_on == "undo":
            raise RuntimeError("undo failed")

    async def redo(self):
        if self.fail_on == "redo":
            raise RuntimeError("redo failed")


class DescribedCommand(SetCommand):
    """Counts reads of its description."""

    def __init__(self):
        super().__init__(Box(), 1)
        self.description_reads = 0

    @property
    def description(self) -> str:
        self.description_reads += 1
        return "described"


async def _start(coro):
    """Start a coroutine as a task and let it run up to its first suspension."""
    task = asyncio.create_task(coro)
    await asyncio.sleep(0)
    return task


class TestExecutionGuard:

    def test_try_acquire_and_release(self):
        guard = ExecutionGuard()
        assert guard.try_acquire() is True
        assert guard.busy is True
        assert guard.try_acquire() is False

        guard.release()
        assert guard.busy is False

    def test_hold_releases_on_error(self):
        guard = ExecutionGuard()
        with pytest.raises(ValueError):
            with guard.hold():
                assert guard.busy is True
                raise ValueError("boom")
        assert guard.busy is False

    def test_hold_when_busy_raises(self):
        guard = ExecutionGuard()
        with guard.hold():
            with pytest.raises(GuardBusyError):
                with guard.hold():
                    pass
            assert guard.busy is True
        assert guard.busy is False


class TestConcurrentCalls:

    @pytest.fixture
    def manager(self):
        return CommandManager({"merge_window": 0})

    @pytest.mark.asyncio
    async def test_concurrent_execute_is_dropped(self, manager):
        box = Box()
        gate = asyncio.Event()
        slow = SlowSetCommand(box, 1, gate)
        second = SetCommand(box, 2)

        task = await _start(manager.execute(slow))
        assert manager.executing is True

        await manager.execute(second)

        assert box.value == 0
        assert second.previous is None
        assert manager.undo_stack_size == 0

        gate.set()
        await task

        assert box.value == 1
        assert manager.undo_stack_size == 1
        assert manager.executing is False

    @pytest.mark.asyncio
    async def test_undo_and_redo_dropped_during_execute(self, manager):
        box = Box()
        await manager.execute(SetCommand(box, 1))
        await manager.execute(SetCommand(box, 2))
        await manager.undo()

        gate = asyncio.Event()
        task = await _start(manager.execute(SlowSetCommand(box, 3, gate)))

        assert await manager.undo() is False
        assert await manager.redo() is False
        assert manager.undo_stack_size == 1
        assert manager.redo_stack_size == 1

        gate.set()
        await task
        assert manager.undo_stack_size == 2
        assert manager.redo_stack_size == 0

    @pytest.mark.asyncio
    async def test_execute_dropped_during_undo(self, manager):
        box = Box()
        gate = asyncio.Event()
        await manager.execute(SlowSetCommand(box, 1, gate, slow_step="undo"))

        task = await _start(manager.undo())
        await manager.execute(SetCommand(box, 5))

        assert box.value == 1
        gate.set()
        assert await task is True
        assert box.value == 0
        assert manager.undo_stack_size == 0
        assert manager.redo_stack_size == 1

    @pytest.mark.asyncio
    async def test_go_to_history_refused_while_busy(self, manager):
        box = Box()
        await manager.execute(SetCommand(box, 1))
        target = manager.get_history()[0].id

        gate = asyncio.Event()
        task = await _start(manager.execute(SlowSetCommand(box, 2, gate)))

        assert await manager.go_to_history(target) is False

        gate.set()
        await task

    @pytest.mark.asyncio
    async def test_dropped_call_publishes_nothing(self, manager):
        received = []
        for event in Events.ALL:
            manager.on(event, received.append)

        gate = asyncio.Event()
        task = await _start(manager.execute(SlowSetCommand(Box(), 1, gate)))

        await manager.execute(SetCommand(Box(), 2))
        await manager.undo()
        await manager.redo()

        assert received == []
        gate.set()
        await task
        assert len(received) == 2

    @pytest.mark.asyncio
    async def test_dropped_call_skips_description_without_debug(self, manager):
        dropped = DescribedCommand()
        gate = asyncio.Event()
        task = await _start(manager.execute(SlowSetCommand(Box(), 1, gate)))

        await manager.execute(dropped)

        assert dropped.description_reads == 0
        gate.set()
        await task

    @pytest.mark.asyncio
    async def test_dropped_call_logged_in_debug_mode(self, caplog):
        manager = CommandManager({"debug": True})
        dropped = DescribedCommand()
        gate = asyncio.Event()
        task = await _start(manager.execute(SlowSetCommand(Box(), 1, gate)))

        await manager.execute(dropped)

        assert "another operation is running (described)" in caplog.text
        gate.set()
        await task


class TestCommandFailure:

    @pytest.fixture
    def manager(self):
        return CommandManager()

    @pytest.mark.asyncio
    async def test_failing_execute_propagates(self, manager, caplog):
        with pytest.raises(RuntimeError, match="execute failed"):
            await manager.execute(FailingCommand("execute"))

        assert manager.executing is False
        assert manager.undo_stack_size == 0
        assert "Command execution failed" in caplog.text

    @pytest.mark.asyncio
    async def test_guard_released_after_failure(self, manager):
        with pytest.raises(RuntimeError):
            await manager.execute(FailingCommand("execute"))

        box = Box()
        await manager.execute(SetCommand(box, 3))
        assert box.value == 3
        assert manager.undo_stack_size == 1

    @pytest.mark.asyncio
    async def test_failing_execute_keeps_redo_stack(self, manager):
        await manager.execute(SetCommand(Box(), 1))
        await manager.undo()

        with pytest.raises(RuntimeError):
            await manager.execute(FailingCommand("execute"))

        assert manager.redo_stack_size == 1

    @pytest.mark.asyncio
    async def test_failing_undo_restores_entry(self, manager):
        await manager.execute(FailingCommand("undo"))
        entry = manager.get_history()[0]

        with pytest.raises(RuntimeError, match="undo failed"):
            await manager.undo()

        assert manager.executing is False
        assert manager.get_history() == [entry]
        assert manager.redo_stack_size == 0

    @pytest.mark.asyncio
    async def test_failing_redo_restores_entry(self, manager):
        await manager.execute(FailingCommand("redo"))
        await manager.undo()
        entry = manager.get_redo_history()[0]

        with pytest.raises(RuntimeError, match="redo failed"):
            await manager.redo()

        assert manager.executing is False
        assert manager.get_redo_history() == [entry]
        assert manager.undo_stack_size == 0

    @pytest.mark.asyncio
    async def test_failure_publishes_no_events(self, manager):
        received = []
        for event in Events.ALL:
            manager.on(event, received.append)

        with pytest.raises(RuntimeError):
            await manager.execute(FailingCommand("execute"))

        assert received == []
