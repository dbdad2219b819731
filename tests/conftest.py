import pytest
from loguru import logger

from history_engine.core.commands import reset_command_manager


@pytest.fixture(autouse=True)
def reset_shared_manager():
    """Every test starts without a shared CommandManager."""
    reset_command_manager()
    yield
    reset_command_manager()


@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)


class FakeClock:
    """Deterministic clock in seconds for merge-window tests."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def clock():
    return FakeClock()
