"""
Execution guard - one busy flag serializing stack-mutating operations.

Calls observing the flag are dropped, never queued.
"""
from contextlib import contextmanager
from typing import Iterator


class GuardBusyError(RuntimeError):
    """Raised by ExecutionGuard.hold() when an operation is already running."""
    pass


class ExecutionGuard:
    """Non-reentrant busy flag with scoped acquisition."""

    def __init__(self) -> None:
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def try_acquire(self) -> bool:
        if self._busy:
            return False
        self._busy = True
        return True

    def release(self) -> None:
        self._busy = False

    @contextmanager
    def hold(self) -> Iterator[None]:
        """
        Hold the guard for the duration of the block.

        Raises:
            GuardBusyError: If the guard is already held
        """
        if not self.try_acquire():
            raise GuardBusyError("Another history operation is in progress")
        try:
            yield
        finally:
            self.release()
