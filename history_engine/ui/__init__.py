"""Qt integration for the history engine (requires PySide6)."""
from .signals import HistorySignals

__all__ = ["HistorySignals"]
