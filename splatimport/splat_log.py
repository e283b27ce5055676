"""Process-wide log sink for importer diagnostics."""

from __future__ import annotations

import enum
from typing import Callable, Optional

__all__ = ["Level", "LogReceiver", "set_log_receiver", "log_error", "log_warn"]


class Level(enum.IntEnum):
    """Severity of a diagnostic message."""

    ERROR = 0
    WARNING = 1


LogReceiver = Callable[[Level, str], None]


class _Sink:
    """Holds the currently installed receiver."""

    def __init__(self) -> None:
        self.receiver: Optional[LogReceiver] = None


_sink = _Sink()


def set_log_receiver(receiver: Optional[LogReceiver]) -> None:
    """Install the callable that receives messages, or ``None`` to drop them."""
    if receiver is not None and not callable(receiver):
        raise TypeError("log receiver must be callable or None")
    _sink.receiver = receiver


def _send(level: Level, message: str) -> None:
    receiver = _sink.receiver
    if receiver is None:
        return
    receiver(level, message)


def log_error(message: str) -> None:
    """Send an error message to the installed receiver, if any."""
    _send(Level.ERROR, message)


def log_warn(message: str) -> None:
    """Send a warning message to the installed receiver, if any."""
    _send(Level.WARNING, message)