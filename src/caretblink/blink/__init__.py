"""Caret blink scheduling and its host abstraction."""

from caretblink.blink.cursor import BlinkScheduler
from caretblink.blink.host import AsyncioHost, HostScheduler, TimerHandle

__all__ = [
    "AsyncioHost",
    "BlinkScheduler",
    "HostScheduler",
    "TimerHandle",
]
