"""Debounced caret blink scheduler for text inputs."""

from caretblink.blink import AsyncioHost, BlinkScheduler, HostScheduler
from caretblink.config import CURSOR_WIDTH, BlinkTiming

__all__ = [
    "CURSOR_WIDTH",
    "AsyncioHost",
    "BlinkScheduler",
    "BlinkTiming",
    "HostScheduler",
]
