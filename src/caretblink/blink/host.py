"""Host scheduler used by the blink loop.

The host provides two things: a way to run a callback once after a delay on
the caller's execution context, and a way to signal that observable state
changed so the painting layer can re-read it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from caretblink.error_handling import wrap_handler
from caretblink.logging import get_logger


class TimerHandle(Protocol):
    """Handle to a deferred callback."""

    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...


class HostScheduler(Protocol):
    """Deferred-callback scheduling and change notification."""

    def after(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms`` milliseconds."""
        ...

    def notify(self) -> None:
        """Signal that observable state changed."""
        ...


class AsyncioHost:
    """HostScheduler backed by an asyncio event loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._observers: list[Callable[[], None]] = []
        self._logger = logger if logger is not None else get_logger("host")

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def after(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        """
        Schedule ``callback`` on the event loop after ``delay_ms``.

        Args:
            delay_ms: Delay in milliseconds.
            callback: Zero-argument callable run on the loop thread.

        Returns:
            The loop's timer handle.
        """
        return self.loop.call_later(delay_ms / 1000, callback)

    def observe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register a callback run on every notify.

        Args:
            callback: Observer, typically a repaint request.

        Returns:
            Function that unregisters the observer.
        """
        wrapped = wrap_handler(
            logger=self._logger,
            feature_name=getattr(callback, "__name__", "observer"),
            default_factory=lambda: None,
        )(callback)
        self._observers.append(wrapped)

        def unsubscribe() -> None:
            if wrapped in self._observers:
                self._observers.remove(wrapped)

        return unsubscribe

    def notify(self) -> None:
        for observer in list(self._observers):
            observer()
