"""Caret blink scheduling.

The caret toggles every blink interval. Every toggle notifies the host, and
the painter re-reads ``visible()`` to decide whether to draw the caret.

Each deferred continuation captures the epoch that was live when it was
scheduled. When it fires against a different epoch it has been superseded
and only forces the caret flag visible, without repainting or
rescheduling, so overlapping timer chains never both drive visibility.
The host timer is never cancelled. Epoch numbers are not reused after
stop(), so a chain from before a restart can never match again.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable

from caretblink.blink.host import HostScheduler, TimerHandle
from caretblink.config import BlinkTiming
from caretblink.logging import get_logger


class BlinkScheduler:
    """Drives caret visibility for a single text input."""

    def __init__(
        self,
        host: HostScheduler,
        *,
        timing: BlinkTiming | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._host = host
        self._timing = timing if timing is not None else BlinkTiming()
        self._logger = logger if logger is not None else get_logger("blink")

        self._visible = False
        self._paused = False
        self._epoch = 0
        # Epochs are never handed out twice, even across stop()
        self._last_epoch = 0
        self._task: TimerHandle | None = None

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def timing(self) -> BlinkTiming:
        return self._timing

    def start(self) -> None:
        """Start blinking from the current epoch."""
        self._logger.debug("Start blinking at epoch %d", self._epoch)
        self._blink(self._epoch)

    def stop(self) -> None:
        """Stop blinking. In-flight continuations become stale."""
        self._logger.debug("Stop blinking at epoch %d", self._epoch)
        self._epoch = 0
        self._host.notify()

    def visible(self) -> bool:
        """Whether the caret should be painted. Always true while paused."""
        return self._paused or self._visible

    def pause(self) -> None:
        """
        Pause blinking, and resume it after the pause delay.

        After the delay the caret stays visible for one full blink interval
        before toggling, so it does not flash off right after an edit.
        Pausing again before the delay elapses restarts the delay.
        """
        self._paused = True
        self._visible = True
        self._host.notify()

        epoch = self._next_epoch()
        self._logger.debug("Paused at epoch %d", epoch)
        self._task = self._host.after(
            self._timing.pause_delay_ms,
            self._continuation(BlinkScheduler._resume, epoch),
        )

    def _next_epoch(self) -> int:
        self._last_epoch += 1
        self._epoch = self._last_epoch
        return self._epoch

    def _blink(self, epoch: int) -> None:
        if epoch != self._epoch:
            self._logger.debug(
                "Skipping stale blink for epoch %d (current %d)", epoch, self._epoch
            )
            self._visible = True
            return
        if self._paused:
            self._visible = True
            return

        self._visible = not self._visible
        self._host.notify()

        # Schedule the next blink
        epoch = self._next_epoch()
        self._task = self._host.after(
            self._timing.interval_ms,
            self._continuation(BlinkScheduler._blink, epoch),
        )

    def _resume(self, epoch: int) -> None:
        if epoch != self._epoch:
            self._logger.debug(
                "Skipping stale resume for epoch %d (current %d)", epoch, self._epoch
            )
            return

        self._paused = False
        self._visible = True
        self._host.notify()

        epoch = self._next_epoch()
        self._logger.debug("Resumed, first blink scheduled at epoch %d", epoch)
        self._task = self._host.after(
            self._timing.interval_ms,
            self._continuation(BlinkScheduler._blink, epoch),
        )

    def _continuation(
        self, step: Callable[[BlinkScheduler, int], None], epoch: int
    ) -> Callable[[], None]:
        """
        Bind a step method to ``epoch`` behind a weak reference to this scheduler.

        The callback never holds a strong reference, so a scheduler dropped
        with its widget is collected and the pending callback does nothing.

        Args:
            step: Unbound step method, called as ``step(scheduler, epoch)``.
            epoch: Epoch captured at scheduling time.

        Returns:
            Zero-argument callback for the host timer.
        """
        ref = weakref.ref(self)
        logger = self._logger
        name = step.__name__

        def fire() -> None:
            this = ref()
            if this is None:
                logger.debug("Scheduler collected before %s(%d) fired", name, epoch)
                return
            step(this, epoch)

        return fire
