"""Tests for the asyncio-backed host scheduler."""

from __future__ import annotations

import asyncio
import logging

import pytest

from caretblink.blink.cursor import BlinkScheduler
from caretblink.blink.host import AsyncioHost
from caretblink.config import BlinkTiming


class TestAsyncioHost:
    """Tests for AsyncioHost."""

    @pytest.mark.asyncio
    async def test_after_runs_callback(self) -> None:
        """Callback runs once after the delay."""
        host = AsyncioHost()
        calls: list[int] = []

        host.after(10, lambda: calls.append(1))
        assert calls == []

        await asyncio.sleep(0.1)
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_after_returns_cancellable_handle(self) -> None:
        """Returned handle is the loop's timer handle."""
        host = AsyncioHost()
        calls: list[int] = []

        handle = host.after(10, lambda: calls.append(1))
        handle.cancel()

        await asyncio.sleep(0.05)
        assert calls == []
        assert handle.cancelled()

    @pytest.mark.asyncio
    async def test_uses_explicit_loop(self) -> None:
        """An explicit loop is used instead of the running one."""
        loop = asyncio.get_running_loop()
        host = AsyncioHost(loop)
        assert host.loop is loop

    def test_requires_running_loop(self) -> None:
        """Without a loop, scheduling outside a running loop fails."""
        host = AsyncioHost()
        with pytest.raises(RuntimeError):
            host.after(10, lambda: None)

    def test_notify_calls_observers_in_order(self) -> None:
        """notify calls every observer in registration order."""
        host = AsyncioHost()
        calls: list[str] = []
        host.observe(lambda: calls.append("a"))
        host.observe(lambda: calls.append("b"))

        host.notify()

        assert calls == ["a", "b"]

    def test_unsubscribe(self) -> None:
        """An unsubscribed observer is no longer called."""
        host = AsyncioHost()
        calls: list[str] = []
        unsubscribe = host.observe(lambda: calls.append("a"))

        unsubscribe()
        unsubscribe()
        host.notify()

        assert calls == []

    def test_failing_observer_is_contained(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An observer that raises is logged and others still run."""
        host = AsyncioHost(logger=logging.getLogger("caretblink.test"))
        calls: list[str] = []

        def broken_repaint() -> None:
            raise RuntimeError("paint failed")

        host.observe(broken_repaint)
        host.observe(lambda: calls.append("ok"))

        with caplog.at_level(logging.ERROR):
            host.notify()

        assert calls == ["ok"]
        assert "broken_repaint" in caplog.text
        assert "paint failed" in caplog.text


class TestBlinkOnEventLoop:
    """BlinkScheduler running on a real event loop."""

    @pytest.fixture
    def timing(self) -> BlinkTiming:
        """Short timing so tests run fast."""
        return BlinkTiming(interval_ms=60, pause_delay_ms=30)

    @pytest.mark.asyncio
    async def test_blinks_and_notifies(self, timing: BlinkTiming) -> None:
        """The caret toggles and observers see each change."""
        host = AsyncioHost()
        scheduler = BlinkScheduler(host, timing=timing)
        seen: list[bool] = []
        host.observe(lambda: seen.append(scheduler.visible()))

        scheduler.start()
        await asyncio.sleep(0.2)
        scheduler.stop()

        assert seen[0] is True
        assert False in seen
        assert len(seen) >= 3

    @pytest.mark.asyncio
    async def test_stop_halts_notifications(self, timing: BlinkTiming) -> None:
        """No further repaint requests arrive after stop."""
        host = AsyncioHost()
        scheduler = BlinkScheduler(host, timing=timing)
        seen: list[bool] = []
        host.observe(lambda: seen.append(scheduler.visible()))

        scheduler.start()
        await asyncio.sleep(0.1)
        scheduler.stop()
        count = len(seen)

        await asyncio.sleep(0.2)
        assert len(seen) == count

    @pytest.mark.asyncio
    async def test_pause_holds_caret_visible(self, timing: BlinkTiming) -> None:
        """Pausing keeps the caret visible until after the pause delay."""
        host = AsyncioHost()
        scheduler = BlinkScheduler(host, timing=timing)

        scheduler.start()
        scheduler.pause()
        assert scheduler.visible() is True
        assert scheduler.paused is True

        await asyncio.sleep(0.01)
        assert scheduler.visible() is True

        await asyncio.sleep(0.1)
        assert scheduler.paused is False
        scheduler.stop()

    @pytest.mark.asyncio
    async def test_dropped_scheduler_timer_is_harmless(
        self, timing: BlinkTiming
    ) -> None:
        """A timer firing after its scheduler is gone does nothing."""
        host = AsyncioHost()
        seen: list[int] = []
        host.observe(lambda: seen.append(1))

        scheduler = BlinkScheduler(host, timing=timing)
        scheduler.start()
        del scheduler

        await asyncio.sleep(0.15)
        assert seen == [1]
