"""Timing policy and platform constants for the caret."""

from __future__ import annotations

import dataclasses
import sys

BLINK_INTERVAL_MS = 500
PAUSE_DELAY_MS = 300

_MACOS_CURSOR_WIDTH = 1.5
# Integer width elsewhere so the caret is not blurred by anti-aliasing
_DEFAULT_CURSOR_WIDTH = 2.0


def cursor_width(platform: str | None = None) -> float:
    """
    Return the caret width in pixels for a platform.

    Args:
        platform: A ``sys.platform`` value. If None, uses the current platform.

    Returns:
        Caret width for painters to use.
    """
    if platform is None:
        platform = sys.platform
    if platform == "darwin":
        return _MACOS_CURSOR_WIDTH
    return _DEFAULT_CURSOR_WIDTH


CURSOR_WIDTH = cursor_width()


@dataclasses.dataclass(frozen=True)
class BlinkTiming:
    """Durations driving the blink loop, in milliseconds."""

    interval_ms: int = BLINK_INTERVAL_MS
    pause_delay_ms: int = PAUSE_DELAY_MS

    def __post_init__(self) -> None:
        if self.interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {self.interval_ms}")
        if self.pause_delay_ms <= 0:
            raise ValueError(
                f"pause_delay_ms must be positive, got {self.pause_delay_ms}"
            )
        # Resume holds the caret on for a full interval after the pause delay
        if self.pause_delay_ms >= self.interval_ms:
            raise ValueError(
                "pause_delay_ms must be shorter than interval_ms "
                f"({self.pause_delay_ms} >= {self.interval_ms})"
            )
