"""Error handling utilities for host callbacks."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")


def wrap_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[[], R],
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator that contains exceptions raised by a host callback.

    A repaint observer that raises must not take down the timer loop that
    called it. The exception is logged with traceback and a default value
    is returned instead.

    Args:
        logger: Logger instance for error logging.
        feature_name: Name of the callback (for error messages).
        default_factory: Callable that returns a default value on error.

    Returns:
        Decorator function.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception("Error in %s callback", feature_name)
                return default_factory()

        return wrapper

    return decorator
