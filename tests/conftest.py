"""Shared fixtures for caretblink tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def reset_caretblink_logger() -> Iterator[None]:
    """Undo configure_logging so caplog sees records in every test."""
    yield
    logger = logging.getLogger("caretblink")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
