"""Command-line interface for caretblink.

Runs a terminal demo: a caret is drawn on stdout and blinks until the
duration elapses. Simulated keystrokes pause the blink like typing would.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from caretblink.blink import AsyncioHost, BlinkScheduler
from caretblink.config import BLINK_INTERVAL_MS, PAUSE_DELAY_MS, BlinkTiming
from caretblink.logging import configure_logging, get_logger

CARET = "|"


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Parsed command-line arguments."""

    timing: BlinkTiming
    duration: float
    keystroke_every_ms: int | None
    log_level: str
    log_file: Path | None
    debug: bool


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments as CliArgs dataclass.
    """
    parser = argparse.ArgumentParser(
        prog="caretblink",
        description="Blink a text caret in the terminal",
    )

    parser.add_argument(
        "--interval-ms",
        type=int,
        default=BLINK_INTERVAL_MS,
        help=f"Blink interval in milliseconds (default: {BLINK_INTERVAL_MS})",
    )

    parser.add_argument(
        "--pause-delay-ms",
        type=int,
        default=PAUSE_DELAY_MS,
        help=(
            "Quiet delay after a keystroke before blinking resumes "
            f"(default: {PAUSE_DELAY_MS})"
        ),
    )

    parser.add_argument(
        "--duration",
        type=float,
        default=5.0,
        help="Seconds to run the demo (default: 5.0)",
    )

    parser.add_argument(
        "--keystroke-every-ms",
        type=int,
        default=None,
        help="Simulate a keystroke at this period (default: no typing)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: INFO, or DEBUG if --debug is set)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: stderr)",
    )

    parser.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Enable debug mode (sets log level to DEBUG unless --log-level is specified)",
    )

    args = parser.parse_args(argv)

    try:
        timing = BlinkTiming(
            interval_ms=args.interval_ms, pause_delay_ms=args.pause_delay_ms
        )
    except ValueError as exc:
        parser.error(str(exc))

    if args.duration <= 0:
        parser.error("--duration must be positive")
    if args.keystroke_every_ms is not None and args.keystroke_every_ms <= 0:
        parser.error("--keystroke-every-ms must be positive")

    # Determine log level: explicit --log-level wins, otherwise --debug sets DEBUG
    if args.log_level is not None:
        log_level = args.log_level
    elif args.debug:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    return CliArgs(
        timing=timing,
        duration=args.duration,
        keystroke_every_ms=args.keystroke_every_ms,
        log_level=log_level,
        log_file=args.log_file,
        debug=args.debug,
    )


async def run_demo(
    args: CliArgs,
    *,
    out: TextIO,
    logger: logging.Logger,
) -> None:
    """
    Blink a caret on ``out`` for ``args.duration`` seconds.

    Args:
        args: Parsed command-line arguments.
        out: Stream the caret is drawn on.
        logger: Logger for demo progress.
    """
    host = AsyncioHost()
    scheduler = BlinkScheduler(host, timing=args.timing)

    def repaint() -> None:
        out.write("\r" + (CARET if scheduler.visible() else " "))
        out.flush()

    unsubscribe = host.observe(repaint)
    scheduler.start()

    typing_task: asyncio.Task[None] | None = None
    if args.keystroke_every_ms is not None:
        typing_task = asyncio.create_task(
            _type_keys(scheduler, args.keystroke_every_ms)
        )

    try:
        await asyncio.sleep(args.duration)
    finally:
        if typing_task is not None:
            typing_task.cancel()
            try:
                await typing_task
            except asyncio.CancelledError:
                pass
        scheduler.stop()
        unsubscribe()
        out.write("\n")
        out.flush()
        logger.debug("Demo finished at epoch %d", scheduler.epoch)


async def _type_keys(scheduler: BlinkScheduler, every_ms: int) -> None:
    while True:
        await asyncio.sleep(every_ms / 1000)
        scheduler.pause()


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the terminal demo.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, 1 for error).
    """
    args = parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")

    logger.info("Starting caret demo for %.1fs", args.duration)
    logger.debug("Configuration: %s", args)

    try:
        asyncio.run(run_demo(args, out=sys.stdout, logger=logger))
        return 0

    except KeyboardInterrupt:
        logger.info("Demo stopped by user")
        return 0

    except Exception:
        logger.critical("Fatal error in demo", exc_info=True)
        return 1
