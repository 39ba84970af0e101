#!/usr/bin/env python3
"""
CLI for tailing a file.

Usage:
    python -m src.cli /var/log/app.log                # push mode, poll every second
    python -m src.cli /var/log/app.log --interval 5   # push mode, poll every 5 seconds
    python -m src.cli /var/log/app.log --pull         # caller-driven polling
"""

import argparse
import logging
import os
import signal
import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.tailer import (
    FileLostError,
    QueueClosedError,
    QueueEmptyError,
    TailerError,
    Watcher,
    WatcherConfig,
)


DEFAULT_INTERVAL = 1.0

logger = logging.getLogger("cli")


class GracefulShutdown:
    """Handle graceful shutdown on SIGINT/SIGTERM."""

    def __init__(self):
        self.should_exit = False
        signal.signal(signal.SIGINT, self._handler)
        signal.signal(signal.SIGTERM, self._handler)

    def _handler(self, signum, frame):
        logger.info("Received shutdown signal, stopping...")
        self.should_exit = True


def load_env() -> None:
    """Load .env from the project root, falling back to the working directory."""
    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        load_dotenv()


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def write_bytes(data: bytes) -> None:
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def cmd_push(watcher: Watcher, shutdown: GracefulShutdown) -> int:
    """Drain the watcher's queues until shutdown or the file is lost."""
    while not shutdown.should_exit:
        try:
            data = watcher.byte_queue.get(timeout=0.5)
        except QueueEmptyError:
            continue
        except QueueClosedError:
            break

        if data:
            write_bytes(data)

        # Errors are queued ahead of their byte delivery, so any error raised
        # by this tick is already waiting. Under backpressure the one drained
        # here may belong to a later tick.
        try:
            error = watcher.error_queue.get_nowait()
        except (QueueEmptyError, QueueClosedError):
            continue

        if isinstance(error, FileLostError):
            logger.error(str(error))
            return 1
        logger.warning(f"Tail error: {error}")

    return 0


def cmd_pull(watcher: Watcher, interval: float, shutdown: GracefulShutdown) -> int:
    """Poll the watcher every interval until shutdown or the file is lost."""
    while not shutdown.should_exit:
        try:
            data = watcher.get_new_bytes()
        except FileLostError as e:
            logger.error(str(e))
            return 1
        except TailerError as e:
            data = getattr(e, "partial", b"")
            logger.warning(f"Tail error: {e}")

        if data:
            write_bytes(data)
        time.sleep(interval)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print bytes appended to a file as they arrive",
    )
    parser.add_argument("file", help="File to tail")
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help=f"Seconds between polls (default: $TAILER_POLL_INTERVAL or {DEFAULT_INTERVAL})",
    )
    parser.add_argument(
        "--pull",
        action="store_true",
        help="Poll from the foreground instead of a background thread",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $TAILER_LOG_LEVEL or INFO)",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> Tuple[WatcherConfig, float]:
    """Merge CLI arguments over environment settings.

    Returns the watcher config and the polling interval in seconds.
    """
    config = WatcherConfig.from_env()
    if args.interval is not None:
        interval = args.interval
    else:
        interval = config.poll_interval or DEFAULT_INTERVAL

    # Validated in both modes, pull mode sleeps on it
    config = replace(config, poll_interval=interval)
    if args.pull:
        return replace(config, poll_interval=None), interval
    return config, interval


def main(argv: Optional[List[str]] = None) -> int:
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level or os.environ.get("TAILER_LOG_LEVEL", "INFO"))

    try:
        config, interval = resolve_config(args)
    except ValueError as e:
        parser.error(str(e))

    path = Path(args.file).resolve()
    try:
        watcher = Watcher(path, config=config)
    except TailerError as e:
        logger.error(str(e))
        return 1

    shutdown = GracefulShutdown()
    logger.info(f"Tailing {path} ({'pull' if args.pull else 'push'} mode)")

    with watcher:
        if watcher.push_mode:
            code = cmd_push(watcher, shutdown)
        else:
            code = cmd_pull(watcher, interval, shutdown)

    logger.info("Tail stopped")
    return code


if __name__ == "__main__":
    sys.exit(main())
