"""
Command-line entry point for relaylog.

``relaylog send`` ships one or more messages to a receiving endpoint through a
batch dispatcher, which is handy for checking that an endpoint is reachable
and wired to the expected server loggers.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Sequence

from .core.dispatcher import BatchDispatcher
from .core.levels import parse_level
from .core.record import LogRecord
from .core.settings import Settings
from .sinks.http import HttpRemoteSink, HttpRemoteSinkConfig


def _parse_header(value: str) -> tuple[str, str]:
    key, sep, val = value.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"header must be KEY=VALUE, got '{value}'")
    return key.strip(), val.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="relaylog", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    send = sub.add_parser("send", help="Ship messages to a remote logging endpoint")
    send.add_argument("messages", nargs="+", help="Messages to ship, in order")
    send.add_argument("--endpoint", help="Endpoint URL (default: RELAYLOG_REMOTE__ENDPOINT)")  # fmt: skip
    send.add_argument("--level", default="INFO", help="Level of every message")
    send.add_argument("--category", default=None, help="Category of every message")
    send.add_argument("--min-level", default=None, help="Dispatcher threshold")
    send.add_argument(
        "--header",
        action="append",
        type=_parse_header,
        default=[],
        help="Extra HTTP header as KEY=VALUE (repeatable)",
    )
    send.add_argument("--timeout", type=float, default=None, help="Seconds to wait")
    return parser


async def _send(args: argparse.Namespace, settings: Settings) -> int:
    endpoint = args.endpoint or settings.remote.endpoint
    if not endpoint:
        print("Error: no endpoint given", file=sys.stderr)
        return 2
    headers = {**settings.remote.headers, **dict(args.header)}
    timeout = args.timeout or settings.remote.timeout_seconds
    sink = HttpRemoteSink(
        HttpRemoteSinkConfig(endpoint=endpoint, headers=headers, timeout_seconds=timeout)
    )
    min_level = (
        parse_level(args.min_level)
        if args.min_level
        else settings.remote.resolved_min_level()
    )
    dispatcher = BatchDispatcher(
        sink,
        min_level=min_level,
        coalescing_delay=settings.remote.coalescing_delay_seconds,
    )
    category = args.category or settings.core.default_category
    level = parse_level(args.level)

    await sink.start()
    try:
        for message in args.messages:
            dispatcher.publish(LogRecord.create(level, message, category=category))
        if not await dispatcher.drain(timeout=timeout * 2):
            print("Error: delivery timed out", file=sys.stderr)
            return 1
    finally:
        await sink.stop()

    if dispatcher.failure is not None:
        print(f"Error: {dispatcher.failure}", file=sys.stderr)
        return 1
    if dispatcher.last_error:
        print(f"Server reported: {dispatcher.last_error}", file=sys.stderr)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = Settings()
        if args.command == "send":
            return asyncio.run(_send(args, settings))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 1  # pragma: no cover - argparse enforces a command


if __name__ == "__main__":
    sys.exit(main())
