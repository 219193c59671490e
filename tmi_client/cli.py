"""Command line runner: connect, join and log every received message."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .config.loader import ConfigLoader
from .config.model import SessionConfig
from .errors.handling import log_error
from .errors.internal import ConfigError, InternalError
from .irc.session import Session
from .logging_config import LoggerConfigurator, error_aggregator
from .logs.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmi-client",
        description="Connect to Twitch chat and log incoming messages.",
    )
    parser.add_argument(
        "--config",
        help="JSON config file (default: $TMI_CONF_FILE or tmi_client.conf)",
    )
    parser.add_argument(
        "--room",
        action="append",
        dest="rooms",
        help="Extra room to join, e.g. '#channel'. May be repeated.",
    )
    parser.add_argument(
        "--transport", choices=("websocket", "tcp"), help="Transport to use"
    )
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Validate the configuration and exit",
    )
    return parser


def load_config(args: argparse.Namespace) -> SessionConfig:
    return ConfigLoader().get_configuration(
        args.config, {"transport": args.transport}, extra_rooms=args.rooms or ()
    )


async def run(config: SessionConfig) -> None:
    """Run one session until the server closes the connection."""
    async with await Session.create(config) as session:
        task, stream = session.start()
        async for message in stream:
            logger.log_event(
                "chat",
                "message",
                level=logging.INFO if message.is_privmsg else logging.DEBUG,
                user=message.sender,
                channel=message.target,
                command=message.command,
                params=message.params,
            )
        await task
        if stream.error is not None:
            raise stream.error


def health_check(args: argparse.Namespace) -> int:
    logger.log_event("app", "health_check")
    try:
        config = load_config(args)
    except ConfigError as e:
        logger.log_event("app", "health_check_failed", level=logging.ERROR, error=str(e))
        return 1
    logger.log_event(
        "app", "health_check_ok", user=config.nick, rooms=len(config.rooms)
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    LoggerConfigurator().configure()

    if args.health_check:
        return health_check(args)

    logger.log_event("app", "start")
    try:
        config = load_config(args)
        asyncio.run(run(config))
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
    except InternalError as e:
        log_error("Client stopped", e)
        return 1
    finally:
        error_aggregator.log_summary_report()
        logger.log_event("app", "shutdown")
    return 0


if __name__ == "__main__":
    sys.exit(main())
