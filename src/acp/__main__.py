"""
ACP client CLI entry point.

Answer the ACP handshake on standard input/output. Diagnostics go to stderr,
since stdout carries the protocol.

Usage::

    python -m acp --name SWAPP --protocol-min 1 --protocol-max 3
    ACP_NAME=SWAPP ACP_PROTOCOL_MAX=2 python -m acp -v

Options:
    --name           Connection name the host must assert (default: $ACP_NAME)
    --protocol-min   Lowest supported protocol version (default: $ACP_PROTOCOL_MIN or 0)
    --protocol-max   Highest supported protocol version (default: $ACP_PROTOCOL_MAX or 0)
    -v, --verbose    Enable debug logging
    --no-color       Disable colored logging output
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from acp.channel import Channel
from acp.config import ENV_NAME, ENV_PROTOCOL_MAX, ENV_PROTOCOL_MIN, Connection
from acp.handshake import Handshake
from acp.types import AcpError

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure stderr logging with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    # stdout belongs to the protocol.
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser. Unset options fall back to the environment."""
    parser = argparse.ArgumentParser(
        prog="acp",
        description="ACP handshake client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--name",
        help=f"Connection name the host must assert (default: ${ENV_NAME})",
    )
    parser.add_argument(
        "--protocol-min",
        type=int,
        help=f"Lowest supported protocol version (default: ${ENV_PROTOCOL_MIN} or 0)",
    )
    parser.add_argument(
        "--protocol-max",
        type=int,
        help=f"Highest supported protocol version (default: ${ENV_PROTOCOL_MAX} or 0)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    return parser


def run(connection: Connection, channel: Channel) -> int:
    """
    Run one handshake and map the outcome to an exit status.

    Returns:
        0 when connected, 1 when the handshake failed.
    """
    try:
        version = Handshake(channel, connection).connect()
    except AcpError as e:
        logger.error("Handshake failed: %s", e)
        return 1

    logger.info("Connected as %s using protocol %d", connection.name, version)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Flags win over the environment. ValidationError is a ValueError.
    try:
        connection = Connection.from_env(
            name=args.name,
            protocol_min=args.protocol_min,
            protocol_max=args.protocol_max,
        )
    except ValueError as e:
        parser.error(f"invalid connection settings: {e}")

    setup_logging(args.verbose, args.no_color)

    return run(connection, Channel.stdio())


if __name__ == "__main__":
    sys.exit(main())
