"""Command-line entry point for mail-organizer-mcp."""

import argparse
import asyncio
import logging
import sys

from mail_organizer_mcp import __version__
from mail_organizer_mcp.config import load_settings
from mail_organizer_mcp.exceptions import ConfigError
from mail_organizer_mcp.mailbox import MailboxSession
from mail_organizer_mcp.server import check_connections, configure_logging, run_server

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mail-organizer-mcp",
        description="Mail Organizer MCP - manage an IMAP mailbox and send mail from an AI agent",
    )
    parser.add_argument(
        "--env-file",
        help="Read settings from this dotenv file instead of ./.env",
    )
    parser.add_argument(
        "--log-level",
        help="Override the configured log level (DEBUG, INFO, WARNING, ...)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = _build_parser().parse_args(argv)

    try:
        settings = load_settings(args.env_file)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    configure_logging(args.log_level or settings.log_level)

    if settings.startup_check:
        check_connections(settings)

    session = MailboxSession(settings.imap_config(), settings.smtp_config())
    logger.info("Starting MCP server on stdio")
    try:
        asyncio.run(run_server(session))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        session.disconnect()
    return 0


if __name__ == "__main__":
    sys.exit(main())
