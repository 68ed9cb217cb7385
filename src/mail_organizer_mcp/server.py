"""MCP server implementation for mail-organizer-mcp."""

import imaplib
import logging
import smtplib
import sys
from typing import Any

from imap_tools import ImapToolsError
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from mail_organizer_mcp.config import Settings
from mail_organizer_mcp.email.connectors.smtp import SMTPConnector
from mail_organizer_mcp.mailbox import MailboxSession
from mail_organizer_mcp.tools import execute_tool, get_all_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "mail-organizer-mcp"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr; stdout carries the MCP stream."""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


async def handle_list_tools() -> list[Tool]:
    """Return the list of available tools."""
    return get_all_tools()


async def handle_call_tool(
    session: MailboxSession, name: str, arguments: dict[str, Any] | None
) -> list[TextContent]:
    """Route a tool call to the registered tool.

    Tools render their own failures, so the only error handled here is an
    unknown tool name.
    """
    logger.debug("Tool call %s", name)
    try:
        return execute_tool(name, arguments or {}, session)
    except KeyError:
        logger.warning("Unknown tool requested: %s", name)
        return [TextContent(type="text", text=f"Unknown tool: {name}")]


def create_server(session: MailboxSession) -> Server:
    """Create the MCP server with every tool bound to ``session``.

    Input validation by the MCP SDK is turned off; each tool checks its own
    arguments so that all problems can be reported at once.
    """
    server: Server = Server(SERVER_NAME)

    @server.list_tools()  # type: ignore[no-untyped-call,untyped-decorator]
    async def list_tools() -> list[Tool]:
        return await handle_list_tools()

    @server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        return await handle_call_tool(session, name, arguments)

    return server


def check_connections(settings: Settings) -> bool:
    """Log in to both mail servers once to surface configuration problems early.

    Failures are logged as warnings and never stop the server.

    Returns:
        True if both servers accepted the login.
    """
    timeout = settings.startup_check_timeout
    ok = True

    probe = MailboxSession(settings.imap_config(timeout), settings.smtp_config(timeout))
    try:
        probe.connect()
        logger.info("IMAP connection check passed (host=%s)", settings.imap_host)
    except (ImapToolsError, imaplib.IMAP4.error, OSError) as e:
        ok = False
        logger.warning("IMAP connection check failed (host=%s): %s", settings.imap_host, e)
    finally:
        probe.disconnect()

    try:
        with SMTPConnector(settings.smtp_config(timeout)):
            logger.info("SMTP connection check passed (host=%s)", settings.smtp_host)
    except (smtplib.SMTPException, OSError) as e:
        ok = False
        logger.warning("SMTP connection check failed (host=%s): %s", settings.smtp_host, e)

    return ok


async def run_server(session: MailboxSession) -> None:
    """Run the MCP server using stdio transport."""
    server = create_server(session)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
