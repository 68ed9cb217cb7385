"""Mailbox tools exposed over MCP, registered on import."""

# isort: skip_file

from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import (
    execute_tool,
    get_all_tools,
    get_tool_class,
    get_tool_names,
    register_tool,
)

# Import tool modules to trigger registration via decorators
# These must be imported after registry to avoid circular imports
from mail_organizer_mcp.tools import list_mailboxes as _list_mailboxes  # noqa: F401
from mail_organizer_mcp.tools import create_mailbox as _create_mailbox  # noqa: F401
from mail_organizer_mcp.tools import delete_mailbox as _delete_mailbox  # noqa: F401
from mail_organizer_mcp.tools import search_emails as _search_emails  # noqa: F401
from mail_organizer_mcp.tools import get_email as _get_email  # noqa: F401
from mail_organizer_mcp.tools import list_all_emails as _list_all_emails  # noqa: F401
from mail_organizer_mcp.tools import move_emails as _move_emails  # noqa: F401
from mail_organizer_mcp.tools import delete_emails as _delete_emails  # noqa: F401
from mail_organizer_mcp.tools import mark_seen as _mark_seen  # noqa: F401
from mail_organizer_mcp.tools import flags as _flags  # noqa: F401
from mail_organizer_mcp.tools import send_mail as _send_mail  # noqa: F401

__all__ = [
    "BaseTool",
    "execute_tool",
    "get_all_tools",
    "get_tool_class",
    "get_tool_names",
    "register_tool",
]
