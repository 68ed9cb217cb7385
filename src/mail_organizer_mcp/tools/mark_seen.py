"""Mark seen MCP tool."""

from typing import Any

from mail_organizer_mcp.email.models import DEFAULT_MAILBOX
from mail_organizer_mcp.exceptions import InvalidArgumentError
from mail_organizer_mcp.tools._arguments import bool_arg, mailbox_arg, uids_arg
from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool


@register_tool
class MarkSeenTool(BaseTool):
    name = "mark_seen"
    description = "Mark emails as read or unread"
    input_schema = {
        "type": "object",
        "properties": {
            "mailbox": {"type": "string", "default": DEFAULT_MAILBOX},
            "uids": {"type": "array", "items": {"type": "number"}},
            "seen": {"type": "boolean", "description": "true for read, false for unread"},
        },
        "required": ["uids", "seen"],
    }

    @handle_tool_errors("marking emails")
    def run(self, arguments: dict[str, Any]) -> str:
        mailbox = mailbox_arg(arguments)
        uids = uids_arg(arguments)
        seen = bool_arg(arguments, "seen")
        if seen is None:
            raise InvalidArgumentError("'seen' is required")

        self.session.mark_seen(mailbox, uids, seen)
        return f"Marked {len(uids)} emails as {'read' if seen else 'unread'}"
