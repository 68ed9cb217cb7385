"""Move emails MCP tool."""

from typing import Any

from mail_organizer_mcp.email.models import DEFAULT_MAILBOX
from mail_organizer_mcp.tools._arguments import mailbox_arg, required_str, uids_arg
from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool


@register_tool
class MoveEmailsTool(BaseTool):
    name = "move_emails"
    description = "Move emails to another mailbox"
    input_schema = {
        "type": "object",
        "properties": {
            "mailbox": {"type": "string", "default": DEFAULT_MAILBOX},
            "uids": {"type": "array", "items": {"type": "number"}},
            "destination": {"type": "string", "description": "Target mailbox"},
        },
        "required": ["uids", "destination"],
    }

    @handle_tool_errors("moving emails")
    def run(self, arguments: dict[str, Any]) -> str:
        mailbox = mailbox_arg(arguments)
        uids = uids_arg(arguments)
        destination = required_str(arguments, "destination")

        self.session.move_emails(mailbox, uids, destination)
        return f'Moved {len(uids)} emails to "{destination}"'
