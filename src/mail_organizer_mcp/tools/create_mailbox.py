"""Create mailbox MCP tool."""

from typing import Any

from mail_organizer_mcp.tools._arguments import required_str
from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool


@register_tool
class CreateMailboxTool(BaseTool):
    name = "create_mailbox"
    description = "Create a new mailbox/folder"
    input_schema = {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Mailbox name"},
        },
        "required": ["name"],
    }

    @handle_tool_errors("creating mailbox")
    def run(self, arguments: dict[str, Any]) -> str:
        name = required_str(arguments, "name")
        self.session.create_mailbox(name)
        return f'Mailbox "{name}" created successfully'
