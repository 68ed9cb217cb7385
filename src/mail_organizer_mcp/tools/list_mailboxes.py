"""List mailboxes MCP tool."""

from typing import Any

from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool


@register_tool
class ListMailboxesTool(BaseTool):
    """List every mailbox by fully-qualified name."""

    name = "list_mailboxes"
    description = "List all available mailboxes/folders"
    input_schema = {"type": "object", "properties": {}}

    @handle_tool_errors("listing mailboxes")
    def run(self, arguments: dict[str, Any]) -> str:
        mailboxes = self.session.list_mailboxes()
        return f"Found {len(mailboxes)} mailboxes:\n" + "\n".join(mailboxes)
