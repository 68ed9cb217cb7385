"""Delete mailbox MCP tool."""

from typing import Any

from mail_organizer_mcp.email.models import SearchCriteria
from mail_organizer_mcp.tools._arguments import required_str
from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool


@register_tool
class DeleteMailboxTool(BaseTool):
    """Delete a mailbox, refusing when it still holds any email.

    Emptiness is checked with a search before the delete is issued; the
    server's own "not empty" response is not relied upon.
    """

    name = "delete_mailbox"
    description = "Delete an empty mailbox/folder (only works when mailbox is empty)"
    input_schema = {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Mailbox name to delete"},
        },
        "required": ["name"],
    }

    @handle_tool_errors("deleting mailbox")
    def run(self, arguments: dict[str, Any]) -> str:
        name = required_str(arguments, "name")

        probe = SearchCriteria(mailbox=name, limit=1)
        emails = self.session.search_emails(probe)[: probe.limit]
        if emails:
            return (
                f'Cannot delete mailbox "{name}": '
                f"mailbox is not empty (contains {len(emails)}+ emails)"
            )

        self.session.delete_mailbox(name)
        return f'Mailbox "{name}" deleted successfully'
