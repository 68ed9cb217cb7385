"""Delete emails MCP tool."""

from typing import Any

from mail_organizer_mcp.email.models import DEFAULT_MAILBOX
from mail_organizer_mcp.tools._arguments import mailbox_arg, uids_arg
from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool


@register_tool
class DeleteEmailsTool(BaseTool):
    """Permanently delete emails, previewing by default.

    Only ``preview: false`` deletes anything. Any other value, including a
    missing one or a non-boolean, just reports what would be deleted.
    """

    name = "delete_emails"
    description = "Delete emails permanently"
    input_schema = {
        "type": "object",
        "properties": {
            "mailbox": {"type": "string", "default": DEFAULT_MAILBOX},
            "uids": {"type": "array", "items": {"type": "number"}},
            "preview": {"type": "boolean", "default": True},
        },
        "required": ["uids"],
    }

    @handle_tool_errors("deleting emails")
    def run(self, arguments: dict[str, Any]) -> str:
        mailbox = mailbox_arg(arguments)
        uids = uids_arg(arguments)

        if arguments.get("preview") is not False:
            return (
                f"PREVIEW: Would delete {len(uids)} emails with UIDs: "
                f"{', '.join(str(uid) for uid in uids)}\n\n"
                "To confirm deletion, set preview: false"
            )

        self.session.delete_emails(mailbox, uids)
        return f"Deleted {len(uids)} emails"
