"""Add and remove flags MCP tools."""

from typing import Any

from mail_organizer_mcp.email.models import DEFAULT_MAILBOX
from mail_organizer_mcp.tools._arguments import flags_arg, mailbox_arg, uids_arg
from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool

# Flag names are passed to the server verbatim, system flags included.
_FLAGS_SCHEMA = {
    "type": "object",
    "properties": {
        "mailbox": {"type": "string", "default": DEFAULT_MAILBOX},
        "uids": {"type": "array", "items": {"type": "number"}},
        "flags": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Flag names, e.g. \\Flagged or a custom keyword",
        },
    },
    "required": ["uids", "flags"],
}


@register_tool
class AddFlagsTool(BaseTool):
    name = "add_flags"
    description = "Add flags to emails"
    input_schema = _FLAGS_SCHEMA

    @handle_tool_errors("adding flags")
    def run(self, arguments: dict[str, Any]) -> str:
        mailbox = mailbox_arg(arguments)
        uids = uids_arg(arguments)
        flags = flags_arg(arguments)

        self.session.add_flags(mailbox, uids, flags)
        return f"Added flags {', '.join(flags)} to {len(uids)} emails"


@register_tool
class RemoveFlagsTool(BaseTool):
    name = "remove_flags"
    description = "Remove flags from emails"
    input_schema = _FLAGS_SCHEMA

    @handle_tool_errors("removing flags")
    def run(self, arguments: dict[str, Any]) -> str:
        mailbox = mailbox_arg(arguments)
        uids = uids_arg(arguments)
        flags = flags_arg(arguments)

        self.session.remove_flags(mailbox, uids, flags)
        return f"Removed flags {', '.join(flags)} from {len(uids)} emails"
