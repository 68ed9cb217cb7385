"""Get email MCP tool."""

from typing import Any

from mail_organizer_mcp.email.models import DEFAULT_MAILBOX, EmailDetails
from mail_organizer_mcp.tools._arguments import mailbox_arg, uid_arg
from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools._format import format_address, format_flags
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool


def _format_details(email: EmailDetails) -> str:
    recipients = ", ".join(str(addr) for addr in email.to) or "(none)"
    lines = [
        f"UID: {email.uid}",
        f"From: {format_address(email.sender)}",
        f"To: {recipients}",
        f"Subject: {email.subject}",
        f"Date: {email.date.isoformat()}",
        f"Flags: {format_flags(email.flags)}",
        f"Attachments: {len(email.attachments)}",
    ]
    for att in email.attachments:
        lines.append(f"  - {att.filename} ({att.content_type}, {att.size} bytes)")

    if email.text:
        body = f"Text Content:\n{email.text}"
    elif email.html:
        body = f"HTML Content:\n{email.html}"
    else:
        body = "Text Content:\n(No text content)"

    return "\n".join(lines) + f"\n\n{body}\n"


@register_tool
class GetEmailTool(BaseTool):
    """Show one email's headers, body and attachment list.

    The email is fetched without marking it as read.
    """

    name = "get_email"
    description = "Get detailed information about a specific email"
    input_schema = {
        "type": "object",
        "properties": {
            "mailbox": {"type": "string", "default": DEFAULT_MAILBOX},
            "uid": {"type": "number", "description": "Email UID"},
        },
        "required": ["uid"],
    }

    @handle_tool_errors("getting email")
    def run(self, arguments: dict[str, Any]) -> str:
        mailbox = mailbox_arg(arguments)
        uid = uid_arg(arguments)

        email = self.session.get_email_details(mailbox, uid)
        if email is None:
            return f"Email with UID {uid} not found"
        return _format_details(email)
