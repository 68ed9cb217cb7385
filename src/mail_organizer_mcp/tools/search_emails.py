"""Search emails MCP tool."""

from typing import Any

from mail_organizer_mcp.email.models import DEFAULT_MAILBOX, SearchCriteria
from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools._format import format_summaries
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool

DEFAULT_LIMIT = 50


@register_tool
class SearchEmailsTool(BaseTool):
    """Search a mailbox and list matching emails.

    Every filter is evaluated by the server except ``hasAttachments``, which
    is applied to the returned summaries. ``limit`` only trims what is shown.
    """

    name = "search_emails"
    description = "Search emails with various criteria"
    input_schema = {
        "type": "object",
        "properties": {
            "mailbox": {"type": "string", "default": DEFAULT_MAILBOX},
            "from": {"type": "string", "description": "Sender contains"},
            "to": {"type": "string", "description": "Recipient contains"},
            "subject": {"type": "string", "description": "Subject contains"},
            "body": {"type": "string", "description": "Body contains"},
            "unreadOnly": {"type": "boolean"},
            "sinceDays": {"type": "number", "description": "Received within the last N days"},
            "beforeDays": {"type": "number", "description": "Received more than N days ago"},
            "hasAttachments": {"type": "boolean"},
            "limit": {"type": "number", "default": DEFAULT_LIMIT},
        },
    }

    @handle_tool_errors("searching emails")
    def run(self, arguments: dict[str, Any]) -> str:
        criteria = SearchCriteria.model_validate(arguments)
        emails = self.session.search_emails(criteria)

        if criteria.has_attachments is not None:
            emails = [e for e in emails if e.has_attachments == criteria.has_attachments]

        if not emails:
            return "No emails found matching the criteria"

        shown = emails[: criteria.limit or DEFAULT_LIMIT]
        return (
            f"Found {len(emails)} emails (showing {len(shown)}):\n\n{format_summaries(shown)}"
        )
