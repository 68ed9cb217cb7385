"""List all emails MCP tool."""

import math
from typing import Any

from mail_organizer_mcp.email.models import DEFAULT_MAILBOX, SearchCriteria
from mail_organizer_mcp.exceptions import InvalidArgumentError
from mail_organizer_mcp.tools._arguments import int_arg, mailbox_arg
from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools._format import format_summaries
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


@register_tool
class ListAllEmailsTool(BaseTool):
    """Page through every email in a mailbox.

    The whole mailbox is listed once per call and sliced locally. Page
    numbers start at 1 and the page size is capped at 100.
    """

    name = "list_all_emails"
    description = "List all emails with pagination"
    input_schema = {
        "type": "object",
        "properties": {
            "mailbox": {"type": "string", "default": DEFAULT_MAILBOX},
            "page": {"type": "number", "default": 1, "description": "Page number (1-based)"},
            "page_size": {
                "type": "number",
                "default": DEFAULT_PAGE_SIZE,
                "description": "Number of emails per page",
            },
        },
    }

    @handle_tool_errors("listing emails")
    def run(self, arguments: dict[str, Any]) -> str:
        mailbox = mailbox_arg(arguments)
        page = int_arg(arguments, "page") or 1
        page_size = min(int_arg(arguments, "page_size") or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
        if page < 1:
            raise InvalidArgumentError("'page' must be 1 or greater")
        if page_size < 1:
            raise InvalidArgumentError("'page_size' must be 1 or greater")

        emails = self.session.search_emails(SearchCriteria(mailbox=mailbox))

        total = len(emails)
        total_pages = math.ceil(total / page_size)
        start = (page - 1) * page_size
        end = min(start + page_size, total)
        page_emails = emails[start:end]

        if not page_emails:
            return f'No emails found on page {page} of mailbox "{mailbox}"'

        return (
            f'Page {page} of {total_pages} ({start + 1}-{end} of {total} emails in "{mailbox}"):'
            f"\n\n{format_summaries(page_emails)}"
        )
