"""An MCP server that lets AI agents organize an IMAP mailbox and send mail over SMTP."""

from mail_organizer_mcp.config import Settings, load_settings
from mail_organizer_mcp.email.models import (
    AttachmentInfo,
    EmailAddress,
    EmailDetails,
    EmailSummary,
    SearchCriteria,
    SendMailRequest,
    SendResult,
)
from mail_organizer_mcp.mailbox import MailboxSession

__version__ = "0.1.0"

__all__ = [
    "AttachmentInfo",
    "EmailAddress",
    "EmailDetails",
    "EmailSummary",
    "MailboxSession",
    "SearchCriteria",
    "SendMailRequest",
    "SendResult",
    "Settings",
    "load_settings",
]
