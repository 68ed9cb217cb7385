"""Email models and protocol helpers for mail-organizer-mcp."""

from mail_organizer_mcp.email.models import (
    AttachmentInfo,
    EmailAddress,
    EmailDetails,
    EmailSummary,
    Folder,
    OutgoingAttachment,
    SearchCriteria,
    SendMailRequest,
    SendResult,
)

__all__ = [
    "AttachmentInfo",
    "EmailAddress",
    "EmailDetails",
    "EmailSummary",
    "Folder",
    "OutgoingAttachment",
    "SearchCriteria",
    "SendMailRequest",
    "SendResult",
]
