"""Text rendering shared by the listing tools."""

from collections.abc import Iterable

from mail_organizer_mcp.email.models import EmailAddress, EmailSummary

SUMMARY_SEPARATOR = "\n---\n"


def format_address(address: EmailAddress | None) -> str:
    return str(address) if address else "(unknown sender)"


def format_flags(flags: Iterable[str]) -> str:
    return ", ".join(flags)


def format_summary(email: EmailSummary) -> str:
    return (
        f"UID: {email.uid}\n"
        f"From: {format_address(email.sender)}\n"
        f"Subject: {email.subject}\n"
        f"Date: {email.date.isoformat()}\n"
        f"Flags: {format_flags(email.flags)}\n"
        f"Attachments: {'Yes' if email.has_attachments else 'No'}\n"
    )


def format_summaries(emails: Iterable[EmailSummary]) -> str:
    return SUMMARY_SEPARATOR.join(format_summary(email) for email in emails)
