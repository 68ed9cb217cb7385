"""Mail server connection settings and the SMTP connector."""

from mail_organizer_mcp.email.connectors.config import IMAPConfig, SMTPConfig
from mail_organizer_mcp.email.connectors.smtp import SMTPConnector

__all__ = [
    "IMAPConfig",
    "SMTPConfig",
    "SMTPConnector",
]
