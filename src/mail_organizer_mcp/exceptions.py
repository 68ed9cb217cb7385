"""Custom exceptions for mail-organizer-mcp."""


class MailOrganizerError(Exception):
    """Base exception for mail-organizer-mcp."""


class ConfigError(MailOrganizerError):
    """Raised when there is a configuration error."""


class MessageParseError(MailOrganizerError):
    """Raised when a fetched message cannot be turned into structured details."""

    def __init__(self, mailbox: str, uid: int, reason: str) -> None:
        self.mailbox = mailbox
        self.uid = uid
        super().__init__(f"Could not parse email {mailbox}/{uid}: {reason}")


class EmailNotFoundError(MailOrganizerError):
    """Raised when a message does not exist in the selected mailbox."""

    def __init__(self, mailbox: str, uid: int) -> None:
        self.mailbox = mailbox
        self.uid = uid
        super().__init__(f"Email not found: {mailbox}/{uid}")


class InvalidArgumentError(MailOrganizerError, ValueError):
    """Raised when a tool argument is missing or has the wrong shape."""
