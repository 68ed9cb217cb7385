"""Common error handling for MCP tools."""

import imaplib
import logging
import smtplib
from collections.abc import Callable
from functools import wraps
from typing import Any

from imap_tools import ImapToolsError

from mail_organizer_mcp.exceptions import ConfigError, InvalidArgumentError, MailOrganizerError

logger = logging.getLogger(__name__)

_EXPECTED_ERRORS = (ImapToolsError, imaplib.IMAP4.error, OSError, ValueError, MailOrganizerError)


def _describe(exc: Exception) -> str:
    """Render an exception as prose that keeps the original message."""
    if isinstance(exc, (ImapToolsError, imaplib.IMAP4.error)):
        return f"email server error: {exc}"
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return f"email server authentication failed, check your credentials ({exc})"
    if isinstance(exc, smtplib.SMTPException):
        return f"error sending email: {exc}"
    if isinstance(exc, TimeoutError):
        return f"connection timed out, the email server did not respond ({exc})"
    if isinstance(exc, ConnectionError):
        return f"could not connect to email server: {exc}"
    if isinstance(exc, OSError):
        return f"network error: {exc}"
    return str(exc)


def handle_tool_errors(action: str) -> Callable[[Callable[..., str]], Callable[..., str]]:
    """Wrap a tool body so every failure becomes a text response.

    Args:
        action: What the tool was doing, used as "Error <action>: ...".
    """

    def decorator(func: Callable[..., str]) -> Callable[..., str]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> str:
            try:
                return func(*args, **kwargs)
            except InvalidArgumentError as e:
                return f"Invalid parameter: {e}"
            except ConfigError as e:
                return f"Configuration error: {e}"
            except _EXPECTED_ERRORS as e:
                return f"Error {action}: {_describe(e)}"
            except Exception as e:
                logger.exception("Unexpected error in tool %s", func.__qualname__)
                return f"Error {action}: {_describe(e)}"

        return wrapper

    return decorator
