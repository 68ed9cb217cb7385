"""SMTP connector for sending emails using smtplib."""

import logging
import os
import re
import smtplib
from email import encoders
from email.header import Header
from email.message import Message
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid
from typing import Any

from mail_organizer_mcp.email.connectors.config import SMTPConfig
from mail_organizer_mcp.email.models import OutgoingAttachment

logger = logging.getLogger(__name__)

_HEADER_INJECTION_RE = re.compile(r"[\r\n\0]")


def _validate_header_value(value: str) -> None:
    """Validate a string is safe from SMTP header injection.

    Raises:
        ValueError: If the value contains newline, carriage return, or null characters.
    """
    if _HEADER_INJECTION_RE.search(value):
        # SECURITY: do not log the value, it may contain injection payloads
        logger.warning("Header injection attempt detected")
        raise ValueError("Value contains invalid characters (newline, carriage return, or null)")


def _build_body(text: str | None, html: str | None) -> Message:
    """Build the body part: plain, html, or an alternative of both."""
    if text and html:
        alternative = MIMEMultipart("alternative")
        alternative.attach(MIMEText(text, "plain", "utf-8"))
        alternative.attach(MIMEText(html, "html", "utf-8"))
        return alternative
    if html:
        return MIMEText(html, "html", "utf-8")
    return MIMEText(text or "", "plain", "utf-8")


def _build_attachment(attachment: OutgoingAttachment) -> MIMEBase:
    maintype, _, subtype = attachment.content_type.partition("/")
    part = MIMEBase(maintype or "application", subtype or "octet-stream")
    part.set_payload(attachment.content)
    encoders.encode_base64(part)
    safe_filename = os.path.basename(attachment.filename)
    part.add_header("Content-Disposition", "attachment", filename=safe_filename)
    return part


class SMTPConnector:
    """Connector for sending emails via SMTP using smtplib."""

    def __init__(self, config: SMTPConfig) -> None:
        """Initialize SMTP connector.

        Args:
            config: SMTP server configuration.
        """
        self.config = config
        self._connection: smtplib.SMTP | smtplib.SMTP_SSL | None = None

    def connect(self) -> None:
        """Establish connection to SMTP server."""
        logger.debug(
            "Connecting to SMTP server (host=%s, port=%s, ssl=%s)",
            self.config.host,
            self.config.port,
            self.config.ssl,
        )
        kwargs: dict[str, Any] = {}
        if self.config.timeout is not None:
            kwargs["timeout"] = self.config.timeout

        if self.config.ssl:
            self._connection = smtplib.SMTP_SSL(self.config.host, self.config.port, **kwargs)
        else:
            self._connection = smtplib.SMTP(self.config.host, self.config.port, **kwargs)
            self._connection.starttls()

        self._connection.login(
            self.config.username,
            self.config.password.get_secret_value(),
        )
        logger.info("SMTP connection established (host=%s)", self.config.host)

    def disconnect(self) -> None:
        """Close connection to SMTP server."""
        if self._connection:
            try:
                self._connection.quit()
            except smtplib.SMTPServerDisconnected:
                logger.debug("SMTP quit failed (connection already closed)")
            self._connection = None
            logger.info("SMTP connection closed")

    def __enter__(self) -> "SMTPConnector":
        """Enter context manager, connecting to the server."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager, disconnecting from the server."""
        self.disconnect()

    def build_message(
        self,
        from_address: str,
        to: str,
        subject: str,
        text: str | None = None,
        html: str | None = None,
        attachments: list[OutgoingAttachment] | None = None,
        message_id: str | None = None,
    ) -> Message:
        """Build a MIME message with header injection validation.

        Text and HTML bodies together become a multipart/alternative part.
        Attachments wrap the body in a multipart/mixed container.

        Args:
            from_address: Sender email address.
            to: Recipient email address.
            subject: Email subject line.
            text: Optional plain text body.
            html: Optional HTML body.
            attachments: Optional list of file attachments.
            message_id: Message-ID header value (generated when omitted).

        Returns:
            Composed MIME message.

        Raises:
            ValueError: If any header value contains injection characters.
        """
        _validate_header_value(from_address)
        _validate_header_value(to)
        _validate_header_value(subject)

        body = _build_body(text, html)
        if attachments:
            msg: Message = MIMEMultipart("mixed")
            msg.attach(body)
            for attachment in attachments:
                msg.attach(_build_attachment(attachment))
        else:
            msg = body

        msg["From"] = from_address
        msg["To"] = to
        msg["Subject"] = Header(subject, "utf-8")
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = message_id or make_msgid()
        return msg

    def send_message(self, from_address: str, recipients: list[str], message: Message) -> None:
        """Send a pre-built message via SMTP.

        Args:
            from_address: Envelope sender address.
            recipients: List of envelope recipient addresses.
            message: Composed MIME message.

        Raises:
            RuntimeError: If not connected to SMTP server.
            smtplib.SMTPException: If sending fails.
        """
        if not self._connection:
            raise RuntimeError("Not connected. Call connect() first.")

        self._connection.sendmail(from_address, recipients, message.as_string())

    def send_email(
        self,
        from_address: str,
        to: str,
        subject: str,
        text: str | None = None,
        html: str | None = None,
        attachments: list[OutgoingAttachment] | None = None,
    ) -> str:
        """Send an email to a single recipient.

        Returns:
            The Message-ID of the sent message.

        Raises:
            RuntimeError: If not connected to SMTP server.
            ValueError: If a header value contains injection characters.
            smtplib.SMTPException: If sending fails.
        """
        message_id = make_msgid()
        msg = self.build_message(
            from_address=from_address,
            to=to,
            subject=subject,
            text=text,
            html=html,
            attachments=attachments,
            message_id=message_id,
        )

        self.send_message(from_address, [to], msg)
        logger.info("Email sent (subject=%r, attachments=%d)", subject, len(attachments or []))
        return message_id
