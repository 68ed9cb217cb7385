"""Mailbox session: one lazily opened IMAP connection plus per-call SMTP sends."""

import imaplib
import logging
import smtplib
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from email.errors import MessageError
from email.utils import parsedate_to_datetime
from types import TracebackType
from typing import Any

from imap_tools import (
    AND,
    ImapToolsError,
    MailBox,
    MailboxFetchError,
    MailBoxUnencrypted,
    MailMessage,
    MailMessageFlags,
)
from imap_tools import EmailAddress as IMAPEmailAddress
from imapclient.response_parser import parse_fetch_response

from mail_organizer_mcp.email.bodystructure import has_attachments, message_has_attachments
from mail_organizer_mcp.email.connectors.config import IMAPConfig, SMTPConfig
from mail_organizer_mcp.email.connectors.smtp import SMTPConnector
from mail_organizer_mcp.email.folders import build_folder_tree, flatten_folder_tree
from mail_organizer_mcp.email.models import (
    AttachmentInfo,
    EmailAddress,
    EmailDetails,
    EmailSummary,
    SearchCriteria,
    SendMailRequest,
    SendResult,
)
from mail_organizer_mcp.email.search import build_search_criteria
from mail_organizer_mcp.exceptions import EmailNotFoundError, MessageParseError

logger = logging.getLogger(__name__)

_SEND_ERRORS = (smtplib.SMTPException, OSError, ValueError, RuntimeError)

_SUMMARY_FETCH = (
    "(UID FLAGS RFC822.SIZE BODYSTRUCTURE BODY.PEEK[HEADER.FIELDS (FROM TO SUBJECT DATE)])"
)


def _convert_address(addr: IMAPEmailAddress | None) -> EmailAddress | None:
    """Convert imap-tools EmailAddress to our EmailAddress model."""
    if addr is None or not addr.email:
        return None
    return EmailAddress(name=addr.name or None, address=addr.email)


def _convert_addresses(addrs: tuple[IMAPEmailAddress, ...]) -> list[EmailAddress]:
    """Convert tuple of imap-tools EmailAddress to list of our EmailAddress model."""
    return [
        EmailAddress(name=addr.name or None, address=addr.email) for addr in addrs if addr.email
    ]


def _parse_date(date_str: str | None) -> datetime:
    """Parse a Date header, falling back to the current time."""
    if date_str:
        try:
            return parsedate_to_datetime(date_str)
        except (TypeError, ValueError, IndexError):
            logger.debug("Unparseable Date header %r, using current time", date_str)
    return datetime.now(timezone.utc)


def _uid_list(uids: Iterable[int]) -> list[str]:
    return [str(int(uid)) for uid in uids]


def _uid_set(uids: Iterable[str | int]) -> str:
    """Compress UIDs into an IMAP sequence set such as ``1:3,7``."""
    numbers = sorted({int(uid) for uid in uids})
    ranges: list[str] = []
    start = prev = numbers[0]
    for number in numbers[1:]:
        if number == prev + 1:
            prev = number
            continue
        ranges.append(f"{start}:{prev}" if start != prev else str(start))
        start = prev = number
    ranges.append(f"{start}:{prev}" if start != prev else str(start))
    return ",".join(ranges)


def _search_charset(query: AND) -> str:
    return "US-ASCII" if str(query).isascii() else "UTF-8"


def _header_block(attributes: dict[bytes, Any]) -> bytes:
    """Return the BODY[HEADER.FIELDS ...] literal of one FETCH item."""
    for key, value in attributes.items():
        if key.upper().startswith(b"BODY[HEADER") and isinstance(value, bytes):
            return value
    return b""


def _decode_flag(flag: bytes | str) -> str:
    return flag.decode("utf-8", errors="replace") if isinstance(flag, bytes) else flag



class MailboxSession:
    """Mailbox operations over a single, lazily established IMAP connection.

    The IMAP connection is opened on first use and reused until
    ``disconnect()`` is called or it fails, after which the next operation
    reconnects. Calls are serialized with a lock so overlapping requests
    never interleave on the connection. Sending opens a fresh SMTP
    connection per message.

    Protocol and connection errors propagate to the caller; ``send_mail``
    is the exception and always returns a ``SendResult``.
    """

    def __init__(self, imap_config: IMAPConfig, smtp_config: SMTPConfig) -> None:
        """Initialize the session.

        Args:
            imap_config: IMAP server configuration.
            smtp_config: SMTP server configuration.
        """
        self.imap_config = imap_config
        self.smtp_config = smtp_config
        self._mailbox: MailBox | MailBoxUnencrypted | None = None
        self._lock = threading.RLock()

    @property
    def is_connected(self) -> bool:
        return self._mailbox is not None

    def connect(self) -> None:
        """Establish connection to the IMAP server (no-op when connected)."""
        with self._lock:
            if self._mailbox is not None:
                return

            config = self.imap_config
            logger.debug(
                "Connecting to IMAP server (host=%s, port=%s, ssl=%s)",
                config.host,
                config.port,
                config.ssl,
            )
            kwargs = {"timeout": config.timeout} if config.timeout is not None else {}
            if config.ssl:
                mailbox: MailBox | MailBoxUnencrypted = MailBox(config.host, config.port, **kwargs)
            else:
                mailbox = MailBoxUnencrypted(config.host, config.port, **kwargs)

            mailbox.login(config.username, config.password.get_secret_value())
            self._mailbox = mailbox
            logger.info("IMAP connection established (host=%s)", config.host)

    def disconnect(self) -> None:
        """Close the IMAP connection (no-op when not connected)."""
        with self._lock:
            if self._mailbox is None:
                return
            try:
                self._mailbox.logout()
            except (ImapToolsError, imaplib.IMAP4.error, OSError):
                logger.debug("IMAP logout failed (connection may already be closed)")
            finally:
                self._mailbox = None
            logger.info("IMAP connection closed")

    def __enter__(self) -> "MailboxSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager, disconnecting from the server."""
        self.disconnect()

    @contextmanager
    def _session(self, folder: str | None = None) -> Iterator[MailBox | MailBoxUnencrypted]:
        """Hold the connection, optionally with ``folder`` selected read-write.

        A connection-level failure drops the cached connection so the next
        call starts from a fresh login.
        """
        with self._lock:
            self.connect()
            assert self._mailbox is not None
            try:
                if folder is not None:
                    logger.debug("Selecting folder %s", folder)
                    self._mailbox.folder.set(folder)
                yield self._mailbox
            except (imaplib.IMAP4.abort, OSError):
                logger.warning("IMAP connection lost; reconnecting on next use")
                self._mailbox = None
                raise

    def list_mailboxes(self) -> list[str]:
        """List every folder by fully-qualified name, parents before children."""
        with self._session() as mailbox:
            entries = mailbox.folder.list()
        return flatten_folder_tree(build_folder_tree(entries))

    def create_mailbox(self, name: str) -> None:
        """Create a folder. Name legality is left to the server."""
        with self._session() as mailbox:
            mailbox.folder.create(name)

    def delete_mailbox(self, name: str) -> None:
        """Delete a folder. The server rejects missing or non-empty folders."""
        with self._session() as mailbox:
            mailbox.folder.delete(name)

    def search_emails(self, criteria: SearchCriteria) -> list[EmailSummary]:
        """Search a folder and return summaries of every match.

        One UID FETCH per search retrieves flags, size, BODYSTRUCTURE and the
        From/To/Subject/Date header fields, never bodies.
        ``criteria.limit`` is not applied here.

        Args:
            criteria: Search filters; ``criteria.mailbox`` selects the folder.

        Returns:
            List of EmailSummary in server order.
        """
        query = build_search_criteria(criteria)
        with self._session(criteria.mailbox) as mailbox:
            logger.debug("Searching %s (criteria=%s)", criteria.mailbox, query)
            uids = mailbox.uids(query, charset=_search_charset(query))
            if not uids:
                return []

            status, data = mailbox.client.uid("FETCH", _uid_set(uids), _SUMMARY_FETCH)
            if status != "OK":
                raise MailboxFetchError((status, data), "OK")
            response = parse_fetch_response(data, normalise_times=False, uid_is_key=True)

        return [
            self._to_summary(uid, attributes, criteria.mailbox)
            for uid, attributes in response.items()
        ]

    @staticmethod
    def _to_summary(uid: int, attributes: dict[bytes, Any], mailbox: str) -> EmailSummary:
        headers = MailMessage.from_bytes(_header_block(attributes))
        return EmailSummary(
            uid=uid,
            mailbox=mailbox,
            subject=headers.subject or "(No Subject)",
            sender=_convert_address(headers.from_values),
            to=_convert_addresses(headers.to_values),
            date=_parse_date(headers.date_str),
            flags=tuple(_decode_flag(flag) for flag in attributes.get(b"FLAGS", ())),
            has_attachments=has_attachments(attributes.get(b"BODYSTRUCTURE")),
            size=attributes.get(b"RFC822.SIZE"),
        )

    def get_email_details(self, mailbox: str, uid: int) -> EmailDetails | None:
        """Fetch and parse one complete message without marking it seen.

        Returns:
            EmailDetails, or None if the folder holds no message with ``uid``.

        Raises:
            MessageParseError: If the message cannot be turned into details.
        """
        with self._session(mailbox) as client:
            messages = list(client.fetch(AND(uid=str(uid)), mark_seen=False, bulk=True))

        for msg in messages:
            if not msg.uid:
                continue
            try:
                return self._to_details(msg, mailbox)
            except (ValueError, TypeError, LookupError, MessageError) as e:
                raise MessageParseError(mailbox, uid, str(e)) from e
        return None

    @staticmethod
    def _to_details(msg: MailMessage, mailbox: str) -> EmailDetails:
        attachments = [
            AttachmentInfo(
                filename=att.filename or "unnamed",
                content_type=att.content_type or "application/octet-stream",
                size=att.size or 0,
                content_id=att.content_id or None,
            )
            for att in msg.attachments
        ]
        return EmailDetails(
            uid=int(msg.uid),
            mailbox=mailbox,
            subject=msg.subject or "(No Subject)",
            sender=_convert_address(msg.from_values),
            to=_convert_addresses(msg.to_values),
            date=_parse_date(msg.date_str),
            flags=tuple(msg.flags),
            has_attachments=message_has_attachments(msg.obj),
            size=msg.size_rfc822,
            text=msg.text or None,
            html=msg.html or None,
            attachments=attachments,
            headers={name: ", ".join(values) for name, values in msg.headers.items()},
        )

    def move_emails(self, mailbox: str, uids: list[int], destination: str) -> None:
        """Move messages to ``destination``.

        Falls back to copy, flag as deleted and expunge when the native move
        fails. After a native move an extra expunge clears leftovers on
        servers that keep them; its failure is only logged.
        """
        uid_list = _uid_list(uids)
        with self._session(mailbox) as client:
            try:
                client.move(uid_list, destination)
            except imaplib.IMAP4.abort:
                raise
            except (ImapToolsError, imaplib.IMAP4.error) as e:
                logger.warning("Native move failed, falling back to copy and expunge: %s", e)
                client.copy(uid_list, destination)
                client.flag(uid_list, MailMessageFlags.DELETED, True)
                client.expunge()
                return

            try:
                client.expunge()
            except imaplib.IMAP4.abort:
                raise
            except (ImapToolsError, imaplib.IMAP4.error) as e:
                logger.warning("Move succeeded but expunge failed: %s", e)

    def delete_emails(self, mailbox: str, uids: list[int]) -> None:
        """Permanently delete messages (flag as deleted, then expunge)."""
        uid_list = _uid_list(uids)
        with self._session(mailbox) as client:
            client.flag(uid_list, MailMessageFlags.DELETED, True)
            client.expunge()

    def mark_seen(self, mailbox: str, uids: list[int], seen: bool) -> None:
        """Add or remove the seen flag."""
        with self._session(mailbox) as client:
            client.flag(_uid_list(uids), MailMessageFlags.SEEN, seen)

    def add_flags(self, mailbox: str, uids: list[int], flags: list[str]) -> None:
        with self._session(mailbox) as client:
            client.flag(_uid_list(uids), flags, True)

    def remove_flags(self, mailbox: str, uids: list[int], flags: list[str]) -> None:
        with self._session(mailbox) as client:
            client.flag(_uid_list(uids), flags, False)

    def save_attachments(self, mailbox: str, uid: int) -> None:
        """Save a message's attachments.

        Raises:
            EmailNotFoundError: If the message does not exist.
            NotImplementedError: Always, once the message is found.
        """
        if self.get_email_details(mailbox, uid) is None:
            raise EmailNotFoundError(mailbox, uid)
        raise NotImplementedError("Saving attachments is not supported")

    def send_mail(self, request: SendMailRequest) -> SendResult:
        """Send one message from the configured account.

        Never raises: transport and validation failures become a failed
        ``SendResult`` carrying the error text.
        """
        config = self.smtp_config
        from_address = config.from_address or config.username
        try:
            with SMTPConnector(config) as smtp:
                message_id = smtp.send_email(
                    from_address=from_address,
                    to=request.to,
                    subject=request.subject,
                    text=request.text,
                    html=request.html,
                    attachments=request.attachments,
                )
        except _SEND_ERRORS as e:
            logger.warning("Sending email failed: %s", e)
            return SendResult(success=False, error=str(e))
        return SendResult(success=True, message_id=message_id)
