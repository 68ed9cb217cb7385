"""MIME structure inspection for attachment detection.

IMAPClient's ``parse_fetch_response`` turns each BODYSTRUCTURE in a FETCH
reply into a ``BodyData``.
Strings come back as ``bytes``, ``NIL`` as ``None`` and a multipart body as
``([part, ...], subtype, params, disposition, language, location)``.
"""

from email.message import Message
from typing import Any

from imapclient.response_types import BodyData

# single part: type subtype params id description encoding size lines md5 disposition
_TEXT_DISPOSITION_INDEX = 9
# multipart: parts subtype params disposition
_MULTIPART_DISPOSITION_INDEX = 3


def _text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("ascii", errors="replace")
    return str(value)


def _is_attachment_disposition(structure: BodyData, index: int) -> bool:
    if len(structure) <= index:
        return False
    disposition = structure[index]
    return (
        isinstance(disposition, (tuple, list))
        and bool(disposition)
        and _text(disposition[0]).lower() == "attachment"
    )


def has_attachments(structure: BodyData | None) -> bool:
    """Check a BODYSTRUCTURE for attachments.

    A part counts as an attachment when it is a leaf whose media type is
    neither ``text`` nor ``multipart``, or when it carries an explicit
    ``attachment`` disposition.
    """
    if not structure:
        return False

    if structure.is_multipart:
        if _is_attachment_disposition(structure, _MULTIPART_DISPOSITION_INDEX):
            return True
        return any(has_attachments(part) for part in structure[0])

    if _text(structure[0]).lower() not in ("text", "multipart"):
        return True
    return _is_attachment_disposition(structure, _TEXT_DISPOSITION_INDEX)


def message_has_attachments(message: Message) -> bool:
    """Apply the same attachment rule to an already parsed message."""
    for part in message.walk():
        if part.get_content_disposition() == "attachment":
            return True
        if part.get_content_maintype() not in ("text", "multipart"):
            return True
    return False
