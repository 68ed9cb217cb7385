"""Email data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_MAILBOX = "INBOX"


class EmailAddress(BaseModel):
    """Parsed email address with optional display name."""

    name: str | None = None
    address: str

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} <{self.address}>"
        return self.address


class Folder(BaseModel):
    """IMAP folder/mailbox node in the folder hierarchy."""

    name: str
    delimiter: str = "/"
    flags: list[str] = []
    children: list["Folder"] = []


class SearchCriteria(BaseModel):
    """Filters for a mailbox search.

    Every filter that is set becomes one server-side predicate; the
    predicates are combined with AND. Field aliases match the argument
    names agents send (``from``, ``unreadOnly``, ``sinceDays``...).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    mailbox: str = DEFAULT_MAILBOX
    from_: str | None = Field(default=None, alias="from")
    to: str | None = None
    subject: str | None = None
    body: str | None = None
    unread_only: bool = Field(default=False, alias="unreadOnly")
    since_days: int | None = Field(default=None, alias="sinceDays")
    before_days: int | None = Field(default=None, alias="beforeDays")
    has_attachments: bool | None = Field(default=None, alias="hasAttachments")
    limit: int | None = None

    @field_validator("mailbox", mode="before")
    @classmethod
    def _default_mailbox(cls, v: str | None) -> str:
        return v or DEFAULT_MAILBOX


class AttachmentInfo(BaseModel):
    """Attachment metadata (content not included)."""

    filename: str = "unnamed"
    content_type: str = "application/octet-stream"
    size: int = 0
    content_id: str | None = None


class EmailSummary(BaseModel):
    """Lightweight email representation for search results."""

    uid: int
    mailbox: str
    subject: str = "(No Subject)"
    sender: EmailAddress | None = None
    to: list[EmailAddress] = []
    date: datetime
    flags: tuple[str, ...] = ()
    has_attachments: bool = False
    size: int | None = None


class EmailDetails(EmailSummary):
    """Full email content."""

    text: str | None = None
    html: str | None = None
    attachments: list[AttachmentInfo] = []
    headers: dict[str, str] = {}


class OutgoingAttachment(BaseModel):
    """Attachment for an outgoing email."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class SendMailRequest(BaseModel):
    """A message to a single recipient.

    At least one of ``text`` or ``html`` must be set; both may be.
    """

    to: str
    subject: str
    text: str | None = None
    html: str | None = None
    attachments: list[OutgoingAttachment] = []

    @model_validator(mode="after")
    def _require_body(self) -> "SendMailRequest":
        if not self.text and not self.html:
            raise ValueError("Either text or html content is required")
        return self


class SendResult(BaseModel):
    """Outcome of a send attempt."""

    success: bool
    message_id: str | None = None
    error: str | None = None
