"""Tests for BODYSTRUCTURE attachment detection."""

from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from imapclient.response_parser import parse_fetch_response

from mail_organizer_mcp.email.bodystructure import has_attachments, message_has_attachments

PLAIN_TEXT = b'1 (UID 7 BODYSTRUCTURE ("TEXT" "PLAIN" ("CHARSET" "utf-8") NIL NIL "7BIT" 12 1 NIL NIL NIL))'

ALTERNATIVE = (
    b'2 (UID 8 BODYSTRUCTURE (("TEXT" "PLAIN" ("CHARSET" "utf-8") NIL NIL "7BIT" 5 1 NIL NIL NIL)'
    b'("TEXT" "HTML" ("CHARSET" "utf-8") NIL NIL "7BIT" 20 1 NIL NIL NIL)'
    b' "ALTERNATIVE" ("BOUNDARY" "b1") NIL NIL))'
)

MIXED_WITH_PDF = (
    b'3 (UID 9 BODYSTRUCTURE (("TEXT" "PLAIN" ("CHARSET" "utf-8") NIL NIL "7BIT" 5 1 NIL NIL NIL)'
    b'("APPLICATION" "PDF" ("NAME" "report.pdf") NIL NIL "BASE64" 4000 NIL'
    b' ("ATTACHMENT" ("FILENAME" "report.pdf")) NIL)'
    b' "MIXED" ("BOUNDARY" "b2") NIL NIL))'
)

TEXT_ATTACHMENT = (
    b'4 (UID 10 BODYSTRUCTURE (("TEXT" "PLAIN" NIL NIL NIL "7BIT" 5 1 NIL NIL NIL)'
    b'("TEXT" "CSV" ("NAME" "data.csv") NIL NIL "7BIT" 40 2 NIL'
    b' ("ATTACHMENT" ("FILENAME" "data.csv")) NIL)'
    b' "MIXED" ("BOUNDARY" "b3") NIL NIL))'
)

SINGLE_IMAGE = b'5 (UID 11 BODYSTRUCTURE ("IMAGE" "PNG" NIL NIL NIL "BASE64" 100 NIL NIL NIL))'


def _structure(*data):
    response = parse_fetch_response(list(data), normalise_times=False, uid_is_key=True)
    return next(iter(response.values()))[b"BODYSTRUCTURE"]


class TestHasAttachments:
    def test_plain_text(self) -> None:
        assert has_attachments(_structure(PLAIN_TEXT)) is False

    def test_alternative_text_and_html(self) -> None:
        assert has_attachments(_structure(ALTERNATIVE)) is False

    def test_non_text_leaf(self) -> None:
        assert has_attachments(_structure(MIXED_WITH_PDF)) is True

    def test_text_part_with_attachment_disposition(self) -> None:
        assert has_attachments(_structure(TEXT_ATTACHMENT)) is True

    def test_single_part_image(self) -> None:
        assert has_attachments(_structure(SINGLE_IMAGE)) is True

    def test_literal_filename(self) -> None:
        data = [
            (
                b'6 (UID 12 BODYSTRUCTURE (("TEXT" "PLAIN" NIL NIL NIL "7BIT" 5 1 NIL NIL NIL)'
                b'("TEXT" "PLAIN" NIL NIL NIL "7BIT" 9 1 NIL ("ATTACHMENT" ("FILENAME" {8}',
                b"notes.tx",
            ),
            b')) NIL) "MIXED"))',
        ]

        assert has_attachments(_structure(*data)) is True

    def test_missing_structure(self) -> None:
        assert has_attachments(None) is False


class TestMessageHasAttachments:
    def test_plain_message(self) -> None:
        assert message_has_attachments(MIMEText("hello")) is False

    def test_message_with_pdf(self) -> None:
        msg = MIMEMultipart("mixed")
        msg.attach(MIMEText("see attached"))
        msg.attach(MIMEApplication(b"%PDF", "pdf"))

        assert message_has_attachments(msg) is True

    def test_text_attachment(self) -> None:
        msg = MIMEMultipart("mixed")
        msg.attach(MIMEText("body"))
        part = MIMEText("a,b\n1,2", "csv")
        part.add_header("Content-Disposition", "attachment", filename="data.csv")
        msg.attach(part)

        assert message_has_attachments(msg) is True
