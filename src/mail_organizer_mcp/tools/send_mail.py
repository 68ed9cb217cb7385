"""Send mail MCP tool."""

import base64
import binascii
import json
from typing import Any

from pydantic import BaseModel

from mail_organizer_mcp.email.models import OutgoingAttachment, SendMailRequest
from mail_organizer_mcp.tools._error_handler import handle_tool_errors
from mail_organizer_mcp.tools.base import BaseTool
from mail_organizer_mcp.tools.registry import register_tool

ATTACHMENT_ENCODINGS = ("utf-8", "base64")

EXPECTED_FORMAT = (
    "Expected format (single recipient only):\n"
    '- to: "email@domain.com" (required - single string only)\n'
    '- subject: "subject text" (required)\n'
    '- text: "message content" (optional)\n'
    '- html: "<html>content</html>" (optional)\n'
    "- attachments: array (optional)\n"
    "\n"
    "Note: Arrays not supported. Send to one recipient at a time."
)


class ValidationIssue(BaseModel):
    """One violated rule in a send_mail call."""

    field: str
    message: str
    received_type: str
    received_value: Any = None


def _json_type(value: Any) -> str:
    """Name a value's type the way a JSON client would."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _validate_attachments(value: Any) -> list[ValidationIssue]:
    if value is None:
        return []
    if not isinstance(value, list):
        return [
            ValidationIssue(
                field="attachments",
                message="Attachments must be an array of objects",
                received_type=_json_type(value),
                received_value=value,
            )
        ]

    issues = []
    for index, item in enumerate(value):
        field = f"attachments[{index}]"
        if not isinstance(item, dict):
            issues.append(
                ValidationIssue(
                    field=field,
                    message="Attachment must be an object with filename and content",
                    received_type=_json_type(item),
                    received_value=item,
                )
            )
            continue

        filename = item.get("filename")
        if not isinstance(filename, str) or not filename.strip():
            issues.append(
                ValidationIssue(
                    field=f"{field}.filename",
                    message="Attachment filename is required and must be a string",
                    received_type=_json_type(filename),
                    received_value=filename,
                )
            )

        content = item.get("content")
        if not isinstance(content, str):
            issues.append(
                ValidationIssue(
                    field=f"{field}.content",
                    message="Attachment content is required and must be a string",
                    received_type=_json_type(content),
                    received_value=content,
                )
            )

        encoding = item.get("encoding", "utf-8")
        if encoding not in ATTACHMENT_ENCODINGS:
            issues.append(
                ValidationIssue(
                    field=f"{field}.encoding",
                    message=f"Encoding must be one of: {', '.join(ATTACHMENT_ENCODINGS)}",
                    received_type=_json_type(encoding),
                    received_value=encoding,
                )
            )
        elif encoding == "base64" and isinstance(content, str):
            try:
                base64.b64decode(content, validate=True)
            except binascii.Error:
                issues.append(
                    ValidationIssue(
                        field=f"{field}.content",
                        message="Attachment content is not valid base64",
                        received_type="string",
                        received_value=content,
                    )
                )

        content_type = item.get("contentType")
        if content_type is not None and not isinstance(content_type, str):
            issues.append(
                ValidationIssue(
                    field=f"{field}.contentType",
                    message="Attachment contentType must be a string",
                    received_type=_json_type(content_type),
                    received_value=content_type,
                )
            )
    return issues


def validate_send_mail_args(arguments: dict[str, Any]) -> list[ValidationIssue]:
    """Check send_mail arguments, returning every violated rule.

    Only a single recipient is accepted. Arrays are rejected, and so are
    strings that look like a serialized array (``"[a@x.com]"``), which some
    clients send instead of a list.
    """
    issues: list[ValidationIssue] = []
    to = arguments.get("to")

    if not to or not isinstance(to, str):
        issues.append(
            ValidationIssue(
                field="to",
                message="Recipient email address is required and must be a string",
                received_type=_json_type(to),
                received_value=to,
            )
        )
    elif not to.strip():
        issues.append(
            ValidationIssue(
                field="to",
                message="Recipient email address cannot be empty",
                received_type="string",
                received_value=to,
            )
        )

    if isinstance(to, list):
        issues.append(
            ValidationIssue(
                field="to",
                message="Multiple recipients not supported. Use single email address only.",
                received_type="array",
                received_value=to,
            )
        )

    if isinstance(to, str) and to.startswith("[") and to.endswith("]"):
        issues.append(
            ValidationIssue(
                field="to",
                message=(
                    "Array format detected but not supported. "
                    "Please send to one recipient at a time."
                ),
                received_type="string (array-like)",
                received_value=to,
            )
        )

    subject = arguments.get("subject")
    if not subject or not isinstance(subject, str):
        issues.append(
            ValidationIssue(
                field="subject",
                message="Subject is required and must be a string",
                received_type=_json_type(subject),
                received_value=subject,
            )
        )

    text = arguments.get("text")
    html = arguments.get("html")
    if not text and not html:
        issues.append(
            ValidationIssue(
                field="content",
                message="Either text or html content is required",
                received_type="undefined",
                received_value={"text": text, "html": html},
            )
        )
    for name, value in (("text", text), ("html", html)):
        if value is not None and not isinstance(value, str):
            issues.append(
                ValidationIssue(
                    field=name,
                    message=f"{name.capitalize()} content must be a string",
                    received_type=_json_type(value),
                    received_value=value,
                )
            )

    issues.extend(_validate_attachments(arguments.get("attachments")))
    return issues


def format_validation_issues(issues: list[ValidationIssue]) -> str:
    rendered = "\n\n".join(
        f'Field "{issue.field}": {issue.message}\n'
        f"   Received: {issue.received_type} = "
        f"{json.dumps(issue.received_value, default=str)}"
        for issue in issues
    )
    return f"SEND_MAIL VALIDATION ERRORS:\n\n{rendered}\n\n{EXPECTED_FORMAT}"


def _decode_content(item: dict[str, Any]) -> bytes:
    content: str = item["content"]
    if item.get("encoding", "utf-8") == "base64":
        return base64.b64decode(content, validate=True)
    return content.encode("utf-8")


def build_send_mail_request(arguments: dict[str, Any]) -> SendMailRequest:
    """Turn validated send_mail arguments into a SendMailRequest."""
    attachments = [
        OutgoingAttachment(
            filename=item["filename"],
            content=_decode_content(item),
            content_type=item.get("contentType") or "application/octet-stream",
        )
        for item in arguments.get("attachments") or []
    ]
    return SendMailRequest(
        to=arguments["to"].strip(),
        subject=arguments["subject"],
        text=arguments.get("text") or None,
        html=arguments.get("html") or None,
        attachments=attachments,
    )


@register_tool
class SendMailTool(BaseTool):
    """Send an email to exactly one recipient.

    Arguments are checked before anything is sent and every problem is
    reported in one response.
    """

    name = "send_mail"
    description = "Send an email to a single recipient"
    input_schema = {
        "type": "object",
        "properties": {
            "to": {"type": "string", "description": "Single recipient email address"},
            "subject": {"type": "string"},
            "text": {"type": "string", "description": "Plain text body"},
            "html": {"type": "string", "description": "HTML body"},
            "attachments": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "filename": {"type": "string"},
                        "content": {"type": "string"},
                        "contentType": {"type": "string"},
                        "encoding": {
                            "type": "string",
                            "enum": list(ATTACHMENT_ENCODINGS),
                            "default": "utf-8",
                            "description": "How content is encoded",
                        },
                    },
                    "required": ["filename", "content"],
                },
            },
        },
        "required": ["to", "subject"],
    }

    @handle_tool_errors("sending email")
    def run(self, arguments: dict[str, Any]) -> str:
        issues = validate_send_mail_args(arguments)
        if issues:
            return format_validation_issues(issues)

        result = self.session.send_mail(build_send_mail_request(arguments))
        if result.success:
            return f"Email sent successfully!\nMessage ID: {result.message_id}"
        return f"Failed to send email: {result.error}"
