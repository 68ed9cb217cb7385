"""Shared fixtures for tool tests."""

from collections.abc import Callable
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from mail_organizer_mcp.email.models import EmailAddress, EmailSummary
from mail_organizer_mcp.mailbox import MailboxSession


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=MailboxSession)


@pytest.fixture
def make_summary() -> Callable[..., EmailSummary]:
    def _make(uid: int, **overrides: object) -> EmailSummary:
        fields: dict[str, object] = {
            "uid": uid,
            "mailbox": "INBOX",
            "subject": f"Message {uid}",
            "sender": EmailAddress(name="Alice", address="alice@example.com"),
            "date": datetime(2026, 2, 3, 12, 0, tzinfo=timezone.utc),
            "flags": ("\\Seen",),
        }
        fields.update(overrides)
        return EmailSummary(**fields)  # type: ignore[arg-type]

    return _make
