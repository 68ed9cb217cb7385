"""Tests for list_all_emails tool."""

from collections.abc import Callable
from unittest.mock import MagicMock

from mail_organizer_mcp.email.models import EmailSummary
from mail_organizer_mcp.tools.list_all_emails import ListAllEmailsTool


class TestListAllEmails:
    def test_single_page(
        self, session: MagicMock, make_summary: Callable[..., EmailSummary]
    ) -> None:
        session.search_emails.return_value = [make_summary(uid) for uid in range(1, 31)]

        result = ListAllEmailsTool(session).run({"page": 1, "page_size": 50})

        assert result.startswith('Page 1 of 1 (1-30 of 30 emails in "INBOX"):')
        assert result.count("UID: ") == 30

    def test_lists_whole_mailbox(self, session: MagicMock) -> None:
        session.search_emails.return_value = []

        ListAllEmailsTool(session).run({"mailbox": "Archive"})

        criteria = session.search_emails.call_args[0][0]
        assert criteria.mailbox == "Archive"
        assert criteria.from_ is None
        assert criteria.unread_only is False

    def test_page_size_is_capped(
        self, session: MagicMock, make_summary: Callable[..., EmailSummary]
    ) -> None:
        session.search_emails.return_value = [make_summary(uid) for uid in range(1, 251)]

        result = ListAllEmailsTool(session).run({"page_size": 500})

        assert result.startswith('Page 1 of 3 (1-100 of 250 emails in "INBOX"):')
        assert result.count("UID: ") == 100

    def test_second_page(
        self, session: MagicMock, make_summary: Callable[..., EmailSummary]
    ) -> None:
        session.search_emails.return_value = [make_summary(uid) for uid in range(1, 26)]

        result = ListAllEmailsTool(session).run({"page": 2, "page_size": 10})

        assert result.startswith('Page 2 of 3 (11-20 of 25 emails in "INBOX"):')
        assert "UID: 11\n" in result
        assert "UID: 21\n" not in result

    def test_defaults(self, session: MagicMock, make_summary: Callable[..., EmailSummary]) -> None:
        session.search_emails.return_value = [make_summary(uid) for uid in range(1, 61)]

        result = ListAllEmailsTool(session).run({})

        assert result.startswith('Page 1 of 2 (1-50 of 60 emails in "INBOX"):')

    def test_page_past_the_end(
        self, session: MagicMock, make_summary: Callable[..., EmailSummary]
    ) -> None:
        session.search_emails.return_value = [make_summary(1)]

        result = ListAllEmailsTool(session).run({"page": 5})

        assert result == 'No emails found on page 5 of mailbox "INBOX"'

    def test_empty_mailbox(self, session: MagicMock) -> None:
        session.search_emails.return_value = []

        result = ListAllEmailsTool(session).run({"mailbox": "Empty"})

        assert result == 'No emails found on page 1 of mailbox "Empty"'

    def test_invalid_page(self, session: MagicMock) -> None:
        result = ListAllEmailsTool(session).run({"page": -1})

        assert result.startswith("Invalid parameter:")
        session.search_emails.assert_not_called()
