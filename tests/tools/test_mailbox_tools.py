"""Tests for the mailbox (folder) tools."""

import imaplib
from collections.abc import Callable
from unittest.mock import MagicMock

from mail_organizer_mcp.email.models import EmailSummary, SearchCriteria
from mail_organizer_mcp.tools.create_mailbox import CreateMailboxTool
from mail_organizer_mcp.tools.delete_mailbox import DeleteMailboxTool
from mail_organizer_mcp.tools.list_mailboxes import ListMailboxesTool


class TestListMailboxes:
    def test_lists_names(self, session: MagicMock) -> None:
        session.list_mailboxes.return_value = ["INBOX", "Archive", "Archive/2024"]

        result = ListMailboxesTool(session).run({})

        assert result == "Found 3 mailboxes:\nINBOX\nArchive\nArchive/2024"

    def test_server_error(self, session: MagicMock) -> None:
        session.list_mailboxes.side_effect = OSError("Connection reset")

        result = ListMailboxesTool(session).run({})

        assert result.startswith("Error listing mailboxes:")
        assert "Connection reset" in result


class TestCreateMailbox:
    def test_creates(self, session: MagicMock) -> None:
        result = CreateMailboxTool(session).run({"name": "Projects"})

        assert result == 'Mailbox "Projects" created successfully'
        session.create_mailbox.assert_called_once_with("Projects")

    def test_missing_name(self, session: MagicMock) -> None:
        result = CreateMailboxTool(session).run({})

        assert result.startswith("Invalid parameter:")
        session.create_mailbox.assert_not_called()

    def test_server_rejects_name(self, session: MagicMock) -> None:
        session.create_mailbox.side_effect = imaplib.IMAP4.error("[ALREADYEXISTS] Mailbox exists")

        result = CreateMailboxTool(session).run({"name": "INBOX"})

        assert result.startswith("Error creating mailbox:")
        assert "Mailbox exists" in result


class TestDeleteMailbox:
    def test_deletes_empty_mailbox(self, session: MagicMock) -> None:
        session.search_emails.return_value = []

        result = DeleteMailboxTool(session).run({"name": "Old"})

        assert result == 'Mailbox "Old" deleted successfully'
        probe = session.search_emails.call_args[0][0]
        assert isinstance(probe, SearchCriteria)
        assert probe.mailbox == "Old"
        assert probe.limit == 1
        session.delete_mailbox.assert_called_once_with("Old")

    def test_refuses_non_empty_mailbox(
        self, session: MagicMock, make_summary: Callable[..., EmailSummary]
    ) -> None:
        session.search_emails.return_value = [make_summary(1), make_summary(2), make_summary(3)]

        result = DeleteMailboxTool(session).run({"name": "Archive"})

        assert result == (
            'Cannot delete mailbox "Archive": mailbox is not empty (contains 1+ emails)'
        )
        session.delete_mailbox.assert_not_called()

    def test_missing_mailbox(self, session: MagicMock) -> None:
        session.search_emails.side_effect = imaplib.IMAP4.error("[NONEXISTENT] Unknown Mailbox")

        result = DeleteMailboxTool(session).run({"name": "Nope"})

        assert result.startswith("Error deleting mailbox:")
        assert "Unknown Mailbox" in result
        session.delete_mailbox.assert_not_called()
