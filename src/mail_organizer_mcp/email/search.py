"""Translation of search filters into IMAP search predicates."""

from datetime import date, timedelta
from typing import Any

from imap_tools import AND

from mail_organizer_mcp.email.models import SearchCriteria


def build_search_criteria(criteria: SearchCriteria, today: date | None = None) -> AND:
    """Combine every filter that is set into a single AND predicate.

    Empty strings and zero-day windows count as unset. With no filter set the
    predicate matches every message in the folder.

    Args:
        criteria: Search filters supplied by the caller.
        today: Reference day for the since/before windows (default: today).

    Returns:
        An imap-tools ``AND`` query.
    """
    today = today or date.today()

    params: dict[str, Any] = {}
    if criteria.unread_only:
        params["seen"] = False
    if criteria.from_:
        params["from_"] = criteria.from_
    if criteria.to:
        params["to"] = criteria.to
    if criteria.subject:
        params["subject"] = criteria.subject
    if criteria.body:
        params["body"] = criteria.body
    if criteria.since_days:
        params["date_gte"] = today - timedelta(days=criteria.since_days)
    if criteria.before_days:
        params["date_lt"] = today - timedelta(days=criteria.before_days)

    if not params:
        return AND(all=True)
    return AND(**params)
