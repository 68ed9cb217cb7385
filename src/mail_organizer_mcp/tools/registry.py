"""Catalog of the mailbox tools this server exposes.

Tool modules add their class with ``@register_tool`` when
``mail_organizer_mcp.tools`` is imported. The catalog keeps registration
order, which is the order agents see in ``tools/list``, and every call gets
a fresh tool instance bound to the server's single ``MailboxSession``.
"""

from typing import Any

from mcp.types import TextContent, Tool

from mail_organizer_mcp.mailbox import MailboxSession
from mail_organizer_mcp.tools.base import BaseTool

_catalog: dict[str, type[BaseTool]] = {}


def register_tool(cls: type[BaseTool]) -> type[BaseTool]:
    """Add a tool class to the catalog under its ``name``.

    Raises:
        ValueError: If another class already claimed the name.
    """
    existing = _catalog.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(
            f"Tool name {cls.name!r} already registered by {existing.__qualname__}"
        )
    _catalog[cls.name] = cls
    return cls


def get_tool_class(name: str) -> type[BaseTool]:
    """Look up a tool class by name.

    Raises:
        KeyError: If no tool has that name.
    """
    try:
        return _catalog[name]
    except KeyError:
        raise KeyError(f"Unknown tool: {name}") from None


def get_all_tools() -> list[Tool]:
    """Describe every mailbox tool for the MCP ``tools/list`` response."""
    return [
        Tool(name=cls.name, description=cls.description, inputSchema=cls.input_schema)
        for cls in _catalog.values()
    ]


def execute_tool(
    name: str, arguments: dict[str, Any], session: MailboxSession
) -> list[TextContent]:
    """Run one tool call against the mailbox session.

    Tool failures come back as text; only an unknown ``name`` raises
    ``KeyError``.
    """
    return get_tool_class(name)(session).execute(arguments)


def get_tool_names() -> list[str]:
    return list(_catalog)
