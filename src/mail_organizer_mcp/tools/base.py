"""Abstract base class for MCP tools."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from mcp.types import TextContent

from mail_organizer_mcp.mailbox import MailboxSession


class BaseTool(ABC):
    """Abstract base class defining the interface for MCP tools.

    Subclasses must define class-level attributes for name, description,
    and input_schema, and implement the run method. ``run`` returns the text
    shown to the agent; wrap it with ``handle_tool_errors`` so failures are
    rendered as text too.

    Usage:
        @register_tool
        class MyTool(BaseTool):
            name = "my_tool"
            description = "Does something useful"
            input_schema = {"type": "object", "properties": {}, "required": []}

            @handle_tool_errors("doing something")
            def run(self, arguments: dict[str, Any]) -> str:
                ...
    """

    name: ClassVar[str]
    description: ClassVar[str]
    input_schema: ClassVar[dict[str, Any]]

    def __init__(self, session: MailboxSession) -> None:
        """Initialize the tool with a MailboxSession instance.

        Args:
            session: Mailbox session for mail operations
        """
        self.session = session

    def execute(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Execute the tool and wrap its text in a single content block."""
        return [TextContent(type="text", text=self.run(arguments))]

    @abstractmethod
    def run(self, arguments: dict[str, Any]) -> str:
        """Run the tool with the given arguments.

        Args:
            arguments: Tool arguments matching the input_schema

        Returns:
            Text response for the agent
        """
        ...
