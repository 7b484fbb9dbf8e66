"""MCP stdio server exposing the contact-center analytics tools."""

import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool, ToolAnnotations

from . import __version__
from .clients import AuthSession, GenesysCloudClient
from .config import Settings, get_settings
from .errors import AuthenticationError
from .tools import AnalyticsTool, build_tools
from .tracing import setup_logging, setup_tracing

logger = logging.getLogger(__name__)

SERVER_NAME = "Genesys Cloud"


class UnknownToolError(LookupError):
    """Raised when a client calls a tool the server does not serve."""


class ToolCallFailed(Exception):
    """Raised to report a tool's error result; the SDK marks the response isError."""


class ContactAnalyticsMCPServer:
    """Registers the analytics tools on a low-level MCP server."""

    def __init__(
        self,
        client: GenesysCloudClient | None = None,
        settings: Settings | None = None,
        tools: dict[str, AnalyticsTool] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = client or GenesysCloudClient()
        self.auth = AuthSession(self.client, self.settings)
        self.tools = tools if tools is not None else build_tools(self.client, self.settings)

        self.server = Server(SERVER_NAME, version=__version__)
        self._register_handlers()
        logger.info("MCP server initialized with %d tools", len(self.tools))

    def _register_handlers(self) -> None:
        self.server.list_tools()(self._list_tools)
        self.server.call_tool()(self._call_tool)

    async def _list_tools(self) -> list[Tool]:
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema(),
                annotations=ToolAnnotations(title=tool.title) if tool.title else None,
            )
            for tool in self.tools.values()
        ]

    async def _call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        """
        Execute a tool.

        Raises:
            UnknownToolError: If no tool has that name
            pydantic.ValidationError: If the arguments do not fit the tool
            ToolCallFailed: If authentication failed or the tool reported an error
        """
        tool = self.tools.get(name)
        if tool is None:
            raise UnknownToolError(f"Unknown tool: {name}")

        params = tool.parse_params(arguments)

        try:
            await self.auth.ensure_authenticated()
        except AuthenticationError as e:
            logger.error("Authentication failed: %s", e.reason)
            raise ToolCallFailed(e.message) from e

        result = await tool.call(params)
        if result.is_error:
            raise ToolCallFailed(result.text)
        return [TextContent(type="text", text=item.text) for item in result.content]

    async def run(self) -> None:
        """Run the MCP server using stdio transport."""
        logger.info("Starting %s MCP server on stdio", SERVER_NAME)
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.client.aclose()


async def async_main() -> None:
    server = ContactAnalyticsMCPServer()
    await server.run()


def main() -> None:
    """Entry point for the contact-analytics-mcp script."""
    setup_logging()
    setup_tracing()
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
