"""Stdio channel to the MCP tool host: spawning, tool listing, tool calls and teardown."""

import sys
from contextlib import AsyncExitStack
from types import TracebackType
from typing import Any, List, Mapping, Optional, Sequence, Type, cast

from mcp import ClientSession
from mcp.client.stdio import stdio_client, StdioServerParameters
from mcp.types import Tool as MCPTool, TextContent, ImageContent, EmbeddedResource

from ..exceptions import InvalidScriptType, ToolHostConnectionError, ToolHostError
from ..logger import get_logger
from ..models import ToolResult

logger = get_logger(__name__)

__all__ = ["ToolHostClient"]


class ToolHostClient:
    """Client side of a single MCP stdio connection.

    One instance owns one server subprocess. Calls are issued one at a time;
    concurrent queries over the same instance are not supported.
    """

    def __init__(self, command: str, args: list[str], env: Optional[dict[str, str]] = None):
        """Initializes the client with parameters for the MCP server process.

        Args:
            command: The command to run the server.
            args: List of arguments for the command.
            env: Optional dictionary of environment variables.
        """
        self._server_params = StdioServerParameters(command=command, args=args, env=env)
        self._session: Optional[ClientSession] = None
        self._exit_stack = AsyncExitStack()
        self._closed = False

    @staticmethod
    def resolve_command(entry_point_path: str) -> str:
        """Pick the interpreter used to launch a server script.

        Args:
            entry_point_path: Path to the server script.

        Returns:
            ``python``/``python3`` for ``.py`` scripts, ``node`` for ``.js`` scripts.

        Raises:
            InvalidScriptType: If the path has neither extension.
        """
        if entry_point_path.endswith(".py"):
            return "python" if sys.platform == "win32" else "python3"
        if entry_point_path.endswith(".js"):
            return "node"
        raise InvalidScriptType(entry_point_path)

    @classmethod
    def for_script(cls, entry_point_path: str, env: Optional[dict[str, str]] = None) -> "ToolHostClient":
        """Create an unconnected client for a ``.py`` or ``.js`` server script.

        Raises:
            InvalidScriptType: If the path has neither extension.
        """
        command = cls.resolve_command(entry_point_path)
        return cls(command, [entry_point_path], env=env)

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    async def connect(self) -> None:
        """Spawns the server process and initializes the MCP session.

        Raises:
            ToolHostConnectionError: If the client was already used, or the transport
                or the protocol handshake fails.
        """
        if self._session is not None or self._closed:
            raise ToolHostConnectionError("Tool host client cannot be connected twice.")

        logger.debug(
            "Starting MCP server: %s %s", self._server_params.command, " ".join(self._server_params.args)
        )
        try:
            read, write = await self._exit_stack.enter_async_context(stdio_client(self._server_params))
            session = await self._exit_stack.enter_async_context(ClientSession(read, write))
            await session.initialize()
        except Exception as e:
            logger.error("Failed to connect to MCP server: %s", e)
            await self._exit_stack.aclose()
            self._closed = True
            raise ToolHostConnectionError(f"Failed to connect to MCP server: {e}") from e

        self._session = session
        logger.info("MCP client session initialized successfully.")

    async def __aenter__(self) -> "ToolHostClient":
        await self.connect()
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.close()

    async def list_tools(self) -> List[MCPTool]:
        """Fetches the tools advertised by the server.

        Raises:
            ToolHostConnectionError: If the client is not connected or the listing call fails.
        """
        if not self._session:
            raise ToolHostConnectionError("MCP client is not connected.")

        logger.debug("Fetching tools from MCP server...")
        try:
            result = await self._session.list_tools()
        except Exception as e:
            raise ToolHostConnectionError(f"Listing tools failed: {e}") from e
        return list(result.tools)

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Invokes a tool on the server and flattens its content to text.

        Args:
            name: Tool name.
            arguments: Tool arguments, forwarded unchanged.

        Returns:
            The flattened tool result; tool-reported errors are returned, not raised.

        Raises:
            ToolHostError: If the client is not connected or the call fails. A result the
                server flags as an error is returned with ``is_error`` set.
        """
        if not self._session:
            raise ToolHostError(f"Cannot call tool '{name}': MCP session is not active.", tool_name=name)

        logger.info("Delegating tool '%s' to MCP Server...", name)
        logger.debug("Tool arguments: %s", arguments)

        try:
            mcp_result = await self._session.call_tool(name, arguments=dict(arguments) if arguments else {})
            result_text = self._flatten_content(mcp_result.content)
            is_error = bool(mcp_result.isError)
        except Exception as e:
            raise ToolHostError(f"Tool '{name}' failed: {e}", tool_name=name) from e

        if is_error:
            logger.warning("Tool '%s' reported an error: %s", name, result_text)

        logger.debug(
            "Tool '%s' result: %s", name, result_text[:200] + "..." if len(result_text) > 200 else result_text
        )
        return ToolResult(content=result_text, is_error=is_error)

    async def close(self) -> None:
        """Closes the session and stops the server process. Safe to call repeatedly."""
        if self._closed:
            logger.debug("MCP client session already closed.")
            return
        self._closed = True
        logger.debug("Closing MCP client session...")
        try:
            await self._exit_stack.aclose()
        finally:
            self._session = None
        logger.info("MCP client session closed.")

    @staticmethod
    def _flatten_content(content: Sequence[Any]) -> str:
        output = []
        for c in content:
            if c.type == "text":
                output.append(cast(TextContent, c).text)
            elif c.type == "image":
                output.append(f"[Image: {cast(ImageContent, c).mimeType}]")
            elif c.type == "resource":
                output.append(f"[Resource: {cast(EmbeddedResource, c).resource.uri}]")
            else:
                output.append(f"[Unknown content type: {c.type}]")
        return "\n".join(output)
