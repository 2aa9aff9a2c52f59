"""Normalize the tool host's tool listing into the catalog handed to the language model."""

from typing import Tuple

from mcp.types import Tool as MCPTool

from .exceptions import ToolHostConnectionError
from .logger import get_logger
from .models import ToolDescriptor
from .tool_host import ToolHostClient

logger = get_logger(__name__)

ToolCatalog = Tuple[ToolDescriptor, ...]


def to_descriptor(tool: MCPTool) -> ToolDescriptor:
    return ToolDescriptor(
        name=tool.name,
        description=tool.description or "",
        input_schema=dict(tool.inputSchema or {}),
    )


async def fetch_catalog(tool_host: ToolHostClient) -> ToolCatalog:
    """Lists the tool host's tools once and converts them to descriptors.

    Args:
        tool_host: A connected tool host client.

    Returns:
        The tools in the order the server advertised them.

    Raises:
        ToolHostConnectionError: If the channel is unavailable or the listing fails.
    """
    try:
        tools = await tool_host.list_tools()
        catalog = tuple(to_descriptor(tool) for tool in tools)
    except ToolHostConnectionError:
        raise
    except Exception as e:
        raise ToolHostConnectionError(f"Failed to fetch tool catalog: {e}") from e

    logger.info("Found %d tools from MCP server.", len(catalog))
    logger.info("Connected to server with tools: %s", [t.name for t in catalog])
    return catalog
