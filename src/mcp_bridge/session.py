"""Connection lifecycle: build an immutable session at connect time and tear it down once."""

from dataclasses import dataclass
from typing import Optional

from .catalog import ToolCatalog, fetch_catalog
from .logger import get_logger
from .tool_host import ToolHostClient

logger = get_logger(__name__)


@dataclass(frozen=True)
class BridgeSession:
    """The tool catalog and the channel it was fetched from.

    Attributes:
        catalog: Tool descriptors, fetched once per connection.
        tool_host: The connected tool host channel.
    """

    catalog: ToolCatalog
    tool_host: ToolHostClient

    @property
    def tool_names(self) -> list[str]:
        return [tool.name for tool in self.catalog]


async def connect(entry_point_path: str, env: Optional[dict[str, str]] = None) -> BridgeSession:
    """Starts the tool host for a server script and fetches its catalog.

    Args:
        entry_point_path: Path to a ``.py`` or ``.js`` MCP server script.
        env: Optional environment for the server process.

    Returns:
        The connected session.

    Raises:
        InvalidScriptType: If the script has an unsupported extension. Nothing is spawned.
        ToolHostConnectionError: If the transport or the tool listing fails.
    """
    tool_host = ToolHostClient.for_script(entry_point_path, env=env)
    await tool_host.connect()
    try:
        catalog = await fetch_catalog(tool_host)
    except BaseException:
        await tool_host.close()
        raise
    return BridgeSession(catalog=catalog, tool_host=tool_host)


async def cleanup(session: BridgeSession) -> None:
    """Closes the session's channel. Calling it again is a no-op."""
    await session.tool_host.close()
