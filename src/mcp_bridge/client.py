"""High-level client tying the session lifecycle and the orchestrator together."""

from types import TracebackType
from typing import Optional, Type

from . import session as session_lifecycle
from .catalog import ToolCatalog
from .config import BridgeSettings
from .exceptions import BridgeError, ModelServiceError, ToolHostError
from .llm import LanguageModelService, create_model_service
from .logger import get_logger
from .models import QueryResult
from .orchestrator import QueryOrchestrator
from .session import BridgeSession

logger = get_logger(__name__)

__all__ = ["MCPBridgeClient"]


class MCPBridgeClient:
    """Bridge between a language model service and one MCP tool server.

    Example:
        async with MCPBridgeClient(service) as client:
            await client.connect("server.py")
            answer = await client.process_query("list files")
    """

    def __init__(self, model_service: LanguageModelService):
        """
        Args:
            model_service: Provider used for every model call.
        """
        self._orchestrator = QueryOrchestrator(model_service)
        self._session: Optional[BridgeSession] = None

    @classmethod
    def from_settings(cls, settings: BridgeSettings) -> "MCPBridgeClient":
        """Create a client whose model service is built from settings.

        Raises:
            ConfigurationError: If the provider's API key is missing.
        """
        return cls(create_model_service(settings))

    @property
    def session(self) -> Optional[BridgeSession]:
        return self._session

    @property
    def tools(self) -> ToolCatalog:
        return self._session.catalog if self._session else ()

    async def connect(self, entry_point_path: str, env: Optional[dict[str, str]] = None) -> ToolCatalog:
        """Connects to the MCP server script and caches its tool catalog.

        Args:
            entry_point_path: Path to the server script (.py or .js).
            env: Optional environment for the server process.

        Returns:
            The fetched tool catalog.

        Raises:
            BridgeError: If the client is already connected.
            InvalidScriptType: If the script has an unsupported extension.
            ToolHostConnectionError: If the server cannot be reached or listed.
        """
        if self._session is not None:
            raise BridgeError("Client is already connected to an MCP server.")
        self._session = await session_lifecycle.connect(entry_point_path, env=env)
        return self._session.catalog

    async def process_query(self, query: str) -> str:
        """Processes a query using the model and the available tools.

        Raises:
            BridgeError: If the client is not connected.
            ModelServiceError: If a model call fails.
            ToolHostError: If a tool call fails.
        """
        if self._session is None:
            raise BridgeError("Client is not connected. Call 'connect' first.")
        return await self._orchestrator.process_query(self._session, query)

    async def run_query(self, query: str) -> QueryResult:
        """Like ``process_query`` but reports per-query failures as a result.

        The connection stays usable after a failed query.
        """
        try:
            response = await self.process_query(query)
        except (ModelServiceError, ToolHostError) as e:
            logger.exception("Error processing query")
            return QueryResult(error=str(e), error_type=type(e).__name__)
        return QueryResult(response=response)

    async def cleanup(self) -> None:
        """Closes the tool host channel. Safe to call more than once."""
        if self._session is not None:
            try:
                await session_lifecycle.cleanup(self._session)
            finally:
                self._session = None

    async def __aenter__(self) -> "MCPBridgeClient":
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.cleanup()
