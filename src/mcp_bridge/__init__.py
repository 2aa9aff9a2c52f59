"""MCP Bridge - let a language model call the tools of an MCP server."""

__version__ = "0.1.0"

from .client import MCPBridgeClient
from .config import BridgeSettings
from .exceptions import (
    BridgeError,
    ConfigurationError,
    InvalidScriptType,
    ToolHostConnectionError,
    ModelServiceError,
    ToolHostError,
)
from .llm import LanguageModelService, AnthropicModelService, OpenAIModelService, create_model_service
from .logger import get_logger, setup_logging
from .models import (
    ConversationTurn,
    TextBlock,
    ToolUseBlock,
    ModelResponse,
    ToolDescriptor,
    ToolResult,
    QueryResult,
)
from .orchestrator import QueryOrchestrator
from .session import BridgeSession, connect, cleanup
from .tool_host import ToolHostClient

__all__ = [
    "__version__",
    "MCPBridgeClient",
    "BridgeSettings",
    "BridgeError",
    "ConfigurationError",
    "InvalidScriptType",
    "ToolHostConnectionError",
    "ModelServiceError",
    "ToolHostError",
    "LanguageModelService",
    "AnthropicModelService",
    "OpenAIModelService",
    "create_model_service",
    "get_logger",
    "setup_logging",
    "ConversationTurn",
    "TextBlock",
    "ToolUseBlock",
    "ModelResponse",
    "ToolDescriptor",
    "ToolResult",
    "QueryResult",
    "QueryOrchestrator",
    "BridgeSession",
    "connect",
    "cleanup",
    "ToolHostClient",
]
