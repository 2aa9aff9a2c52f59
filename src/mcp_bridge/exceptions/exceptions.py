"""
Exception classes raised by the MCP bridge.

Startup errors (``InvalidScriptType``, ``ToolHostConnectionError``,
``ConfigurationError``) mean no query can be served. Per-query errors
(``ModelServiceError``, ``ToolHostError``) abort only the current query.
"""


class BridgeError(Exception):
    """Base exception for all bridge errors."""

    pass


class ConfigurationError(BridgeError):
    """Raised when the bridge settings are incomplete or invalid."""

    pass


class InvalidScriptType(BridgeError, ValueError):
    """Raised when the tool server entry point is neither a ``.py`` nor a ``.js`` file."""

    def __init__(self, path: str):
        super().__init__(f"Server script must be a .js or .py file, got: {path}")
        self.path = path


class ToolHostConnectionError(BridgeError, ConnectionError):
    """Raised when the tool host cannot be reached or listing its tools fails."""

    pass


class ModelServiceError(BridgeError):
    """Raised when a call to the language model service fails."""

    pass


class ToolHostError(BridgeError):
    """Raised when a tool invocation on the tool host fails."""

    def __init__(self, message: str, tool_name: str | None = None):
        super().__init__(message)
        self.tool_name = tool_name
