"""Export the bridge exception hierarchy used by startup and per-query paths."""

from .exceptions import (
    BridgeError,
    ConfigurationError,
    InvalidScriptType,
    ToolHostConnectionError,
    ModelServiceError,
    ToolHostError,
)

__all__ = [
    "BridgeError",
    "ConfigurationError",
    "InvalidScriptType",
    "ToolHostConnectionError",
    "ModelServiceError",
    "ToolHostError",
]
