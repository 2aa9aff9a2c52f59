"""MCP tool host channel."""

from .client import ToolHostClient

__all__ = ["ToolHostClient"]
