"""Data models used across the bridge."""

from .messages import ConversationTurn, TextBlock, ToolUseBlock, ContentBlock, ModelResponse
from .tools import ToolDescriptor, ToolResult
from .results import QueryResult

__all__ = [
    "ConversationTurn",
    "TextBlock",
    "ToolUseBlock",
    "ContentBlock",
    "ModelResponse",
    "ToolDescriptor",
    "ToolResult",
    "QueryResult",
]
