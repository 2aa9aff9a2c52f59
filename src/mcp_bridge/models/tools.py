"""Tool-related data models shared by the catalog, the tool host and the orchestrator."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    """A tool advertised by the tool host.

    Attributes:
        name: Unique tool name.
        description: Human-readable description; empty when the server gives none.
        input_schema: JSON schema of the tool arguments, passed through unchanged.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    input_schema: Dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """Outcome of a tool call, flattened to text for re-injection into the conversation."""

    content: str
    is_error: bool = False
