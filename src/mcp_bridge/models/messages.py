"""Conversation and model response models exchanged with the language model service."""

from typing import Any, Dict, List, Literal, Optional, Union, Annotated

from pydantic import BaseModel, Field


class ConversationTurn(BaseModel):
    """A single turn of the conversation sent to the model.

    Attributes:
        role: Author of the turn.
        content: Plain text or provider-shaped structured blocks.
    """

    role: Literal["user", "assistant"]
    content: Union[str, List[Dict[str, Any]]]

    @classmethod
    def user(cls, content: str) -> "ConversationTurn":
        return cls(role="user", content=content)


class TextBlock(BaseModel):
    """Plain text emitted by the model."""

    type: Literal["text"] = "text"
    text: str


class ToolUseBlock(BaseModel):
    """A request from the model to invoke a tool.

    Attributes:
        id: Provider-assigned identifier of the tool call, if any.
        name: Name of the requested tool.
        input: Arguments for the tool, in the order the model produced them.
    """

    type: Literal["tool_use"] = "tool_use"
    id: Optional[str] = None
    name: str
    input: Dict[str, Any] = Field(default_factory=dict)


ContentBlock = Annotated[Union[TextBlock, ToolUseBlock], Field(discriminator="type")]


class ModelResponse(BaseModel):
    """Normalized response of one language model call.

    Attributes:
        content: Ordered response blocks.
        stop_reason: Provider stop reason, kept for logging.
    """

    content: List[ContentBlock] = Field(default_factory=list)
    stop_reason: Optional[str] = None
