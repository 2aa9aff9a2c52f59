from typing import Any, Dict, List, Optional, Sequence

from anthropic import AsyncAnthropic
from anthropic.types import Message

from ..base import LanguageModelService
from ...logger import get_logger
from ...models import ConversationTurn, ModelResponse, TextBlock, ToolDescriptor, ToolUseBlock

logger = get_logger(__name__)


class AnthropicModelService(LanguageModelService):
    """
    Language model service backed by Anthropic's Messages API.
    """

    def __init__(self, client: AsyncAnthropic, model: str, max_tokens: int = 1000):
        """
        Args:
            client: The initialized AsyncAnthropic client.
            model: Claude model identifier.
            max_tokens: Upper bound of generated tokens per call.
        """
        super().__init__(model=model, max_tokens=max_tokens)
        self.client = client

    async def _create_message_impl(
        self,
        conversation: Sequence[ConversationTurn],
        tools: Optional[Sequence[ToolDescriptor]],
    ) -> ModelResponse:
        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [turn.model_dump() for turn in conversation],
        }
        if tools is not None:
            request["tools"] = self.convert_tools(tools)

        response = await self.client.messages.create(**request)
        return self._convert_response(response)

    @staticmethod
    def convert_tools(tools: Sequence[ToolDescriptor]) -> List[Dict[str, Any]]:
        """Map descriptors to Anthropic tool definitions (``name``, ``description``, ``input_schema``)."""
        return [
            {"name": tool.name, "description": tool.description, "input_schema": tool.input_schema}
            for tool in tools
        ]

    @staticmethod
    def _convert_response(response: Message) -> ModelResponse:
        blocks: List[Any] = []
        for block in response.content:
            if block.type == "text":
                blocks.append(TextBlock(text=block.text))
            elif block.type == "tool_use":
                tool_input = block.input if isinstance(block.input, dict) else {}
                blocks.append(ToolUseBlock(id=block.id, name=block.name, input=tool_input))
            else:
                # thinking and other block types carry nothing the bridge uses
                logger.debug("Skipping unsupported content block of type '%s'.", block.type)
        return ModelResponse(content=blocks, stop_reason=response.stop_reason)
