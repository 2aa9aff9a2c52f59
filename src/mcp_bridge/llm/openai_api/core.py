import json
from typing import Any, Dict, Iterable, List, Optional, Sequence, cast

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion, ChatCompletionToolParam

from ..base import LanguageModelService
from ...exceptions import ModelServiceError
from ...logger import get_logger
from ...models import ConversationTurn, ModelResponse, TextBlock, ToolDescriptor, ToolUseBlock

logger = get_logger(__name__)


class OpenAIModelService(LanguageModelService):
    """
    Language model service backed by OpenAI chat completions.
    Tool calls are mapped onto ``ToolUseBlock`` so the orchestrator stays provider-agnostic.
    """

    def __init__(self, client: AsyncOpenAI, model: str, max_tokens: int = 1000):
        """
        Args:
            client: The initialized AsyncOpenAI client.
            model: The identifier for the OpenAI model to use (e.g., 'gpt-4o-mini').
            max_tokens: The maximum number of tokens to generate per call.
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
            "messages": cast(Iterable[Any], self._convert_conversation(conversation)),
        }
        if tools is not None:
            request["tools"] = self.convert_tools(tools)

        response = await self.client.chat.completions.create(**request)
        return self._convert_response(response)

    @staticmethod
    def convert_tools(tools: Sequence[ToolDescriptor]) -> List[ChatCompletionToolParam]:
        """Map descriptors to OpenAI function tools."""
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.input_schema or {"type": "object", "properties": {}},
                },
            }
            for tool in tools
        ]

    @staticmethod
    def _convert_conversation(conversation: Sequence[ConversationTurn]) -> List[Dict[str, Any]]:
        messages = []
        for turn in conversation:
            content = turn.content
            if not isinstance(content, str):
                # Structured blocks: keep only their text parts.
                content = "\n".join(str(block.get("text", "")) for block in content if block.get("type") == "text")
            messages.append({"role": turn.role, "content": content})
        return messages

    @staticmethod
    def _convert_response(response: ChatCompletion) -> ModelResponse:
        """
        Converts a chat completion into ordered blocks: the message text first, then tool calls.

        Raises:
            ModelServiceError: If a tool call carries arguments that are not a JSON object.
        """
        if not response.choices:
            logger.warning("OpenAI response has no choices.")
            return ModelResponse(content=[])

        choice = response.choices[0]
        message = choice.message
        blocks: List[Any] = []
        if message.content:
            blocks.append(TextBlock(text=message.content))

        for tool_call in message.tool_calls or []:
            if tool_call.type != "function":
                continue
            try:
                arguments = json.loads(tool_call.function.arguments or "{}")
            except json.JSONDecodeError as e:
                raise ModelServiceError(
                    f"Failed to decode arguments for tool '{tool_call.function.name}': {e}"
                ) from e
            if not isinstance(arguments, dict):
                raise ModelServiceError(f"Arguments for tool '{tool_call.function.name}' must be a JSON object.")
            blocks.append(ToolUseBlock(id=tool_call.id, name=tool_call.function.name, input=arguments))

        return ModelResponse(content=blocks, stop_reason=choice.finish_reason)
