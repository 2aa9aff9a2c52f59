"""Core abstraction for language model providers."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..exceptions import ModelServiceError
from ..logger import get_logger
from ..models import ConversationTurn, ModelResponse, ToolDescriptor

logger = get_logger(__name__)


class LanguageModelService(ABC):
    """Abstract base class for language model providers.

    Implementations translate the provider-agnostic conversation and tool catalog
    into their SDK's request shape and normalize the answer into a ``ModelResponse``.
    """

    def __init__(self, model: str, max_tokens: int = 1000):
        """
        Args:
            model: Model identifier sent with every request.
            max_tokens: Upper bound of generated tokens per call.
        """
        self.model = model
        self.max_tokens = max_tokens

    async def create_message(
        self,
        conversation: Sequence[ConversationTurn],
        tools: Optional[Sequence[ToolDescriptor]] = None,
    ) -> ModelResponse:
        """
        Sends the conversation (and optionally the tool catalog) to the model.

        Args:
            conversation: Ordered turns; the last one must be a user turn.
            tools: Tools the model may request. ``None`` omits tools from the request.

        Returns:
            The normalized model response.

        Raises:
            ModelServiceError: If the request fails for any reason. Nothing is retried.
        """
        if not conversation or conversation[-1].role != "user":
            raise ModelServiceError("Conversation must end with a user turn.")

        logger.debug(
            "Requesting %s with %d turn(s) and %s tool(s).",
            self.model,
            len(conversation),
            len(tools) if tools is not None else "no",
        )
        try:
            return await self._create_message_impl(conversation, tools)
        except ModelServiceError:
            raise
        except Exception as e:
            logger.error("Model service request failed: %s", e)
            raise ModelServiceError(f"Model service request failed: {e}") from e

    @abstractmethod
    async def _create_message_impl(
        self,
        conversation: Sequence[ConversationTurn],
        tools: Optional[Sequence[ToolDescriptor]],
    ) -> ModelResponse:
        pass
