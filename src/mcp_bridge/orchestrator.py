"""Resolve a natural-language query into a final answer via the model and the tool host."""

import json
from typing import Any, List, Mapping

from .llm import LanguageModelService
from .logger import get_logger
from .models import ConversationTurn, ModelResponse, TextBlock, ToolUseBlock
from .session import BridgeSession

logger = get_logger(__name__)


def format_tool_call(name: str, args: Mapping[str, Any]) -> str:
    """Trace line recorded in the answer for every tool invocation.

    Arguments are rendered as compact JSON in the order they were received.
    """
    rendered = json.dumps(dict(args), separators=(",", ":"), ensure_ascii=False, default=str)
    return f"[Calling tool {name} with args {rendered}]"


class QueryOrchestrator:
    """Drives one query through the model and the tool host.

    The first model call receives the full tool catalog. Every tool-use block is
    executed as soon as it is reached; its result is appended as a user turn and
    the model is asked once more, without tools, to comment on it. A tool request
    inside that follow-up is not expanded.

    The orchestrator holds no per-query state, so one instance can serve every
    query of a session. Any ``ModelServiceError`` or ``ToolHostError`` propagates
    and no partial answer is returned.
    """

    def __init__(self, model_service: LanguageModelService):
        self.model_service = model_service

    async def process_query(self, session: BridgeSession, query: str) -> str:
        """
        Resolves a single query.

        Args:
            session: Connected session providing the catalog and the tool host.
            query: The user's natural-language query.

        Returns:
            Text blocks, tool trace lines and follow-up texts joined by newline.

        Raises:
            ModelServiceError: If any model call fails.
            ToolHostError: If any tool call fails.
        """
        conversation: List[ConversationTurn] = [ConversationTurn.user(query)]
        final_text: List[str] = []

        response = await self.model_service.create_message(conversation, tools=session.catalog)
        logger.debug("Initial response has %d block(s), stop reason: %s", len(response.content), response.stop_reason)

        for block in response.content:
            if isinstance(block, TextBlock):
                final_text.append(block.text)
            elif isinstance(block, ToolUseBlock):
                final_text.extend(await self._handle_tool_use(session, conversation, block))

        return "\n".join(final_text)

    async def _handle_tool_use(
        self, session: BridgeSession, conversation: List[ConversationTurn], block: ToolUseBlock
    ) -> List[str]:
        """Runs one tool call and its follow-up; returns the trace line and the follow-up text."""
        logger.info("Calling tool '%s'.", block.name)
        result = await session.tool_host.call_tool(block.name, block.input)

        trace = format_tool_call(block.name, block.input)
        conversation.append(ConversationTurn.user(result.content))

        follow_up = await self.model_service.create_message(conversation)
        return [trace, self._first_text(follow_up)]

    @staticmethod
    def _first_text(response: ModelResponse) -> str:
        if not response.content:
            return ""
        first = response.content[0]
        if isinstance(first, TextBlock):
            return first.text
        if isinstance(first, ToolUseBlock):
            logger.warning("Follow-up requested tool '%s'; nested tool calls are not expanded.", first.name)
        return ""
