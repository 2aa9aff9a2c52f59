from typing import Any, List, Optional, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest

from mcp_bridge.llm import LanguageModelService
from mcp_bridge.models import ConversationTurn, ModelResponse, ToolDescriptor, ToolResult
from mcp_bridge.session import BridgeSession
from mcp_bridge.tool_host import ToolHostClient


class ScriptedModelService(LanguageModelService):
    """Model service returning pre-scripted responses and recording every request."""

    def __init__(self, responses: Sequence[Any]) -> None:
        super().__init__(model="scripted-model", max_tokens=1000)
        self._responses = list(responses)
        self.calls: List[dict[str, Any]] = []

    async def _create_message_impl(
        self,
        conversation: Sequence[ConversationTurn],
        tools: Optional[Sequence[ToolDescriptor]],
    ) -> ModelResponse:
        # Snapshot: the orchestrator keeps appending to the same list.
        self.calls.append({"conversation": list(conversation), "tools": tools})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return ModelResponse.model_validate(response) if isinstance(response, dict) else response


def text(value: str) -> dict[str, Any]:
    return {"type": "text", "text": value}


def tool_use(name: str, args: dict[str, Any], call_id: str = "toolu_1") -> dict[str, Any]:
    return {"type": "tool_use", "id": call_id, "name": name, "input": args}


def response(*blocks: dict[str, Any]) -> dict[str, Any]:
    return {"content": list(blocks)}


@pytest.fixture
def catalog() -> tuple[ToolDescriptor, ...]:
    return (
        ToolDescriptor(
            name="list_files",
            description="List files in the working directory",
            input_schema={"type": "object", "properties": {}},
        ),
        ToolDescriptor(
            name="read_file",
            description="Read a file",
            input_schema={"type": "object", "properties": {"path": {"type": "string"}}, "required": ["path"]},
        ),
    )


@pytest.fixture
def mock_tool_host() -> Any:
    tool_host = MagicMock(spec=ToolHostClient)
    tool_host.call_tool = AsyncMock(return_value=ToolResult(content="ok"))
    tool_host.close = AsyncMock()
    return tool_host


@pytest.fixture
def bridge_session(catalog: tuple[ToolDescriptor, ...], mock_tool_host: Any) -> BridgeSession:
    return BridgeSession(catalog=catalog, tool_host=mock_tool_host)
