from typing import Any
from unittest.mock import AsyncMock

import pytest

from conftest import ScriptedModelService, response, text, tool_use
from mcp_bridge.exceptions import ModelServiceError, ToolHostError
from mcp_bridge.models import ToolResult
from mcp_bridge.orchestrator import QueryOrchestrator, format_tool_call
from mcp_bridge.session import BridgeSession


@pytest.mark.asyncio
async def test_text_only_answer_is_returned_verbatim(bridge_session: BridgeSession) -> None:
    service = ScriptedModelService([response(text("4"))])
    orchestrator = QueryOrchestrator(service)

    result = await orchestrator.process_query(bridge_session, "what is 2+2")

    assert result == "4"
    assert len(service.calls) == 1
    assert service.calls[0]["tools"] == bridge_session.catalog
    assert [t.model_dump() for t in service.calls[0]["conversation"]] == [{"role": "user", "content": "what is 2+2"}]
    bridge_session.tool_host.call_tool.assert_not_called()


@pytest.mark.asyncio
async def test_multiple_text_blocks_are_joined_by_newline(bridge_session: BridgeSession) -> None:
    service = ScriptedModelService([response(text("first"), text(""), text("  third  "))])

    result = await QueryOrchestrator(service).process_query(bridge_session, "hi")

    assert result == "first\n\n  third  "


@pytest.mark.asyncio
async def test_empty_model_response_yields_empty_answer(bridge_session: BridgeSession) -> None:
    service = ScriptedModelService([response()])

    assert await QueryOrchestrator(service).process_query(bridge_session, "hi") == ""


@pytest.mark.asyncio
async def test_single_tool_call_scenario(bridge_session: BridgeSession, mock_tool_host: Any) -> None:
    mock_tool_host.call_tool.return_value = ToolResult(content="a.txt, b.txt")
    service = ScriptedModelService(
        [
            response(tool_use("list_files", {})),
            response(text("Found: a.txt, b.txt")),
        ]
    )

    result = await QueryOrchestrator(service).process_query(bridge_session, "list files")

    assert result == "[Calling tool list_files with args {}]\nFound: a.txt, b.txt"
    mock_tool_host.call_tool.assert_awaited_once_with("list_files", {})

    follow_up = service.calls[1]
    assert follow_up["tools"] is None
    assert [t.model_dump() for t in follow_up["conversation"]] == [
        {"role": "user", "content": "list files"},
        {"role": "user", "content": "a.txt, b.txt"},
    ]


@pytest.mark.asyncio
async def test_preceding_text_is_kept_before_trace_line(bridge_session: BridgeSession) -> None:
    service = ScriptedModelService(
        [
            response(text("Let me read it."), tool_use("read_file", {"path": "a.txt"})),
            response(text("The file says hello.")),
        ]
    )

    result = await QueryOrchestrator(service).process_query(bridge_session, "read a.txt")

    assert result.split("\n") == [
        "Let me read it.",
        '[Calling tool read_file with args {"path":"a.txt"}]',
        "The file says hello.",
    ]


@pytest.mark.asyncio
async def test_interleaved_tool_calls_run_in_order(bridge_session: BridgeSession, mock_tool_host: Any) -> None:
    events: list[str] = []

    async def call_tool(name: str, args: dict[str, Any]) -> ToolResult:
        events.append(f"tool:{name}")
        return ToolResult(content=f"result of {name}")

    mock_tool_host.call_tool = AsyncMock(side_effect=call_tool)

    class RecordingService(ScriptedModelService):
        async def _create_message_impl(self, conversation, tools):  # type: ignore[no-untyped-def]
            events.append("model")
            return await super()._create_message_impl(conversation, tools)

    service = RecordingService(
        [
            response(
                tool_use("list_files", {}, "t1"),
                text("between"),
                tool_use("read_file", {"path": "b.txt"}, "t2"),
            ),
            response(text("listed")),
            response(text("read")),
        ]
    )

    result = await QueryOrchestrator(service).process_query(bridge_session, "do both")

    assert events == ["model", "tool:list_files", "model", "tool:read_file", "model"]
    assert mock_tool_host.call_tool.await_count == 2
    assert result.split("\n") == [
        "[Calling tool list_files with args {}]",
        "listed",
        "between",
        '[Calling tool read_file with args {"path":"b.txt"}]',
        "read",
    ]
    # The second follow-up sees both tool results.
    assert [t.content for t in service.calls[2]["conversation"]] == [
        "do both",
        "result of list_files",
        "result of read_file",
    ]


@pytest.mark.asyncio
async def test_follow_up_tool_request_is_not_expanded(bridge_session: BridgeSession, mock_tool_host: Any) -> None:
    service = ScriptedModelService(
        [
            response(tool_use("list_files", {})),
            response(tool_use("read_file", {"path": "a.txt"}), text("ignored")),
        ]
    )

    result = await QueryOrchestrator(service).process_query(bridge_session, "list files")

    assert result == "[Calling tool list_files with args {}]\n"
    assert mock_tool_host.call_tool.await_count == 1
    assert len(service.calls) == 2


@pytest.mark.asyncio
async def test_empty_follow_up_appends_empty_line(bridge_session: BridgeSession) -> None:
    service = ScriptedModelService([response(tool_use("list_files", {})), response()])

    result = await QueryOrchestrator(service).process_query(bridge_session, "list files")

    assert result == "[Calling tool list_files with args {}]\n"


@pytest.mark.asyncio
async def test_tool_failure_aborts_query(bridge_session: BridgeSession, mock_tool_host: Any) -> None:
    mock_tool_host.call_tool.side_effect = ToolHostError("boom", tool_name="list_files")
    service = ScriptedModelService([response(text("Checking."), tool_use("list_files", {}))])

    with pytest.raises(ToolHostError, match="boom"):
        await QueryOrchestrator(service).process_query(bridge_session, "list files")

    assert len(service.calls) == 1


@pytest.mark.asyncio
async def test_initial_model_failure_propagates(bridge_session: BridgeSession) -> None:
    service = ScriptedModelService([RuntimeError("network down")])

    with pytest.raises(ModelServiceError, match="network down"):
        await QueryOrchestrator(service).process_query(bridge_session, "hi")


@pytest.mark.asyncio
async def test_follow_up_model_failure_propagates(bridge_session: BridgeSession, mock_tool_host: Any) -> None:
    service = ScriptedModelService([response(tool_use("list_files", {})), ModelServiceError("overloaded")])

    with pytest.raises(ModelServiceError, match="overloaded"):
        await QueryOrchestrator(service).process_query(bridge_session, "list files")

    mock_tool_host.call_tool.assert_awaited_once()


@pytest.mark.asyncio
async def test_queries_do_not_share_conversation(bridge_session: BridgeSession) -> None:
    service = ScriptedModelService([response(text("one")), response(text("two"))])
    orchestrator = QueryOrchestrator(service)

    await orchestrator.process_query(bridge_session, "first")
    await orchestrator.process_query(bridge_session, "second")

    assert [t.content for t in service.calls[1]["conversation"]] == ["second"]


def test_format_tool_call_keeps_key_order_and_is_compact() -> None:
    args = {"z": 1, "a": [1, 2], "nested": {"k": None, "b": True}}

    assert format_tool_call("t", args) == '[Calling tool t with args {"z":1,"a":[1,2],"nested":{"k":null,"b":true}}]'


def test_format_tool_call_keeps_unicode() -> None:
    assert format_tool_call("greet", {"name": "Zoë"}) == '[Calling tool greet with args {"name":"Zoë"}]'


@pytest.mark.asyncio
async def test_tool_reported_error_is_fed_to_follow_up(bridge_session: BridgeSession, mock_tool_host: Any) -> None:
    mock_tool_host.call_tool.return_value = ToolResult(content="no such file", is_error=True)
    service = ScriptedModelService(
        [
            response(tool_use("read_file", {"path": "x"})),
            response(text("File missing.")),
        ]
    )

    result = await QueryOrchestrator(service).process_query(bridge_session, "read x")

    assert result == '[Calling tool read_file with args {"path":"x"}]\nFile missing.'
    assert [t.content for t in service.calls[1]["conversation"]] == ["read x", "no such file"]
