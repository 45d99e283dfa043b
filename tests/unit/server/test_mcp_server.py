# tests/unit/server/test_mcp_server.py — v1
"""Tests for server/mcp_server.py: tool registration and error surfacing."""

from __future__ import annotations

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from mcpsummarizer.server.handlers import ToolHandlers
from mcpsummarizer.server.mcp_server import SERVER_NAME, create_server

TOOL_NAMES = {
    "summarize_command",
    "summarize_files",
    "summarize_directory",
    "summarize_text",
    "get_full_content",
}


@pytest.fixture
def server(service, tmp_path):
    return create_server(ToolHandlers(service, working_dir=str(tmp_path)))


def _text(result) -> str:
    # call_tool returns either a content list or (content, structured)
    if isinstance(result, tuple):
        result = result[0]
    return result[0].text


class TestRegistration:
    def test_server_name(self, server):
        assert server.name == SERVER_NAME

    @pytest.mark.asyncio
    async def test_all_tools_listed(self, server):
        tools = await server.list_tools()
        assert {t.name for t in tools} == TOOL_NAMES

    @pytest.mark.asyncio
    async def test_hint_and_format_are_enumerated(self, server):
        tools = {t.name: t for t in await server.list_tools()}
        schema = tools["summarize_text"].inputSchema
        assert set(schema["required"]) == {"content", "type"}
        dumped = str(schema)
        assert "security_analysis" in dumped
        assert "outline" in dumped


class TestCallTool:
    @pytest.mark.asyncio
    async def test_summarize_text_short(self, server):
        result = await server.call_tool(
            "summarize_text", {"content": "short", "type": "log output"},
        )
        assert _text(result) == "short"

    @pytest.mark.asyncio
    async def test_summarize_then_retrieve(self, server):
        result = await server.call_tool(
            "summarize_text",
            {"content": "Z" * 300, "type": "API response", "hint": "api_surface"},
        )
        text = _text(result)
        assert text.startswith("Summary (full content ID: ")
        content_id = text.splitlines()[0][len("Summary (full content ID: "):-2]

        full = await server.call_tool("get_full_content", {"id": content_id})
        assert _text(full) == "Z" * 300

    @pytest.mark.asyncio
    async def test_unknown_id_is_tool_error(self, server):
        with pytest.raises(ToolError) as exc_info:
            await server.call_tool("get_full_content", {"id": "nope"})
        assert str(exc_info.value) == (
            "Error executing tool get_full_content: Content not found or expired"
        )

    @pytest.mark.asyncio
    async def test_invalid_hint_rejected(self, server, mock_model):
        with pytest.raises(ToolError):
            await server.call_tool(
                "summarize_text", {"content": "Z" * 300, "type": "t", "hint": "astrology"},
            )
        assert mock_model.calls == []

    @pytest.mark.asyncio
    async def test_handler_error_prefixed_once_with_tool(self, server):
        with pytest.raises(ToolError) as exc_info:
            await server.call_tool(
                "summarize_files", {"paths": ["missing.py"], "cwd": "/nonexistent-dir"},
            )
        assert str(exc_info.value) == (
            "Error executing tool summarize_files: "
            "Path not found: missing.py (resolved to /nonexistent-dir/missing.py)"
        )
