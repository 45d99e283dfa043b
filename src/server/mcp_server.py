# src/server/mcp_server.py — v1
"""MCP server exposing the summarization tools over stdio.

Tool argument schemas come from the typed signatures below, so malformed
arguments (wrong types, unknown hint / output_format values) are rejected
by the MCP layer before any handler runs.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, TypeVar

from mcp.server.fastmcp import FastMCP

from mcpsummarizer.llm.models import Hint, OutputFormat, SummarizationOptions
from mcpsummarizer.logging.context import clear_context, set_tool_context
from mcpsummarizer.server.handlers import ToolHandlers

logger = logging.getLogger(__name__)

SERVER_NAME = "summarization-functions"

T = TypeVar("T")


async def _invoke(tool: str, call: Callable[[], Awaitable[T]]) -> T:
    """Run one tool call with log context.

    Failures propagate unchanged; FastMCP reports them to the client as
    "Error executing tool <tool>: <message>".
    """
    set_tool_context(tool)
    try:
        return await call()
    except Exception as e:
        logger.warning("Tool %s failed: %s", tool, e)
        raise
    finally:
        clear_context()


def _options(hint: str | None, output_format: str | None) -> SummarizationOptions:
    return SummarizationOptions(hint=hint, output_format=output_format)


def register_tools(mcp: FastMCP, handlers: ToolHandlers) -> None:
    """Register the five summarization tools with the MCP server."""

    @mcp.tool()
    async def summarize_command(
        command: str,
        cwd: str | None = None,
        hint: Hint | None = None,
        output_format: OutputFormat = "text",
    ) -> str:
        """Execute a command and summarize its output if it exceeds the threshold.

        Args:
            command: Command to execute.
            cwd: Working directory for command execution.
            hint: Focus area for summarization.
            output_format: Desired output format.
        """
        return await _invoke(
            "summarize_command",
            lambda: handlers.summarize_command(
                command, cwd, _options(hint, output_format),
            ),
        )

    @mcp.tool()
    async def summarize_files(
        paths: list[str],
        cwd: str,
        hint: Hint | None = None,
        output_format: OutputFormat = "text",
    ) -> str:
        """Summarize the contents of one or more files.

        Args:
            paths: File paths to summarize (relative to cwd).
            cwd: Working directory for resolving file paths.
            hint: Focus area for summarization.
            output_format: Desired output format.
        """
        return await _invoke(
            "summarize_files",
            lambda: handlers.summarize_files(paths, cwd, _options(hint, output_format)),
        )

    @mcp.tool()
    async def summarize_directory(
        path: str,
        cwd: str,
        recursive: bool = False,
        hint: Hint | None = None,
        output_format: OutputFormat = "text",
    ) -> str:
        """Summarize the structure of a directory.

        Args:
            path: Directory path to summarize (relative to cwd).
            cwd: Working directory for resolving the directory path.
            recursive: Whether to include subdirectories.
            hint: Focus area for summarization.
            output_format: Desired output format.
        """
        return await _invoke(
            "summarize_directory",
            lambda: handlers.summarize_directory(
                path, cwd, recursive, _options(hint, output_format),
            ),
        )

    @mcp.tool()
    async def summarize_text(
        content: str,
        type: str,
        hint: Hint | None = None,
        output_format: OutputFormat = "text",
    ) -> str:
        """Summarize any text content (e.g. another tool's output).

        Args:
            content: Text content to summarize.
            type: Type of content (e.g. "log output", "API response").
            hint: Focus area for summarization.
            output_format: Desired output format.
        """
        return await _invoke(
            "summarize_text",
            lambda: handlers.summarize_text(content, type, _options(hint, output_format)),
        )

    @mcp.tool()
    async def get_full_content(id: str) -> str:
        """Retrieve the full content for a given summary ID.

        Args:
            id: ID of the stored content.
        """

        async def lookup() -> str:
            return handlers.get_full_content(id)

        return await _invoke("get_full_content", lookup)


def create_server(handlers: ToolHandlers, **settings: Any) -> FastMCP:
    """Build the FastMCP server with every tool registered."""
    mcp = FastMCP(SERVER_NAME, **settings)
    register_tools(mcp, handlers)
    logger.debug("Registered summarization tools on %s", SERVER_NAME)
    return mcp
