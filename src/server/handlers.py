# src/server/handlers.py — v1
"""Tool handlers: gather raw content, funnel it through SummarizationService.

Handlers own all side-effecting I/O (shell commands, file reads, directory
walks) and the rendering of results. Argument shapes are already validated
by the MCP tool schemas before a handler is called.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from mcpsummarizer.llm.models import SummarizationOptions, SummarizationResult
from mcpsummarizer.server.listing import DirectoryLister
from mcpsummarizer.services.summarization import SummarizationService

logger = logging.getLogger(__name__)


class ToolInputError(Exception):
    """A tool argument refers to something that cannot be used."""


class PathNotFoundError(ToolInputError):
    def __init__(self, requested: str, resolved: Path) -> None:
        self.requested = requested
        self.resolved = resolved
        super().__init__(f"Path not found: {requested} (resolved to {resolved})")


class CommandFailedError(ToolInputError):
    def __init__(self, command: str, returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed with exit code {returncode}: {command}"
        if stderr:
            message += f"\n{stderr}"
        super().__init__(message)


class ContentNotFoundError(LookupError):
    """No content for the id: never issued, expired or already evicted."""

    def __init__(self, content_id: str) -> None:
        self.content_id = content_id
        super().__init__("Content not found or expired")


def render_result(result: SummarizationResult) -> str:
    """Summaries carry their retrieval id; verbatim content is returned as-is."""
    if result.is_summarized:
        return f"Summary (full content ID: {result.id}):\n{result.text}"
    return result.text


def resolve_path(requested: str, cwd: str) -> Path:
    """Resolve ``requested`` relative to ``cwd``, even if it looks absolute.

    Raises:
        PathNotFoundError: If the resolved path does not exist.
    """
    resolved = Path(os.path.normpath(os.path.join(cwd, requested.lstrip("/"))))
    if not resolved.exists():
        raise PathNotFoundError(requested, resolved)
    return resolved


class ToolHandlers:
    """One handler per MCP tool."""

    def __init__(
        self,
        service: SummarizationService,
        working_dir: str = "/",
        lister: DirectoryLister | None = None,
        force_directory_summary: bool = False,
    ) -> None:
        self._service = service
        self._working_dir = working_dir
        self._lister = lister or DirectoryLister()
        self._force_directory_summary = force_directory_summary

    @property
    def working_dir(self) -> str:
        return self._working_dir

    async def summarize_command(
        self,
        command: str,
        cwd: str | None = None,
        options: SummarizationOptions | None = None,
    ) -> str:
        """Run a shell command and summarize stdout (+ stderr)."""
        run_dir = cwd or self._working_dir
        logger.info("Executing command in %s: %s", run_dir, command)
        proc = await asyncio.create_subprocess_shell(
            command,
            cwd=run_dir,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        raw_out, raw_err = await proc.communicate()
        stdout = raw_out.decode("utf-8", errors="replace").removesuffix("\n")
        stderr = raw_err.decode("utf-8", errors="replace").removesuffix("\n")

        if proc.returncode != 0:
            raise CommandFailedError(command, proc.returncode or -1, stderr)

        output = stdout + (f"\nError: {stderr}" if stderr else "")
        result = await self._service.maybe_summarize(output, "command output", options)
        return render_result(result)

    async def summarize_files(
        self,
        paths: list[str],
        cwd: str | None = None,
        options: SummarizationOptions | None = None,
    ) -> str:
        """Summarize each file concurrently; any failure fails the call."""
        base = cwd or self._working_dir

        async def one(file_path: str) -> str:
            resolved = resolve_path(file_path, base)
            content = await asyncio.to_thread(resolved.read_text, encoding="utf-8")
            result = await self._service.maybe_summarize(
                content, f"code from {Path(file_path).name}", options,
            )
            return f"{file_path}:\n{render_result(result)}\n"

        sections = await asyncio.gather(*(one(p) for p in paths))
        return "\n".join(sections)

    async def summarize_directory(
        self,
        path: str,
        cwd: str | None = None,
        recursive: bool = False,
        options: SummarizationOptions | None = None,
    ) -> str:
        """Summarize a bounded directory listing."""
        resolved = resolve_path(path, cwd or self._working_dir)
        listing = await asyncio.to_thread(self._lister.list, resolved, recursive)
        result = await self._service.maybe_summarize(
            listing,
            "directory listing",
            options,
            force=self._force_directory_summary,
        )
        return render_result(result)

    async def summarize_text(
        self,
        content: str,
        content_type: str,
        options: SummarizationOptions | None = None,
    ) -> str:
        result = await self._service.maybe_summarize(content, content_type, options)
        return render_result(result)

    def get_full_content(self, content_id: str) -> str:
        """Raises ContentNotFoundError when the cache reports absence."""
        content = self._service.get_full_content(content_id)
        if content is None:
            raise ContentNotFoundError(content_id)
        return content
