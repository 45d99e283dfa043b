# tests/unit/server/test_handlers.py — v1
"""Tests for server/handlers.py: I/O gathering and result rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from mcpsummarizer.llm.errors import SummarizationError
from mcpsummarizer.llm.models import SummarizationOptions, SummarizationResult
from mcpsummarizer.server.handlers import (
    CommandFailedError,
    ContentNotFoundError,
    PathNotFoundError,
    ToolHandlers,
    render_result,
    resolve_path,
)
from mcpsummarizer.server.listing import DirectoryLister


@pytest.fixture
def handlers(service, tmp_path):
    return ToolHandlers(service, working_dir=str(tmp_path))


def _id_from(rendered: str) -> str:
    header = rendered.splitlines()[0]
    assert header.startswith("Summary (full content ID: ")
    return header[len("Summary (full content ID: "):-2]


class TestRenderResult:
    def test_verbatim(self):
        assert render_result(SummarizationResult(text="raw")) == "raw"

    def test_summarized(self):
        result = SummarizationResult(text="short", id="abc", is_summarized=True)
        assert render_result(result) == "Summary (full content ID: abc):\nshort"


class TestResolvePath:
    def test_relative(self, tmp_path):
        (tmp_path / "a.txt").write_text("x")
        assert resolve_path("a.txt", str(tmp_path)) == tmp_path / "a.txt"

    def test_leading_slash_stays_under_cwd(self, tmp_path):
        (tmp_path / "a.txt").write_text("x")
        assert resolve_path("/a.txt", str(tmp_path)) == tmp_path / "a.txt"

    def test_missing(self, tmp_path):
        with pytest.raises(PathNotFoundError, match="Path not found: nope.txt"):
            resolve_path("nope.txt", str(tmp_path))


class TestSummarizeCommand:
    @pytest.mark.asyncio
    async def test_short_output_verbatim(self, handlers):
        out = await handlers.summarize_command("echo hello")
        assert out == "hello"

    @pytest.mark.asyncio
    async def test_stderr_appended(self, handlers):
        out = await handlers.summarize_command("echo out; echo warn 1>&2")
        assert out == "out\nError: warn"

    @pytest.mark.asyncio
    async def test_only_final_newline_stripped(self, handlers):
        out = await handlers.summarize_command("printf 'out\\n\\n'; printf 'warn\\n\\n' 1>&2")
        assert out == "out\n\nError: warn\n"

    @pytest.mark.asyncio
    async def test_runs_in_cwd(self, handlers, tmp_path):
        sub = tmp_path / "sub"
        sub.mkdir()
        out = await handlers.summarize_command("pwd", cwd=str(sub))
        assert Path(out).resolve() == sub.resolve()

    @pytest.mark.asyncio
    async def test_long_output_summarized(self, handlers, service, mock_model):
        out = await handlers.summarize_command(
            "printf 'x%.0s' $(seq 1 300)",
            options=SummarizationOptions(hint="error_handling"),
        )
        content_id = _id_from(out)
        assert service.get_full_content(content_id) == "x" * 300
        assert mock_model.calls[0][1] == "command output"

    @pytest.mark.asyncio
    async def test_non_zero_exit(self, handlers):
        with pytest.raises(CommandFailedError, match="exit code 3") as exc_info:
            await handlers.summarize_command("echo bad 1>&2; exit 3")
        assert exc_info.value.stderr == "bad"


class TestSummarizeFiles:
    @pytest.mark.asyncio
    async def test_mixed_sizes(self, handlers, tmp_path, service, mock_model):
        (tmp_path / "small.py").write_text("print('hi')")
        (tmp_path / "big.py").write_text("#" * 500)
        out = await handlers.summarize_files(["small.py", "big.py"], str(tmp_path))

        sections = out.split("\n\n")
        assert sections[0] == "small.py:\nprint('hi')"
        assert sections[1].startswith("big.py:\nSummary (full content ID: ")
        assert [c[1] for c in mock_model.calls] == ["code from big.py"]

        content_id = _id_from(sections[1].split("\n", 1)[1])
        assert service.get_full_content(content_id) == "#" * 500

    @pytest.mark.asyncio
    async def test_missing_file_fails_call(self, handlers, tmp_path):
        (tmp_path / "ok.py").write_text("x")
        with pytest.raises(PathNotFoundError):
            await handlers.summarize_files(["ok.py", "missing.py"], str(tmp_path))

    @pytest.mark.asyncio
    async def test_summarization_failure_propagates(self, handlers, tmp_path, mock_model):
        mock_model.fail_with = SummarizationError("Mock", "HTTP error 500")
        (tmp_path / "big.py").write_text("#" * 500)
        with pytest.raises(SummarizationError):
            await handlers.summarize_files(["big.py"], str(tmp_path))


class TestSummarizeDirectory:
    @pytest.mark.asyncio
    async def test_small_listing_verbatim_by_default(self, handlers, tmp_path, mock_model):
        (tmp_path / "proj").mkdir()
        (tmp_path / "proj" / "a.py").write_text("x")
        out = await handlers.summarize_directory("proj", str(tmp_path))
        assert out == "a.py\n"
        assert mock_model.calls == []

    @pytest.mark.asyncio
    async def test_forced_summary_policy(self, service, tmp_path, mock_model):
        (tmp_path / "proj").mkdir()
        (tmp_path / "proj" / "a.py").write_text("x")
        handlers = ToolHandlers(
            service,
            working_dir=str(tmp_path),
            lister=DirectoryLister(),
            force_directory_summary=True,
        )
        out = await handlers.summarize_directory("proj", str(tmp_path))
        assert service.get_full_content(_id_from(out)) == "a.py\n"
        assert mock_model.calls[0][1] == "directory listing"

    @pytest.mark.asyncio
    async def test_missing_directory(self, handlers, tmp_path):
        with pytest.raises(PathNotFoundError):
            await handlers.summarize_directory("nope", str(tmp_path))


class TestSummarizeTextAndRetrieval:
    @pytest.mark.asyncio
    async def test_text_round_trip(self, handlers):
        out = await handlers.summarize_text("L" * 150, "log output")
        assert handlers.get_full_content(_id_from(out)) == "L" * 150

    def test_unknown_id(self, handlers):
        with pytest.raises(ContentNotFoundError, match="Content not found or expired"):
            handlers.get_full_content("missing")
