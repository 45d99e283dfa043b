# src/main.py — v2
"""CLI entry point: serve, summarize commands.

Usage:
    mcpsummarizer [serve]
    mcpsummarizer summarize <file|-> [--type TYPE] [--hint HINT] [--format FMT]

Configuration comes from environment variables / .env (see Settings).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from mcpsummarizer.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        args.func = _cmd_serve

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="mcpsummarizer",
        description=f"mcpsummarizer v{__version__}: summarizing MCP server",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- serve ---
    p_serve = subparsers.add_parser(
        "serve", help="Run the MCP server on stdio (default)",
    )
    p_serve.set_defaults(func=_cmd_serve)

    # --- summarize ---
    p_sum = subparsers.add_parser(
        "summarize", help="Summarize a file (or stdin) once and exit",
    )
    p_sum.add_argument("source", help="File to summarize, or '-' for stdin")
    p_sum.add_argument(
        "-t", "--type", dest="content_type", default="text",
        help="Content type label used in the prompt (default: text)",
    )
    p_sum.add_argument("--hint", default=None, help="Focus hint")
    p_sum.add_argument(
        "--format", dest="output_format", default="text",
        help="Output format: text, json, markdown, outline (default: text)",
    )
    p_sum.set_defaults(func=_cmd_summarize)

    return parser


def _bootstrap(verbose: bool):
    """Load settings, configure logging, build the (uninitialized) service."""
    from mcpsummarizer.config.settings import load_settings
    from mcpsummarizer.llm.client_factory import create_model
    from mcpsummarizer.logging.logger import setup_logging
    from mcpsummarizer.services.summarization import (
        SummarizationConfig,
        SummarizationService,
    )

    settings = load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )

    model = create_model(settings.llm_provider)
    service = SummarizationService(
        model,
        SummarizationConfig(
            model=settings.build_model_config(),
            char_threshold=settings.char_threshold,
            cache_max_age=settings.cache_max_age,
        ),
    )
    return settings, service


async def _cmd_serve(args: argparse.Namespace) -> int:
    """Run the stdio MCP server until the client disconnects."""
    from mcpsummarizer.server.handlers import ToolHandlers
    from mcpsummarizer.server.listing import DirectoryLister
    from mcpsummarizer.server.mcp_server import create_server

    settings, service = _bootstrap(args.verbose)
    if settings.mcp_working_dir == "/":
        logger.warning("MCP_WORKING_DIR not set, using root directory")
    logger.info("Working directory: %s", settings.mcp_working_dir)

    try:
        await service.initialize()
        handlers = ToolHandlers(
            service,
            working_dir=settings.mcp_working_dir,
            lister=DirectoryLister(
                max_depth=settings.directory_max_depth,
                max_files=settings.directory_max_files,
                max_files_per_dir=settings.directory_max_files_per_dir,
            ),
            force_directory_summary=settings.directory_force_summary,
        )
        server = create_server(handlers)
        logger.info(
            "Summarization MCP server running on stdio (provider=%s)",
            settings.llm_provider,
        )
        await server.run_stdio_async()
    finally:
        await service.cleanup()
    return 0


async def _cmd_summarize(args: argparse.Namespace) -> int:
    """Summarize one file or stdin and print the result."""
    from mcpsummarizer.llm.models import SummarizationOptions
    from mcpsummarizer.server.handlers import render_result

    if args.source == "-":
        content = sys.stdin.read()
    else:
        path = Path(args.source)
        if not path.is_file():
            logger.error("File not found: %s", path)
            return 1
        content = path.read_text(encoding="utf-8")

    _, service = _bootstrap(args.verbose)
    try:
        await service.initialize()
        result = await service.maybe_summarize(
            content,
            args.content_type,
            SummarizationOptions(hint=args.hint, output_format=args.output_format),
        )
    finally:
        await service.cleanup()

    print(render_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
