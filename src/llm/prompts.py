# src/llm/prompts.py — v1
"""Prompt construction for summarization requests.

Pure functions: no state, no I/O. The same inputs always produce the same
payload. Unknown hints and output formats contribute no instruction.
"""

from __future__ import annotations

from mcpsummarizer.llm.models import (
    ChatMessage,
    ChatPrompt,
    ModelPrompt,
    PartsMessage,
    PartsPrompt,
    SinglePrompt,
    SummarizationOptions,
    TextPart,
)

HINT_INSTRUCTIONS: dict[str, str] = {
    "security_analysis": (
        "Focus on security-critical aspects including authentication, "
        "authorization, crypto operations, data validation, and error "
        "handling patterns."
    ),
    "api_surface": (
        "Focus on public API interfaces, documenting parameters/return types, "
        "noting deprecation warnings and potential breaking changes."
    ),
    "error_handling": (
        "Focus on error handling patterns, exception flows, and recovery "
        "mechanisms."
    ),
    "dependencies": (
        "Focus on import/export relationships, external dependencies, and "
        "potential circular dependencies."
    ),
    "type_definitions": (
        "Focus on type structures, relationships, and hierarchies."
    ),
}

FORMAT_INSTRUCTIONS: dict[str, str] = {
    "json": (
        'Provide the summary in JSON format with a "summary" field and a '
        '"metadata" object containing focus_areas, key_components, and '
        "relationships."
    ),
    "markdown": (
        "Format the summary in Markdown with clear sections, a table of "
        "contents, and preserved code blocks where relevant."
    ),
    "outline": (
        "Present the summary as a hierarchical outline with relationship "
        "indicators and importance markers."
    ),
}

SUMMARY_CUE = "Summary:"


def hint_instructions(hint: str | None) -> str:
    """Return the focus clause for a known hint, else ''."""
    if not hint:
        return ""
    return HINT_INSTRUCTIONS.get(hint, "")


def format_instructions(output_format: str | None) -> str:
    """Return the format clause for a known output format, else ''.

    ``text`` is the default presentation and adds nothing.
    """
    if not output_format or output_format == "text":
        return ""
    return FORMAT_INSTRUCTIONS.get(output_format, "")


def base_instructions(content_type: str) -> str:
    return (
        f"Summarize the following {content_type} in a clear, concise way that "
        "would be useful for an AI agent. Focus on the most important "
        "information and maintain technical accuracy."
    )


def build_instructions(
    content_type: str, options: SummarizationOptions | None = None,
) -> str:
    """Join base, hint and format clauses with blank lines."""
    opts = options or SummarizationOptions()
    clauses = [
        base_instructions(content_type),
        hint_instructions(opts.hint),
        format_instructions(opts.output_format),
    ]
    return "\n\n".join(c for c in clauses if c)


def _system_message(content_type: str, hint: str | None) -> str:
    system = f"You are a helpful assistant that summarizes {content_type} content."
    if hint:
        system += f" You specialize in {hint} analysis."
    return system


def construct_prompt(
    prompt_format: str,
    content: str,
    content_type: str,
    options: SummarizationOptions | None = None,
) -> ModelPrompt:
    """Build the provider-shaped prompt payload.

    Args:
        prompt_format: One of "anthropic", "openai", "gemini".
        content: Raw content to summarize (may be empty).
        content_type: Free-form label, e.g. "command output".
        options: Optional hint / output_format.

    Returns:
        SinglePrompt, ChatPrompt or PartsPrompt.

    Raises:
        ValueError: If prompt_format is not a known provider shape.
    """
    instructions = build_instructions(content_type, options)

    if prompt_format == "anthropic":
        return SinglePrompt(
            prompt=f"{instructions}\n\n{content}\n\n{SUMMARY_CUE}",
        )

    if prompt_format == "openai":
        # Unknown hints must leave the payload identical to the no-hint case.
        hint = options.hint if options and options.hint in HINT_INSTRUCTIONS else None
        return ChatPrompt(
            messages=[
                ChatMessage(role="system", content=_system_message(content_type, hint)),
                ChatMessage(role="user", content=f"{instructions}\n\n{content}"),
            ]
        )

    if prompt_format == "gemini":
        return PartsPrompt(
            messages=[
                PartsMessage(
                    role="user",
                    parts=[TextPart(text=f"{instructions}\n\n{content}")],
                )
            ]
        )

    raise ValueError(f"Unsupported prompt format: {prompt_format!r}")
