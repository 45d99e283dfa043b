# src/llm/models.py — v2
"""LLM-specific types: ModelConfig, SummarizationOptions and prompt payloads.

Prompt payloads form a closed set tagged by ``format``:
  - ``SinglePrompt``  one flattened instruction+content string (anthropic)
  - ``ChatPrompt``    system + user role messages (openai)
  - ``PartsPrompt``   role-tagged turns with nested parts (gemini)
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field

PromptFormat = Literal["anthropic", "openai", "gemini"]

Hint = Literal[
    "security_analysis",
    "api_surface",
    "error_handling",
    "dependencies",
    "type_definitions",
]
OutputFormat = Literal["text", "json", "markdown", "outline"]


class ModelConfig(BaseModel):
    """Credentials and tuning for one upstream provider.

    Values are checked by the adapter's ``initialize``, not here, so an
    invalid config can be constructed and rejected at initialization.
    """

    api_key: str = ""
    model: str | None = None
    max_tokens: int | None = None
    base_url: str | None = None


class SummarizationOptions(BaseModel):
    """Optional request modifiers.

    Values outside the known enumerations are accepted and simply add no
    instruction to the prompt.
    """

    hint: str | None = None
    output_format: str | None = None


class ChatMessage(BaseModel):
    """Single chat-completion message."""

    role: Literal["system", "user", "assistant"]
    content: str


class TextPart(BaseModel):
    text: str


class PartsMessage(BaseModel):
    """Gemini-style turn with nested parts."""

    role: Literal["user", "model"]
    parts: list[TextPart]


class SinglePrompt(BaseModel):
    format: Literal["anthropic"] = "anthropic"
    prompt: str


class ChatPrompt(BaseModel):
    format: Literal["openai"] = "openai"
    messages: list[ChatMessage]


class PartsPrompt(BaseModel):
    format: Literal["gemini"] = "gemini"
    messages: list[PartsMessage]


ModelPrompt = Union[SinglePrompt, ChatPrompt, PartsPrompt]


class SummarizationResult(BaseModel):
    """Uniform result of SummarizationService.maybe_summarize.

    ``id`` is set iff ``is_summarized`` is True.
    """

    text: str
    is_summarized: bool = False
    id: str | None = Field(default=None)
