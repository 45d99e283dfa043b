# src/llm/adapters/anthropic_adapter.py — v3
"""Anthropic Claude adapter implementing BaseSummarizationModel.

Uses the official anthropic SDK (Messages API, ``/v1/messages``; the SDK
sends the ``anthropic-version`` header). SDK retries are disabled: one
attempt per summarize call.
"""

from __future__ import annotations

import logging
import time
from typing import Any, cast

from mcpsummarizer.llm.base_client import BaseSummarizationModel
from mcpsummarizer.llm.errors import (
    MalformedResponseError,
    TransportError,
    UpstreamError,
    extract_error_message,
)
from mcpsummarizer.llm.models import ModelConfig, SinglePrompt, SummarizationOptions
from mcpsummarizer.llm.prompts import construct_prompt

logger = logging.getLogger(__name__)


class AnthropicAdapter(BaseSummarizationModel):
    """Adapter for Anthropic Claude models."""

    default_model = "claude-3-5-sonnet-20241022"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__()
        self.__client = None  # Lazy initialization

    @property
    def provider_name(self) -> str:
        return "Anthropic"

    @property
    def _client(self):
        """Lazy-init Anthropic client (only on first API call)."""
        if self.__client is None:
            try:
                import anthropic
            except ImportError as e:
                raise ImportError(
                    "anthropic package required: pip install anthropic"
                ) from e
            config = cast(ModelConfig, self._config)
            self.__client = anthropic.AsyncAnthropic(
                api_key=config.api_key,
                base_url=config.base_url,
                max_retries=0,
            )
        return self.__client

    async def _summarize(
        self,
        config: ModelConfig,
        content: str,
        content_type: str,
        options: SummarizationOptions | None,
    ) -> str:
        """Single-prompt completion via the Messages API."""
        import anthropic

        prompt = cast(
            SinglePrompt, construct_prompt("anthropic", content, content_type, options),
        )

        kwargs: dict[str, Any] = {
            "model": config.model,
            "max_tokens": config.max_tokens,
            "messages": [{"role": "user", "content": prompt.prompt}],
        }

        start = time.monotonic()
        try:
            response = await self._client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            raise UpstreamError(
                self.provider_name,
                e.status_code,
                extract_error_message(e.body, e.status_code),
            ) from e
        except anthropic.APIConnectionError as e:
            raise TransportError(self.provider_name, str(e)) from e
        latency_ms = int((time.monotonic() - start) * 1000)

        text = self._extract_content(response)
        logger.debug(
            "Anthropic summary: model=%s, chars_in=%d, chars_out=%d, latency_ms=%d",
            config.model, len(content), len(text), latency_ms,
        )
        return text

    async def _on_initialize(self, config: ModelConfig) -> None:
        await self._on_cleanup()

    async def _on_cleanup(self) -> None:
        if self.__client is not None:
            await self.__client.close()
            self.__client = None

    # --- Internal helpers ---

    def _extract_content(self, response: Any) -> str:
        """Return content[0].text, requiring a non-empty text block."""
        blocks = getattr(response, "content", None)
        if not blocks:
            raise MalformedResponseError(self.provider_name)
        first = blocks[0]
        text = getattr(first, "text", None)
        if getattr(first, "type", None) != "text" or not isinstance(text, str) or not text:
            raise MalformedResponseError(self.provider_name)
        return text
