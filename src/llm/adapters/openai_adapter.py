# src/llm/adapters/openai_adapter.py — v2
"""OpenAI-compatible chat-completions adapter implementing BaseSummarizationModel.

Uses the official openai SDK against ``{base_url}/chat/completions``. The
base URL defaults to the public OpenAI endpoint and can point at any
compatible host. SDK retries are disabled.
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
from mcpsummarizer.llm.models import ChatPrompt, ModelConfig, SummarizationOptions
from mcpsummarizer.llm.prompts import construct_prompt

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAICompatibleAdapter(BaseSummarizationModel):
    """Chat-completions adapter for OpenAI and compatible hosts."""

    default_model = "gpt-4o-mini"

    def __init__(self, base_url: str | None = None, **kwargs: Any) -> None:
        super().__init__()
        self._base_url_override = base_url
        self._client: Any = None

    @property
    def provider_name(self) -> str:
        return "OpenAI"

    @property
    def base_url(self) -> str:
        """Constructor override, then ModelConfig.base_url, then default."""
        if self._base_url_override:
            return self._base_url_override
        if self._config is not None and self._config.base_url:
            return self._config.base_url
        return DEFAULT_BASE_URL

    async def _summarize(
        self,
        config: ModelConfig,
        content: str,
        content_type: str,
        options: SummarizationOptions | None,
    ) -> str:
        import openai

        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=config.api_key, base_url=self.base_url, max_retries=0,
            )

        prompt = cast(ChatPrompt, construct_prompt("openai", content, content_type, options))

        kwargs: dict[str, Any] = {
            "model": config.model,
            "messages": [m.model_dump() for m in prompt.messages],
            "max_tokens": config.max_tokens,
        }

        t0 = time.monotonic()
        try:
            resp = await self._client.chat.completions.create(**kwargs)
        except openai.APIStatusError as e:
            raise UpstreamError(
                self.provider_name,
                e.status_code,
                extract_error_message(e.body, e.status_code),
            ) from e
        except openai.APIConnectionError as e:
            raise TransportError(self.provider_name, str(e)) from e
        latency = int((time.monotonic() - t0) * 1000)

        choices = getattr(resp, "choices", None)
        if not choices:
            raise MalformedResponseError(
                self.provider_name, "No summary was returned from the API",
            )
        message = getattr(choices[0], "message", None)
        text = getattr(message, "content", None)
        if not isinstance(text, str):
            raise MalformedResponseError(self.provider_name)

        logger.debug(
            "OpenAI-compatible summary: base_url=%s, model=%s, latency_ms=%d",
            self.base_url, config.model, latency,
        )
        return text

    async def _on_initialize(self, config: ModelConfig) -> None:
        await self._on_cleanup()

    async def _on_cleanup(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None


class OpenAIAdapter(OpenAICompatibleAdapter):
    """Public OpenAI endpoint; ModelConfig.base_url is ignored."""

    @property
    def base_url(self) -> str:
        return self._base_url_override or DEFAULT_BASE_URL
