# src/llm/adapters/google_adapter.py — v2
"""Google Gemini adapter implementing BaseSummarizationModel.

Calls the generateContent REST endpoint directly with httpx. The API key
travels as the ``key`` query parameter and is held only by this instance.
"""

from __future__ import annotations

import logging
import time
from typing import Any, cast

import httpx

from mcpsummarizer.llm.base_client import BaseSummarizationModel
from mcpsummarizer.llm.errors import (
    MalformedResponseError,
    TransportError,
    UpstreamError,
    extract_error_message,
)
from mcpsummarizer.llm.models import ModelConfig, PartsPrompt, SummarizationOptions
from mcpsummarizer.llm.prompts import construct_prompt

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GoogleAdapter(BaseSummarizationModel):
    """Google Gemini adapter."""

    default_model = "gemini-1.5-flash"

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__()
        self._transport = transport

    @property
    def provider_name(self) -> str:
        return "Gemini"

    def endpoint(self, config: ModelConfig) -> str:
        base = (config.base_url or DEFAULT_BASE_URL).rstrip("/")
        return f"{base}/{config.model}:generateContent"

    async def _summarize(
        self,
        config: ModelConfig,
        content: str,
        content_type: str,
        options: SummarizationOptions | None,
    ) -> str:
        prompt = cast(PartsPrompt, construct_prompt("gemini", content, content_type, options))

        body: dict[str, Any] = {
            "contents": [m.model_dump() for m in prompt.messages],
            "generationConfig": {"maxOutputTokens": config.max_tokens},
        }

        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
                resp = await client.post(
                    self.endpoint(config),
                    params={"key": config.api_key},
                    json=body,
                )
        except httpx.RequestError as e:
            raise TransportError(self.provider_name, str(e) or type(e).__name__) from e
        latency = int((time.monotonic() - t0) * 1000)

        if resp.is_error:
            raise UpstreamError(
                self.provider_name,
                resp.status_code,
                extract_error_message(_json_or_none(resp), resp.status_code),
            )

        data = _json_or_none(resp)
        text = self._extract_content(data)
        logger.debug(
            "Gemini summary: model=%s, chars_in=%d, chars_out=%d, latency_ms=%d",
            config.model, len(content), len(text), latency,
        )
        return text

    def _extract_content(self, data: Any) -> str:
        """Return candidates[0].content.parts[0].text."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError(self.provider_name) from e
        if not isinstance(text, str):
            raise MalformedResponseError(self.provider_name)
        return text


def _json_or_none(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None
