# tests/unit/llm/adapters/test_google_adapter.py — v1
"""Tests for llm/adapters/google_adapter.py (httpx.MockTransport)."""

from __future__ import annotations

import json

import httpx
import pytest

from mcpsummarizer.llm.adapters.google_adapter import GoogleAdapter
from mcpsummarizer.llm.errors import (
    MalformedResponseError,
    TransportError,
    UpstreamError,
)
from mcpsummarizer.llm.models import ModelConfig, SummarizationOptions


def _ok(text: str = "A summary") -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class Recorder:
    """MockTransport handler that records requests and replays a response."""

    def __init__(self, response: httpx.Response | Exception) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


async def _adapter(recorder: Recorder, **config) -> GoogleAdapter:
    adapter = GoogleAdapter(transport=httpx.MockTransport(recorder))
    await adapter.initialize(ModelConfig(api_key="g-key", **config))
    return adapter


class TestGoogleAdapter:
    @pytest.mark.asyncio
    async def test_request_shape(self):
        rec = Recorder(httpx.Response(200, json=_ok()))
        adapter = await _adapter(rec, max_tokens=64)
        text = await adapter.summarize(
            "raw", "text", SummarizationOptions(output_format="markdown"),
        )
        assert text == "A summary"

        request = rec.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"
        assert request.url.params["key"] == "g-key"
        assert "authorization" not in request.headers

        body = json.loads(request.content)
        assert body["generationConfig"] == {"maxOutputTokens": 64}
        assert body["contents"][0]["role"] == "user"
        part = body["contents"][0]["parts"][0]["text"]
        assert "Markdown" in part
        assert part.endswith("\n\nraw")

    @pytest.mark.asyncio
    async def test_explicit_model(self):
        rec = Recorder(httpx.Response(200, json=_ok()))
        adapter = await _adapter(rec, model="gemini-2.0-pro")
        await adapter.summarize("raw", "text")
        assert rec.requests[0].url.path.endswith("/gemini-2.0-pro:generateContent")

    @pytest.mark.asyncio
    async def test_upstream_error_envelope(self):
        rec = Recorder(httpx.Response(
            400, json={"error": {"code": 400, "message": "API key not valid", "status": "INVALID_ARGUMENT"}},
        ))
        adapter = await _adapter(rec)
        with pytest.raises(UpstreamError) as exc_info:
            await adapter.summarize("raw", "text")
        assert exc_info.value.status_code == 400
        assert str(exc_info.value) == "Gemini summarization failed: API key not valid"

    @pytest.mark.asyncio
    async def test_upstream_error_non_json(self):
        rec = Recorder(httpx.Response(500, text="<html>oops</html>"))
        adapter = await _adapter(rec)
        with pytest.raises(UpstreamError, match="HTTP error 500"):
            await adapter.summarize("raw", "text")

    @pytest.mark.asyncio
    async def test_transport_error(self):
        rec = Recorder(httpx.ConnectError("connection refused"))
        adapter = await _adapter(rec)
        with pytest.raises(TransportError, match="Network error: connection refused"):
            await adapter.summarize("raw", "text")
        assert len(rec.requests) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
        ],
    )
    async def test_malformed_response(self, payload):
        rec = Recorder(httpx.Response(200, json=payload))
        adapter = await _adapter(rec)
        with pytest.raises(MalformedResponseError, match="Unexpected response format from Gemini"):
            await adapter.summarize("raw", "text")
