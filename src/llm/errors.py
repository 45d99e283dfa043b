# src/llm/errors.py — v1
"""Typed summarization failures.

Every message names the provider and the failing stage (network, upstream,
parsing) so operators can tell them apart in logs and tool errors.
"""

from __future__ import annotations


class SummarizationError(Exception):
    """Base class for a failed summarize call."""

    def __init__(self, provider: str, detail: str) -> None:
        self.provider = provider
        self.detail = detail
        super().__init__(f"{provider} summarization failed: {detail}")


class ModelNotInitializedError(SummarizationError):
    """summarize() called before initialize() or after cleanup()."""

    def __init__(self, provider: str) -> None:
        super().__init__(provider, f"{provider} model not initialized")


class TransportError(SummarizationError):
    """No response was received from the provider."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(provider, f"Network error: {reason}")


class UpstreamError(SummarizationError):
    """The provider answered with a non-success status."""

    def __init__(self, provider: str, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(provider, message)


class MalformedResponseError(SummarizationError):
    """The provider answered successfully but without a usable summary."""

    def __init__(self, provider: str, reason: str | None = None) -> None:
        detail = reason or f"Unexpected response format from {provider}"
        super().__init__(provider, detail)


def extract_error_message(body: object, status_code: int) -> str:
    """Pull ``error.message`` out of a provider error envelope.

    Accepts both the full envelope (``{"error": {"message": ...}}``) and an
    already-unwrapped error object (``{"message": ...}``). Falls back to a
    generic status-coded message.
    """
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message:
                return message
        elif isinstance(error, str) and error:
            return error
    return f"HTTP error {status_code}"
