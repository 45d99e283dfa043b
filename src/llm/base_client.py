# src/llm/base_client.py — v2
"""Abstract summarization model interface.

Lifecycle: UNINITIALIZED -> READY -> CLOSED. ``initialize`` validates and
stores the configuration (re-initializing while READY replaces it),
``summarize`` is only valid while READY, ``cleanup`` discards configuration.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod

from mcpsummarizer.config.settings import ConfigurationError
from mcpsummarizer.llm.errors import ModelNotInitializedError
from mcpsummarizer.llm.models import ModelConfig, SummarizationOptions

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 1024


class ModelState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


class BaseSummarizationModel(ABC):
    """Unified interface for all summarization providers."""

    #: Model used when ModelConfig.model is not set.
    default_model: str = ""

    def __init__(self) -> None:
        self._config: ModelConfig | None = None
        self._state = ModelState.UNINITIALIZED

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Human-readable provider name used in error messages."""

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def config(self) -> ModelConfig | None:
        """Resolved configuration, None unless READY."""
        return self._config

    async def initialize(self, config: ModelConfig) -> None:
        """Validate config, resolve defaults and transition to READY.

        Raises:
            ConfigurationError: On a missing API key, a blank model name or
                a non-positive max_tokens.
        """
        if not config.api_key:
            raise ConfigurationError(
                f"API key is required for {self.provider_name} model"
            )

        model = config.model or self.default_model
        if not isinstance(model, str) or not model.strip():
            raise ConfigurationError("Invalid model name")

        max_tokens = DEFAULT_MAX_TOKENS if config.max_tokens is None else config.max_tokens
        if isinstance(max_tokens, bool) or not isinstance(max_tokens, int) or max_tokens <= 0:
            raise ConfigurationError("Invalid max tokens value")

        self._config = config.model_copy(
            update={"model": model, "max_tokens": max_tokens}
        )
        await self._on_initialize(self._config)
        self._state = ModelState.READY
        logger.info(
            "Initialized %s model: model=%s, max_tokens=%d",
            self.provider_name, model, max_tokens,
        )

    async def summarize(
        self,
        content: str,
        content_type: str,
        options: SummarizationOptions | None = None,
    ) -> str:
        """Summarize content with exactly one upstream call.

        Raises:
            ModelNotInitializedError: If not READY.
            SummarizationError: Any transport, upstream or parsing failure.
        """
        if self._state is not ModelState.READY or self._config is None:
            raise ModelNotInitializedError(self.provider_name)
        return await self._summarize(self._config, content, content_type, options)

    async def cleanup(self) -> None:
        """Discard configuration and transition to CLOSED."""
        await self._on_cleanup()
        self._config = None
        self._state = ModelState.CLOSED

    # --- Provider hooks ---

    @abstractmethod
    async def _summarize(
        self,
        config: ModelConfig,
        content: str,
        content_type: str,
        options: SummarizationOptions | None,
    ) -> str:
        """Issue the provider call and extract the summary text."""

    async def _on_initialize(self, config: ModelConfig) -> None:
        """Hook for provider-specific setup (e.g. dropping a stale client)."""

    async def _on_cleanup(self) -> None:
        """Hook for releasing provider resources."""
