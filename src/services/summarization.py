# src/services/summarization.py — v1
"""Threshold-gated summarization with cache-backed retrieval.

The single policy point for every tool handler: content at or under the
character threshold is returned verbatim at zero cost; anything longer is
summarized by the model and the original is kept in the ContentCache under
a fresh id. A failed summarization leaves no cache entry behind.

Length is ``len(str)``, i.e. Unicode code points of the exact string passed
in. Callers do any pre-formatting (joining stdout/stderr, etc.) first.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from pydantic import BaseModel, Field

from mcpsummarizer.cache.content_cache import ContentCache
from mcpsummarizer.llm.base_client import BaseSummarizationModel
from mcpsummarizer.llm.models import (
    ModelConfig,
    SummarizationOptions,
    SummarizationResult,
)

logger = logging.getLogger(__name__)

DEFAULT_CHAR_THRESHOLD = 512
DEFAULT_CACHE_MAX_AGE = 60.0 * 60.0  # 1 hour, seconds


class SummarizationConfig(BaseModel):
    """Configuration bundle for SummarizationService."""

    model: ModelConfig
    char_threshold: int = Field(default=DEFAULT_CHAR_THRESHOLD, ge=0)
    cache_max_age: float = DEFAULT_CACHE_MAX_AGE


class SummarizationService:
    """Owns one model and one ContentCache; nothing is shared across instances."""

    def __init__(
        self,
        model: BaseSummarizationModel,
        config: SummarizationConfig,
        clock: Callable[[], float] = time.monotonic,
        sweep: bool = True,
    ) -> None:
        """
        Raises:
            ValueError: If config.cache_max_age is not strictly positive.
        """
        self._model = model
        self._config = config
        self._char_threshold = config.char_threshold
        self._cache = ContentCache(config.cache_max_age, clock=clock, sweep=sweep)

    @property
    def char_threshold(self) -> int:
        return self._char_threshold

    @property
    def cache(self) -> ContentCache:
        return self._cache

    async def initialize(self) -> None:
        """Initialize the model with the embedded ModelConfig."""
        await self._model.initialize(self._config.model)

    async def maybe_summarize(
        self,
        content: str,
        content_type: str,
        options: SummarizationOptions | None = None,
        force: bool = False,
    ) -> SummarizationResult:
        """Return content verbatim if short, else a summary plus cache id.

        Args:
            content: Exact text to evaluate.
            content_type: Label used in the prompt, e.g. "command output".
            options: Optional hint / output_format.
            force: Summarize even when under the threshold.

        Raises:
            SummarizationError: Propagated untouched from the model; the
                original is not cached in that case.
        """
        if not force and len(content) <= self._char_threshold:
            logger.debug(
                "Returning %s verbatim (%d <= %d chars)",
                content_type, len(content), self._char_threshold,
            )
            return SummarizationResult(text=content, is_summarized=False)

        summary = await self._model.summarize(content, content_type, options)
        content_id = self._cache.store(content)
        logger.info(
            "Summarized %s: %d -> %d chars (id=%s)",
            content_type, len(content), len(summary), content_id,
        )
        return SummarizationResult(text=summary, id=content_id, is_summarized=True)

    def get_full_content(self, content_id: str) -> str | None:
        """Original content for an id, or None if unknown or expired."""
        return self._cache.get(content_id)

    async def cleanup(self) -> None:
        """Clean up the model, then clear and stop the cache."""
        try:
            await self._model.cleanup()
        finally:
            self._cache.close()
