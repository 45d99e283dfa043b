# tests/conftest.py — v2
"""Shared test fixtures for unit tests.

Provides a scripted summarization model, a controllable clock and a
SummarizationService wired to both. No network access: all I/O is mocked.
"""

from __future__ import annotations

import pytest
import pytest_asyncio

from mcpsummarizer.llm.base_client import BaseSummarizationModel
from mcpsummarizer.llm.errors import SummarizationError
from mcpsummarizer.llm.models import ModelConfig, SummarizationOptions
from mcpsummarizer.services.summarization import (
    SummarizationConfig,
    SummarizationService,
)


class MockSummarizationModel(BaseSummarizationModel):
    """Returns 'Summary of <type>: ...' and records every call."""

    default_model = "mock-model"

    def __init__(self, fail_with: Exception | None = None) -> None:
        super().__init__()
        self.fail_with = fail_with
        self.calls: list[tuple[str, str, SummarizationOptions | None]] = []

    @property
    def provider_name(self) -> str:
        return "Mock"

    async def _summarize(self, config, content, content_type, options) -> str:
        self.calls.append((content, content_type, options))
        if self.fail_with is not None:
            raise self.fail_with
        return f"Summary of {content_type}: {content[:20]}..."


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# === FIXTURES ===


@pytest.fixture
def model_config() -> ModelConfig:
    return ModelConfig(api_key="test-key", model="test-model", max_tokens=256)


@pytest.fixture
def mock_model() -> MockSummarizationModel:
    return MockSummarizationModel()


@pytest.fixture
def failing_model() -> MockSummarizationModel:
    return MockSummarizationModel(
        fail_with=SummarizationError("Mock", "Network error: boom"),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def service(mock_model, model_config, clock):
    """Initialized service: threshold 100, max age 1s, no sweep thread."""
    svc = SummarizationService(
        mock_model,
        SummarizationConfig(model=model_config, char_threshold=100, cache_max_age=1.0),
        clock=clock,
        sweep=False,
    )
    await svc.initialize()
    yield svc
    await svc.cleanup()


@pytest.fixture
def mock_model_cls() -> type[MockSummarizationModel]:
    return MockSummarizationModel
