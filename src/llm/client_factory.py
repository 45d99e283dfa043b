# src/llm/client_factory.py — v3
"""Factory: instantiate a summarization model from a provider name.

Called once at startup with the validated LLM_PROVIDER setting.
"""

from __future__ import annotations

import importlib
import logging

from mcpsummarizer.config.settings import ConfigurationError
from mcpsummarizer.llm.base_client import BaseSummarizationModel

logger = logging.getLogger(__name__)

# Registry of provider name → adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "anthropic": "mcpsummarizer.llm.adapters.anthropic_adapter.AnthropicAdapter",
    "openai": "mcpsummarizer.llm.adapters.openai_adapter.OpenAIAdapter",
    "openai-compatible": "mcpsummarizer.llm.adapters.openai_adapter.OpenAICompatibleAdapter",
    "google": "mcpsummarizer.llm.adapters.google_adapter.GoogleAdapter",
}


class UnsupportedProviderError(ConfigurationError):
    """Raised when a provider is not registered."""


def create_model(provider: str, **kwargs: object) -> BaseSummarizationModel:
    """Instantiate the adapter registered for ``provider``.

    The returned model is UNINITIALIZED; call ``initialize`` (usually via
    SummarizationService.initialize) before summarizing.

    Args:
        provider: Provider identifier, case-insensitive.
        **kwargs: Adapter-specific constructor arguments.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    key = provider.strip().lower()
    if key not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    adapter_cls = _import_class(_PROVIDER_REGISTRY[key])
    logger.debug("Creating summarization model: provider=%s", key)
    return adapter_cls(**kwargs)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom provider adapter.

    Args:
        name: Provider identifier.
        class_path: Fully qualified path of a BaseSummarizationModel subclass.
    """
    _PROVIDER_REGISTRY[name.lower()] = class_path
    logger.info("Registered LLM provider: %s → %s", name, class_path)


def available_providers() -> list[str]:
    return sorted(_PROVIDER_REGISTRY)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
