# src/config/settings.py — v2
"""Typed configuration loaded from the environment / .env via pydantic-settings.

Single source of truth for provider selection, thresholds, cache lifetime,
directory-listing limits and logging. Validated once at startup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mcpsummarizer.llm.models import ModelConfig

SUPPORTED_PROVIDERS: tuple[str, ...] = (
    "anthropic",
    "openai",
    "openai-compatible",
    "google",
)


class ConfigurationError(Exception):
    """Raised when configuration is missing or internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM PROVIDER ===
    llm_provider: str = "anthropic"
    llm_api_key: str = ""
    llm_model: str | None = None
    llm_base_url: str | None = None
    llm_max_tokens: int = 1024

    # Provider API keys (used when LLM_API_KEY is empty)
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    google_api_key: str = ""

    # === Summarization ===
    char_threshold: int = 512
    cache_max_age: float = 3600.0  # seconds

    # === Tools ===
    mcp_working_dir: str = "/"
    directory_max_depth: int = 5
    directory_max_files: int = 1000
    directory_max_files_per_dir: int = 100
    directory_force_summary: bool = False

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("llm_provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:  # noqa: N805
        return v.strip().lower()

    @field_validator("llm_model", "llm_base_url")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:  # noqa: N805
        """Treat empty env values as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Collect every configuration problem into one error."""
        errors: list[str] = []

        if self.llm_provider not in SUPPORTED_PROVIDERS:
            errors.append(
                f"Unsupported LLM_PROVIDER {self.llm_provider!r}. "
                f"Available: {', '.join(SUPPORTED_PROVIDERS)}"
            )

        if self.llm_max_tokens <= 0:
            errors.append("LLM_MAX_TOKENS must be a positive integer")

        if self.char_threshold < 0:
            errors.append("CHAR_THRESHOLD must be >= 0")

        if self.cache_max_age <= 0:
            errors.append("CACHE_MAX_AGE must be a positive number of seconds")

        for name in (
            "directory_max_depth",
            "directory_max_files",
            "directory_max_files_per_dir",
        ):
            if getattr(self, name) <= 0:
                errors.append(f"{name.upper()} must be > 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def resolved_api_key(self) -> str:
        """LLM_API_KEY, falling back to the provider-specific key."""
        if self.llm_api_key:
            return self.llm_api_key
        if self.llm_provider == "anthropic":
            return self.anthropic_api_key
        if self.llm_provider in ("openai", "openai-compatible"):
            return self.openai_api_key
        if self.llm_provider == "google":
            return self.google_api_key
        return ""

    def build_model_config(self) -> ModelConfig:
        """Build the ModelConfig for the selected provider."""
        base_url = self.llm_base_url if self.llm_provider == "openai-compatible" else None
        return ModelConfig(
            api_key=self.resolved_api_key,
            model=self.llm_model,
            max_tokens=self.llm_max_tokens,
            base_url=base_url,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment / .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
