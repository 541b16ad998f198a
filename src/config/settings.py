# src/config/settings.py - v1
"""Typed environment settings loaded via pydantic-settings.

Holds what comes from the process environment (or a .env file): provider
credentials, model and base URL overrides, the provider selection override,
probe timeout, and logging options. Project-level configuration lives in
config/project.py.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Environment settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === PROVIDER SELECTION ===
    procflow_ai_provider: str = ""

    # === ANTHROPIC ===
    anthropic_api_key: str = ""
    anthropic_model: str = ""
    anthropic_base_url: str = ""

    # === OPENAI ===
    openai_api_key: str = ""
    openai_model: str = ""
    openai_base_url: str = ""

    # === OLLAMA ===
    ollama_model: str = ""
    ollama_base_url: str = ""

    # === CLAUDE CLI ===
    claude_cli_binary: str = "claude"

    # === PROBES ===
    probe_timeout_seconds: float = 2.0

    # === LOGGING ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("probe_timeout_seconds")
    @classmethod
    def validate_probe_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("probe_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        errors: list[str] = []

        if self.anthropic_base_url and not self.anthropic_base_url.startswith(("http://", "https://")):
            errors.append("ANTHROPIC_BASE_URL must be an http(s) URL")
        if self.openai_base_url and not self.openai_base_url.startswith(("http://", "https://")):
            errors.append("OPENAI_BASE_URL must be an http(s) URL")
        if self.ollama_base_url and not self.ollama_base_url.startswith(("http://", "https://")):
            errors.append("OLLAMA_BASE_URL must be an http(s) URL")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment and .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
