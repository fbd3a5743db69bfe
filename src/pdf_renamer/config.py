"""Configuration management using pydantic-settings.

Layers are merged explicitly: built-in defaults, then the TOML config file,
then command-line overrides.
"""

import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.template import DEFAULT_FALLBACK_TEMPLATE, DEFAULT_TEMPLATE
from .prompts import SYSTEM_PROMPT

DEFAULT_MODEL = "llama3.2:latest"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_MAX_SIZE = 10 * 1024 * 1024
LOCAL_CONFIG_PATH = Path("pdf-renamer.toml")
CONFIG_PATH = Path("~/.config/pdf-renamer/config.toml").expanduser()


class LLMProvider(str, Enum):
    """Available LLM providers."""

    OLLAMA = "ollama"
    CLAUDE_API = "claude-api"
    NONE = "none"


class LLMConfig(BaseSettings):
    """LLM provider configuration."""

    model_config = SettingsConfigDict(env_prefix="PDF_RENAMER_LLM_")

    provider: LLMProvider = LLMProvider.OLLAMA
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_OLLAMA_URL
    system_prompt: str = SYSTEM_PROMPT
    addon_prompt: str = ""
    timeout: float = 120.0


class PdfConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PDF_RENAMER_PDF_")

    pdftotext: str = "pdftotext"
    max_size: int = DEFAULT_MAX_SIZE


class FilenameConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PDF_RENAMER_FILENAME_")

    template: str = DEFAULT_TEMPLATE
    fallback_template: str = DEFAULT_FALLBACK_TEMPLATE
    sanitize: bool = True


class LogConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PDF_RENAMER_LOG_")

    failure_dir: Path | None = None

    @field_validator("failure_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path | None) -> Path | None:
        return Path(v).expanduser() if v else None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PDF_RENAMER_")

    llm: LLMConfig = LLMConfig()
    pdf: PdfConfig = PdfConfig()
    filename: FilenameConfig = FilenameConfig()
    log: LogConfig = LogConfig()


def merge_layers(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Deep-merge config layers; later layers win, ``None`` values are skipped."""
    merged: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if value is None:
                continue
            if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
                merged[key] = merge_layers(merged[key], value)
            elif isinstance(value, Mapping):
                merged[key] = merge_layers(value)
            else:
                merged[key] = value
    return merged


def find_config_file(config_path: Path | None = None) -> Path | None:
    """Explicit path first, then ./pdf-renamer.toml, then the user config."""
    if config_path:
        return config_path
    for candidate in (LOCAL_CONFIG_PATH, CONFIG_PATH):
        if candidate.exists():
            return candidate
    return None


def load_settings(
    config_path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file and overrides, falling back to defaults."""
    path = find_config_file(config_path)

    data: dict[str, Any] = {}
    if path and path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

    merged = merge_layers(data, overrides)
    return Settings(
        llm=LLMConfig(**merged.get("llm", {})),
        pdf=PdfConfig(**merged.get("pdf", {})),
        filename=FilenameConfig(**merged.get("filename", {})),
        log=LogConfig(**merged.get("log", {})),
    )
