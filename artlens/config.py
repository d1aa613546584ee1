"""Configuration loading from YAML + environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings


class ArtLensConfig(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 8350
    log_level: str = "INFO"
    api_key: str = ""
    require_auth: bool = True
    default_language: str = "es"

    # Vision / LLM providers (from env)
    qwen_api_key: str = ""
    qwen_base_url: str = "https://dashscope-intl.aliyuncs.com/compatible-mode/v1"
    qwen_vl_model: str = "qwen-vl-max-latest"
    qwen_text_model: str = "qwen-flash"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    vision_provider: str = "qwen"
    text_provider: str = "qwen"

    # Reverse image search
    google_vision_api_key: str = ""
    blocked_result_hosts: list[str] = Field(default_factory=lambda: ["collinsdictionary"])

    # Timeouts (seconds); external calls are never retried
    llm_timeout_s: float = 30.0
    reverse_search_timeout_s: float = 30.0
    fetch_timeout_s: float = 10.0
    render_timeout_s: float = 30.0

    # Decision thresholds
    high_confidence_threshold: float = 0.99
    min_confidence_threshold: float = 0.6
    vision_fallback_threshold: float = 0.98
    vision_fallback_reinvoke: bool = False
    artwork_match_min_similarity: float = 0.90

    # Web evidence collection
    max_fetch_urls: int = 5
    max_content_bytes: int = 5_000_000
    max_text_chars: int = 10_000
    min_scraped_text_length: int = 100
    user_agent: str = "Mozilla/5.0 (compatible; ArtLens/0.3; +https://artlens.app)"
    playwright_enabled: bool = True
    playwright_headless: bool = True
    playwright_block_resources: bool = True

    # Storage
    catalog_path: str = ""
    postgres_url: str = ""

    # Quota
    daily_recognition_limit: int = 5

    @classmethod
    def from_yaml(cls, path: str | Path = "artlens.yaml") -> ArtLensConfig:
        """Load config from YAML file; keys missing from the file fall back to env vars."""
        yaml_path = Path(path)
        yaml_data: dict[str, Any] = {}

        if yaml_path.exists():
            with yaml_path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            yaml_data = _flatten_yaml(raw.get("artlens", {}))

        return cls(**yaml_data)


def _flatten_yaml(data: dict, prefix: str = "") -> dict:
    """Flatten nested YAML into flat key-value pairs for Pydantic.

    ``qwen: {api_key: ...}`` becomes ``qwen_api_key``, so a section only groups
    keys that share the section name as prefix.
    """
    flat: dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}_{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten_yaml(value, full_key))
        else:
            flat[full_key] = value
    return flat
