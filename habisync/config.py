"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from habisync.utils.platform import get_config_dir


class HabiticaConfig(BaseModel):
    user_id: str = ""
    api_token: str = ""
    base_url: str = "https://habitica.com/api/v3/"
    client_name: str = "github-to-habitica"
    timeout: float = 5.0


class WebhookConfig(BaseModel):
    """Inbound GitHub webhook endpoint.

    An empty ``secret`` is allowed at startup; every delivery is then
    rejected with 403 until one is configured.
    """
    secret: str = ""
    path: str = "/webhooks/github"
    bind: str = "0.0.0.0"
    port: int = 8420


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HABISYNC_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    habitica: HabiticaConfig = Field(default_factory=HabiticaConfig)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    log_level: str = "INFO"
    log_json: bool = False


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config.

    Environment variables win over YAML values, so secrets can stay out of
    the config file.
    """
    yaml_data: dict[str, Any] = {}

    # Determine config file path
    if config_path is None:
        config_path = os.environ.get("HABISYNC_CONFIG")
    if config_path is None:
        default = get_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    # Load YAML if found
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    if not yaml_data:
        return Settings()

    # Init kwargs outrank env vars in pydantic-settings, so merge env on top
    env_settings = Settings().model_dump(exclude_unset=True)
    return Settings(**_deep_merge(yaml_data, env_settings))
