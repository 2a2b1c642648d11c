"""Configuration loading and validation for httpx-url-template."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import BaseModel, Field

from httpx_url_template.exceptions import ConfigurationError
from httpx_url_template.hooks import attach
from httpx_url_template.models import ExpansionOptions

DEFAULT_CONFIG_FILE = "url-template.yaml"


class ClientConfig(BaseModel):
    """Configuration for clients built by create_client."""

    base_url: str | None = Field(default=None, description="Base URL merged into relative URLs")
    timeout: float = Field(default=10.0, gt=0.0, description="Request timeout in seconds")
    log_responses: bool = Field(default=False, description="Log route info for every response")


class LoggingConfig(BaseModel):
    """Configuration for logging output."""

    level: str = "info"
    output: str = "stderr"


class UrlTemplateConfig(BaseModel):
    """Top-level httpx-url-template configuration."""

    expansion: ExpansionOptions = Field(default_factory=ExpansionOptions)
    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> UrlTemplateConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML config file. If None, uses 'url-template.yaml'
              in the current directory, falling back to defaults.

    Returns:
        A validated UrlTemplateConfig instance.

    Raises:
        ConfigurationError: If the file does not contain a YAML mapping.
    """
    path = Path(DEFAULT_CONFIG_FILE) if path is None else Path(path)

    if path.exists():
        with open(path) as f:
            raw: Any = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {path}")
        return UrlTemplateConfig.model_validate(raw)

    return UrlTemplateConfig()


def create_client(
    config: UrlTemplateConfig | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Build an httpx.Client with the template interceptor attached.

    Args:
        config: Configuration to apply. If None, loads from url-template.yaml.
        transport: Optional transport override, e.g. httpx.MockTransport.

    Returns:
        A ready-to-use client.
    """
    config = config or load_config()
    kwargs: dict[str, Any] = {"timeout": config.client.timeout, "transport": transport}
    if config.client.base_url:
        kwargs["base_url"] = config.client.base_url
    client = httpx.Client(**kwargs)
    attach(client, config.expansion, log_responses=config.client.log_responses)
    return client
