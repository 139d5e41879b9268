"""Server settings read from environment variables.

Environment Variables:
    ASSISTANTS_MCP_PROVIDER: Default provider name (default: first configured)
    OPENAI_API_KEY: Enables the openai provider
    OPENAI_BASE_URL / OPENAI_ORGANIZATION / OPENAI_PROJECT: OpenAI connection settings
    ANTHROPIC_API_KEY: Enables the anthropic provider
    GEMINI_API_KEY: Enables the gemini provider
    ASSISTANTS_MCP_TIMEOUT: Provider request timeout in seconds (default: 30)
    ASSISTANTS_MCP_PAGE_SIZE: Page size for list methods (default: 10)
    ASSISTANTS_MCP_HOST / ASSISTANTS_MCP_PORT: HTTP bind address (default: 127.0.0.1:8000)
    ASSISTANTS_MCP_MAX_REQUEST_SIZE: HTTP body limit in bytes (default: 1 MiB)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from assistants_mcp.mcp.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MIN_PAGE_SIZE
from assistants_mcp.providers.registry import ProviderEntry, ProviderRegistryConfig

ENV_PREFIX = "ASSISTANTS_MCP_"
ENV_PROVIDER = f"{ENV_PREFIX}PROVIDER"
ENV_TIMEOUT = f"{ENV_PREFIX}TIMEOUT"
ENV_PAGE_SIZE = f"{ENV_PREFIX}PAGE_SIZE"
ENV_HOST = f"{ENV_PREFIX}HOST"
ENV_PORT = f"{ENV_PREFIX}PORT"
ENV_MAX_REQUEST_SIZE = f"{ENV_PREFIX}MAX_REQUEST_SIZE"
ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_OPENAI_BASE_URL = "OPENAI_BASE_URL"
ENV_OPENAI_ORGANIZATION = "OPENAI_ORGANIZATION"
ENV_OPENAI_PROJECT = "OPENAI_PROJECT"
ENV_ANTHROPIC_API_KEY = "ANTHROPIC_API_KEY"
ENV_GEMINI_API_KEY = "GEMINI_API_KEY"

DEFAULT_TIMEOUT = 30.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_MAX_REQUEST_SIZE = 1024 * 1024


class Settings(BaseModel):
    """Validated server settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_provider: str | None = None
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_organization: str | None = None
    openai_project: str | None = None
    anthropic_api_key: str | None = None
    gemini_api_key: str | None = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE)
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    max_request_size: int = Field(default=DEFAULT_MAX_REQUEST_SIZE, gt=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from the environment.

        Raises:
            ValueError: If a variable holds an invalid value (pydantic ValidationError
                is a ValueError subclass).
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            value = env.get(name, "").strip()
            return value or None

        values: dict[str, Any] = {
            "openai_api_key": get(ENV_OPENAI_API_KEY),
            "openai_base_url": get(ENV_OPENAI_BASE_URL),
            "openai_organization": get(ENV_OPENAI_ORGANIZATION),
            "openai_project": get(ENV_OPENAI_PROJECT),
            "anthropic_api_key": get(ENV_ANTHROPIC_API_KEY),
            "gemini_api_key": get(ENV_GEMINI_API_KEY),
        }
        optional = {
            "default_provider": ENV_PROVIDER,
            "timeout": ENV_TIMEOUT,
            "page_size": ENV_PAGE_SIZE,
            "host": ENV_HOST,
            "port": ENV_PORT,
            "max_request_size": ENV_MAX_REQUEST_SIZE,
        }
        for field_name, env_name in optional.items():
            raw = get(env_name)
            if raw is not None:
                values[field_name] = raw
        return cls.model_validate(values)

    def to_registry_config(self) -> ProviderRegistryConfig:
        """Provider entries for every provider with credentials.

        Without an explicit default the highest-priority provider (openai) becomes
        the default; an explicit default without credentials fails at registry
        initialization.
        """
        entries: list[ProviderEntry] = []
        if self.openai_api_key:
            openai_config: dict[str, Any] = {
                "api_key": self.openai_api_key,
                "timeout": self.timeout,
            }
            for key, value in (
                ("base_url", self.openai_base_url),
                ("organization", self.openai_organization),
                ("project", self.openai_project),
            ):
                if value:
                    openai_config[key] = value
            entries.append(ProviderEntry(name="openai", config=openai_config, priority=10))
        if self.anthropic_api_key:
            entries.append(
                ProviderEntry(name="anthropic", config={"api_key": self.anthropic_api_key})
            )
        if self.gemini_api_key:
            entries.append(ProviderEntry(name="gemini", config={"api_key": self.gemini_api_key}))

        return ProviderRegistryConfig(default_provider=self.default_provider, providers=entries)
