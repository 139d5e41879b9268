"""Provider registry: factories, live provider instances, and selection.

The registry is built once at startup (``initialize``) and is read-only
while requests are being served. Selection is deterministic: an explicit
provider name must be well-formed and configured, and an unconfigured name
is reported as such rather than falling back to the default provider.

Example:
    >>> registry = ProviderRegistry(
    ...     ProviderRegistryConfig(
    ...         default_provider="openai",
    ...         providers=[ProviderEntry(name="openai", config={"api_key": "sk-..."})],
    ...     )
    ... )
    >>> registry.register_factory(OpenAIProviderFactory())
    >>> # await registry.initialize()
    >>> # provider = registry.select_provider()
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from assistants_mcp.errors import (
    InvalidProviderNameError,
    NoProviderConfiguredError,
    ProviderConfigurationError,
    ProviderNotFoundError,
)
from assistants_mcp.observability import get_logger, sanitize_for_logging
from assistants_mcp.providers.base import AssistantProvider, ProviderFactory

logger = get_logger(__name__)

PROVIDER_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9]*$")


class ProviderEntry(BaseModel):
    """One configured provider."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(alias="provider")
    config: dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True
    priority: int = 0


class ProviderRegistryConfig(BaseModel):
    """Registry configuration: the providers to build and the default one."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_provider: str | None = None
    providers: list[ProviderEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_names(self) -> ProviderRegistryConfig:
        names = [entry.name for entry in self.providers]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate provider entries: {', '.join(duplicates)}")
        return self


def is_valid_provider_name(name: str) -> bool:
    """Return True if ``name`` is lowercase alphanumeric and starts with a letter."""
    return isinstance(name, str) and PROVIDER_NAME_PATTERN.match(name) is not None


class ProviderRegistry:
    """Holds provider factories and live provider instances."""

    def __init__(self, config: ProviderRegistryConfig | None = None) -> None:
        self._config = config or ProviderRegistryConfig()
        self._factories: dict[str, ProviderFactory] = {}
        self._providers: dict[str, AssistantProvider] = {}
        self._default_name: str | None = None
        self._initialized = False

    @property
    def default_provider_name(self) -> str | None:
        return self._default_name

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def register_factory(self, factory: ProviderFactory) -> None:
        """Associate a provider name with the factory that builds it.

        Raises:
            ProviderConfigurationError: If a factory is already registered for the name.
        """
        name = factory.metadata.name
        if name in self._factories:
            raise ProviderConfigurationError(name, "factory already registered")
        self._factories[name] = factory
        logger.debug("provider.factory.registered", provider=name)

    async def register_provider(
        self, provider: AssistantProvider, config: dict[str, Any] | None = None
    ) -> None:
        """Validate a provider's connection and store it by name.

        The first registered provider becomes the default unless one is set.

        Raises:
            ProviderConfigurationError: If the connection check fails or the
                name is already registered.
        """
        name = provider.metadata.name
        if name in self._providers:
            raise ProviderConfigurationError(name, "provider already registered")
        if config:
            await provider.initialize(config)
        if not await provider.validate_connection():
            raise ProviderConfigurationError(name, "connection validation failed")
        self._providers[name] = provider
        if self._default_name is None:
            self._default_name = name
        logger.info(
            "provider.registered",
            provider=name,
            display_name=provider.metadata.display_name,
            is_default=self._default_name == name,
        )

    async def initialize(self) -> None:
        """Build every enabled configured provider through its factory.

        Entries are processed by descending priority; ties keep declaration order.

        Raises:
            ProviderConfigurationError: If called twice, a config is rejected by
                its factory, or the configured default is not available.
            ProviderNotFoundError: If an entry names a provider with no factory.
        """
        if self._initialized:
            raise ProviderConfigurationError("registry", "already initialized")

        entries = sorted(
            (entry for entry in self._config.providers if entry.enabled),
            key=lambda entry: -entry.priority,
        )
        try:
            for entry in entries:
                factory = self._factories.get(entry.name)
                if factory is None:
                    raise ProviderNotFoundError(entry.name, sorted(self._factories))
                if not factory.validate_config(entry.config):
                    logger.error(
                        "provider.config.invalid",
                        provider=entry.name,
                        config=sanitize_for_logging(entry.config),
                    )
                    raise ProviderConfigurationError(entry.name, "invalid configuration")
                provider = factory.create(entry.config)
                try:
                    await self.register_provider(provider)
                except Exception:
                    await provider.aclose()
                    raise

            default = self._config.default_provider
            if default is not None:
                if default not in self._providers:
                    raise ProviderConfigurationError(default, "default provider is not enabled")
                self._default_name = default
        except Exception:
            # Providers registered before the failure own open clients.
            await self.shutdown()
            raise

        self._initialized = True
        logger.info(
            "provider.registry.initialized",
            providers=sorted(self._providers),
            default_provider=self._default_name,
        )

    def select_provider(self, name: str | None = None) -> AssistantProvider:
        """Resolve the provider for a request.

        Args:
            name: Explicit provider name, or None for the default provider.

        Raises:
            InvalidProviderNameError: If ``name`` is malformed.
            ProviderNotFoundError: If ``name`` is well-formed but not configured.
            NoProviderConfiguredError: If no name is given and there is no default.
        """
        if name is None:
            if self._default_name is None:
                raise NoProviderConfiguredError()
            return self._providers[self._default_name]
        if not is_valid_provider_name(name):
            raise InvalidProviderNameError(str(name))
        provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotFoundError(name, sorted(self._providers))
        return provider

    def get_provider(self, name: str) -> AssistantProvider | None:
        return self._providers.get(name)

    def has_provider(self, name: str) -> bool:
        return name in self._providers

    def list_providers(self) -> list[str]:
        """Registered provider names, default first, then alphabetical."""
        return sorted(self._providers, key=lambda n: (n != self._default_name, n))

    def set_default_provider(self, name: str) -> None:
        """Change the default provider.

        Raises:
            ProviderNotFoundError: If ``name`` is not registered.
        """
        if name not in self._providers:
            raise ProviderNotFoundError(name, sorted(self._providers))
        self._default_name = name

    def get_stats(self) -> dict[str, Any]:
        return {
            "totalProviders": len(self._providers),
            "defaultProvider": self._default_name,
            "registeredFactories": sorted(self._factories),
            "providers": {
                name: provider.metadata.capabilities.model_dump()
                for name, provider in sorted(self._providers.items())
            },
        }

    async def shutdown(self) -> None:
        """Close every provider and clear the registry."""
        for name, provider in list(self._providers.items()):
            await provider.aclose()
            logger.debug("provider.closed", provider=name)
        self._providers.clear()
        self._default_name = None
        self._initialized = False
