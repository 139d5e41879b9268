"""Tests for ProviderRegistry: registration, initialization, and selection."""

from __future__ import annotations

import httpx
import pytest

from assistants_mcp.errors import (
    InvalidProviderNameError,
    NoProviderConfiguredError,
    ProviderConfigurationError,
    ProviderNotFoundError,
)
from assistants_mcp.providers.openai import OpenAIProvider, OpenAIProviderFactory
from assistants_mcp.providers.registry import (
    ProviderEntry,
    ProviderRegistry,
    ProviderRegistryConfig,
    is_valid_provider_name,
)
from assistants_mcp.testing import MockProvider, MockProviderFactory


def _registry(*entries: ProviderEntry, default: str | None = None) -> ProviderRegistry:
    config = ProviderRegistryConfig(default_provider=default, providers=list(entries))
    return ProviderRegistry(config)


class TestProviderNames:
    @pytest.mark.parametrize("name", ["openai", "anthropic", "mock2"])
    def test_valid(self, name: str) -> None:
        assert is_valid_provider_name(name)

    @pytest.mark.parametrize("name", ["", "OpenAI", "open-ai", "2fast", "open ai"])
    def test_invalid(self, name: str) -> None:
        assert not is_valid_provider_name(name)


class TestRegistryConfig:
    def test_provider_alias(self) -> None:
        entry = ProviderEntry.model_validate({"provider": "openai", "config": {"api_key": "k"}})
        assert entry.name == "openai"
        assert entry.enabled is True

    def test_duplicate_entries_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate provider entries: openai"):
            ProviderRegistryConfig(
                providers=[ProviderEntry(name="openai"), ProviderEntry(name="openai")]
            )


class TestRegisterProvider:
    @pytest.mark.asyncio
    async def test_first_provider_becomes_default(self) -> None:
        registry = ProviderRegistry()
        first, second = MockProvider("first"), MockProvider("second")
        await registry.register_provider(first)
        await registry.register_provider(second)
        assert registry.default_provider_name == "first"
        assert registry.select_provider() is first
        assert registry.select_provider("second") is second

    @pytest.mark.asyncio
    async def test_config_is_passed_to_initialize(self) -> None:
        provider = MockProvider()
        await ProviderRegistry().register_provider(provider, {"api_key": "k"})
        assert provider.initialized_with == {"api_key": "k"}

    @pytest.mark.asyncio
    async def test_failed_connection_is_rejected(self) -> None:
        registry = ProviderRegistry()
        with pytest.raises(ProviderConfigurationError, match="connection validation failed"):
            await registry.register_provider(MockProvider(connected=False))
        assert registry.list_providers() == []

    @pytest.mark.asyncio
    async def test_duplicate_is_rejected(self) -> None:
        registry = ProviderRegistry()
        await registry.register_provider(MockProvider())
        with pytest.raises(ProviderConfigurationError, match="already registered"):
            await registry.register_provider(MockProvider())


class TestInitialize:
    @pytest.mark.asyncio
    async def test_builds_entries_by_priority(self) -> None:
        low, high = MockProvider("low"), MockProvider("high")
        registry = _registry(
            ProviderEntry(name="low", priority=1),
            ProviderEntry(name="high", priority=5),
        )
        registry.register_factory(MockProviderFactory(low))
        registry.register_factory(MockProviderFactory(high))
        await registry.initialize()
        assert registry.is_initialized
        assert registry.default_provider_name == "high"
        assert registry.list_providers() == ["high", "low"]

    @pytest.mark.asyncio
    async def test_explicit_default_wins(self) -> None:
        registry = _registry(
            ProviderEntry(name="alpha", priority=10),
            ProviderEntry(name="beta"),
            default="beta",
        )
        registry.register_factory(MockProviderFactory(MockProvider("alpha")))
        registry.register_factory(MockProviderFactory(MockProvider("beta")))
        await registry.initialize()
        assert registry.default_provider_name == "beta"
        assert registry.list_providers() == ["beta", "alpha"]

    @pytest.mark.asyncio
    async def test_disabled_entries_are_skipped(self) -> None:
        registry = _registry(ProviderEntry(name="mock", enabled=False))
        registry.register_factory(MockProviderFactory())
        await registry.initialize()
        assert registry.list_providers() == []
        with pytest.raises(NoProviderConfiguredError):
            registry.select_provider()

    @pytest.mark.asyncio
    async def test_missing_factory(self) -> None:
        registry = _registry(ProviderEntry(name="gemini"))
        with pytest.raises(ProviderNotFoundError):
            await registry.initialize()

    @pytest.mark.asyncio
    async def test_default_without_credentials_fails(self) -> None:
        registry = _registry(ProviderEntry(name="mock"), default="openai")
        registry.register_factory(MockProviderFactory())
        with pytest.raises(ProviderConfigurationError, match="default provider is not enabled"):
            await registry.initialize()

    @pytest.mark.asyncio
    async def test_rejected_config(self) -> None:
        class StrictFactory(MockProviderFactory):
            def validate_config(self, config: dict) -> bool:
                return False

        registry = _registry(ProviderEntry(name="mock", config={"api_key": "secret"}))
        registry.register_factory(StrictFactory())
        with pytest.raises(ProviderConfigurationError, match="invalid configuration"):
            await registry.initialize()

    @pytest.mark.asyncio
    async def test_failed_registration_closes_every_provider(self) -> None:
        healthy, broken = MockProvider("healthy"), MockProvider("broken", connected=False)
        registry = _registry(
            ProviderEntry(name="healthy", priority=5),
            ProviderEntry(name="broken", priority=1),
        )
        registry.register_factory(MockProviderFactory(healthy))
        registry.register_factory(MockProviderFactory(broken))
        with pytest.raises(ProviderConfigurationError, match="connection validation failed"):
            await registry.initialize()
        assert healthy.closed is True
        assert broken.closed is True
        assert registry.list_providers() == []
        assert not registry.is_initialized

    @pytest.mark.asyncio
    async def test_rejected_credentials_close_http_client(self) -> None:
        created: list[OpenAIProvider] = []

        class RecordingFactory(OpenAIProviderFactory):
            def create(self, config: dict) -> OpenAIProvider:
                provider = super().create(config)
                created.append(provider)
                return provider

        def unauthorized(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": {"message": "Incorrect API key"}})

        registry = _registry(ProviderEntry(name="openai", config={"api_key": "sk-bad"}))
        registry.register_factory(RecordingFactory(transport=httpx.MockTransport(unauthorized)))
        with pytest.raises(ProviderConfigurationError):
            await registry.initialize()
        assert len(created) == 1
        assert created[0]._client.is_closed

    @pytest.mark.asyncio
    async def test_missing_default_closes_registered_providers(self) -> None:
        provider = MockProvider()
        registry = _registry(ProviderEntry(name="mock"), default="openai")
        registry.register_factory(MockProviderFactory(provider))
        with pytest.raises(ProviderConfigurationError):
            await registry.initialize()
        assert provider.closed is True

    @pytest.mark.asyncio
    async def test_initialize_twice(self) -> None:
        registry = ProviderRegistry()
        await registry.initialize()
        with pytest.raises(ProviderConfigurationError, match="already initialized"):
            await registry.initialize()

    def test_duplicate_factory(self) -> None:
        registry = ProviderRegistry()
        registry.register_factory(MockProviderFactory())
        with pytest.raises(ProviderConfigurationError, match="factory already registered"):
            registry.register_factory(MockProviderFactory())


class TestSelectProvider:
    @pytest.mark.asyncio
    async def test_unknown_name_does_not_fall_back(self) -> None:
        registry = ProviderRegistry()
        await registry.register_provider(MockProvider())
        with pytest.raises(ProviderNotFoundError) as exc_info:
            registry.select_provider("gemini")
        assert exc_info.value.details["available_providers"] == ["mock"]

    def test_malformed_name(self) -> None:
        with pytest.raises(InvalidProviderNameError):
            ProviderRegistry().select_provider("Not Valid")

    def test_no_default(self) -> None:
        with pytest.raises(NoProviderConfiguredError):
            ProviderRegistry().select_provider()

    @pytest.mark.asyncio
    async def test_set_default_provider(self) -> None:
        registry = ProviderRegistry()
        await registry.register_provider(MockProvider("one"))
        await registry.register_provider(MockProvider("two"))
        registry.set_default_provider("two")
        assert registry.select_provider().name == "two"
        with pytest.raises(ProviderNotFoundError):
            registry.set_default_provider("three")


@pytest.mark.asyncio
async def test_stats_and_shutdown() -> None:
    provider = MockProvider()
    registry = ProviderRegistry()
    registry.register_factory(MockProviderFactory(provider))
    await registry.register_provider(provider)

    stats = registry.get_stats()
    assert stats["totalProviders"] == 1
    assert stats["defaultProvider"] == "mock"
    assert stats["registeredFactories"] == ["mock"]
    assert stats["providers"]["mock"]["assistants"] is True

    await registry.shutdown()
    assert provider.closed is True
    assert registry.list_providers() == []
    assert registry.default_provider_name is None
