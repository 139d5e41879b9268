"""Assistant providers and the provider registry."""

from assistants_mcp.providers.anthropic import AnthropicProvider, AnthropicProviderFactory
from assistants_mcp.providers.base import (
    OPERATIONS,
    AssistantProvider,
    OperationResult,
    ProviderCapabilities,
    ProviderFactory,
    ProviderMetadata,
    Supported,
    Unsupported,
)
from assistants_mcp.providers.gemini import GeminiProvider, GeminiProviderFactory
from assistants_mcp.providers.openai import (
    OpenAIProvider,
    OpenAIProviderConfig,
    OpenAIProviderFactory,
)
from assistants_mcp.providers.registry import (
    ProviderEntry,
    ProviderRegistry,
    ProviderRegistryConfig,
)

__all__ = [
    "OPERATIONS",
    "AnthropicProvider",
    "AnthropicProviderFactory",
    "AssistantProvider",
    "GeminiProvider",
    "GeminiProviderFactory",
    "OpenAIProvider",
    "OpenAIProviderConfig",
    "OpenAIProviderFactory",
    "OperationResult",
    "ProviderCapabilities",
    "ProviderEntry",
    "ProviderFactory",
    "ProviderMetadata",
    "ProviderRegistry",
    "ProviderRegistryConfig",
    "Supported",
    "Unsupported",
]
