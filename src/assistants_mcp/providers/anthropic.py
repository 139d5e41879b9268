"""Anthropic provider placeholder.

Anthropic has no Assistants-style API (persistent assistants, threads, runs),
so every operation reports Unsupported.
"""

from __future__ import annotations

from assistants_mcp.providers.base import ProviderCapabilities, ProviderMetadata
from assistants_mcp.providers.placeholder import PlaceholderProvider, PlaceholderProviderFactory

ANTHROPIC_METADATA = ProviderMetadata(
    name="anthropic",
    display_name="Anthropic",
    version="0.1.0",
    description="Placeholder: Anthropic does not expose an Assistants API equivalent",
    capabilities=ProviderCapabilities(),
)


class AnthropicProvider(PlaceholderProvider):
    metadata = ANTHROPIC_METADATA
    unsupported_reason = "Anthropic does not provide an Assistants API equivalent"


class AnthropicProviderFactory(PlaceholderProviderFactory):
    metadata = ANTHROPIC_METADATA
    provider_class = AnthropicProvider
