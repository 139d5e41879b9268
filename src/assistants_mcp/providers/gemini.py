"""Google Gemini provider placeholder.

Gemini is a recognized provider name, but no backend is implemented yet, so
every operation reports Unsupported.
"""

from __future__ import annotations

from assistants_mcp.providers.base import ProviderCapabilities, ProviderMetadata
from assistants_mcp.providers.placeholder import PlaceholderProvider, PlaceholderProviderFactory

GEMINI_METADATA = ProviderMetadata(
    name="gemini",
    display_name="Google Gemini",
    version="0.1.0",
    description="Placeholder: Gemini provider is not yet implemented",
    capabilities=ProviderCapabilities(),
)


class GeminiProvider(PlaceholderProvider):
    metadata = GEMINI_METADATA
    unsupported_reason = "Gemini provider is not yet implemented"


class GeminiProviderFactory(PlaceholderProviderFactory):
    metadata = GEMINI_METADATA
    provider_class = GeminiProvider
