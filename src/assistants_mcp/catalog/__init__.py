"""Static resource and prompt catalogs."""

from assistants_mcp.catalog.prompts import (
    PROMPT_DEFINITIONS,
    PromptArgumentSpec,
    PromptCatalog,
    PromptTemplate,
    RenderedPrompt,
)
from assistants_mcp.catalog.resources import (
    RESOURCE_DEFINITIONS,
    CatalogResource,
    ResourceCatalog,
    ResourceContent,
)

__all__ = [
    "PROMPT_DEFINITIONS",
    "RESOURCE_DEFINITIONS",
    "CatalogResource",
    "PromptArgumentSpec",
    "PromptCatalog",
    "PromptTemplate",
    "RenderedPrompt",
    "ResourceCatalog",
    "ResourceContent",
]
