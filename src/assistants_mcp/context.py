"""Server context: everything a dispatcher needs, built once at startup.

``build_context`` initializes the provider registry, loads the static
catalogs, and creates the metrics collector. The context is injected into
``MCPServer`` and ``create_app``; nothing in it is mutated while requests
are served.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from assistants_mcp.catalog import PromptCatalog, ResourceCatalog
from assistants_mcp.config import Settings
from assistants_mcp.mcp.completion import CompletionEngine
from assistants_mcp.mcp.pagination import DEFAULT_PAGE_SIZE
from assistants_mcp.observability import MetricsCollector, get_logger
from assistants_mcp.providers import (
    AnthropicProviderFactory,
    GeminiProviderFactory,
    OpenAIProviderFactory,
    ProviderFactory,
    ProviderRegistry,
)
from assistants_mcp.tools.definitions import TOOL_DEFINITIONS, ToolDefinition

logger = get_logger(__name__)


@dataclass
class ServerContext:
    """Read-only registries and catalogs shared by every request."""

    provider_registry: ProviderRegistry
    resources: ResourceCatalog = field(default_factory=ResourceCatalog)
    prompts: PromptCatalog = field(default_factory=PromptCatalog)
    tool_definitions: tuple[ToolDefinition, ...] = TOOL_DEFINITIONS
    metrics: MetricsCollector = field(default_factory=MetricsCollector)
    page_size: int = DEFAULT_PAGE_SIZE
    completion_engine: CompletionEngine = field(init=False)

    def __post_init__(self) -> None:
        self.completion_engine = CompletionEngine(self.prompts, self.resources)

    async def aclose(self) -> None:
        await self.provider_registry.shutdown()


def default_factories() -> list[ProviderFactory]:
    """Factories for every built-in provider."""
    return [OpenAIProviderFactory(), AnthropicProviderFactory(), GeminiProviderFactory()]


async def build_context(
    settings: Settings | None = None,
    *,
    factories: Iterable[ProviderFactory] | None = None,
) -> ServerContext:
    """Initialize providers from ``settings`` and assemble the context.

    Raises:
        ConfigurationError: If a provider cannot be registered.
    """
    settings = settings or Settings.from_env()
    registry = ProviderRegistry(settings.to_registry_config())
    for factory in default_factories() if factories is None else factories:
        registry.register_factory(factory)
    await registry.initialize()

    context = ServerContext(provider_registry=registry, page_size=settings.page_size)
    logger.info(
        "mcp.context.built",
        providers=registry.list_providers(),
        default_provider=registry.default_provider_name,
        tools=len(context.tool_definitions),
        resources=len(context.resources),
        prompts=len(context.prompts),
        page_size=context.page_size,
    )
    return context
