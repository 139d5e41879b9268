"""Static resource catalog: assistant templates, reference docs, and workflow examples.

Resource bodies ship as package data under ``catalog/data`` and are loaded
once when the catalog is built. JSON bodies are re-serialized with two-space
indentation so every read returns the same text.
"""

from __future__ import annotations

import json
from importlib import resources as importlib_resources

from pydantic import BaseModel, ConfigDict, Field

from assistants_mcp.errors import ResourceNotFoundError

JSON_MIME_TYPE = "application/json"
MARKDOWN_MIME_TYPE = "text/markdown"


class CatalogResource(BaseModel):
    """Metadata for one catalog resource."""

    model_config = ConfigDict(frozen=True)

    uri: str
    name: str
    description: str
    mime_type: str = Field(alias="mimeType")
    path: str = Field(exclude=True)


class ResourceContent(BaseModel):
    """Text body of a resource."""

    model_config = ConfigDict(frozen=True)

    uri: str
    mime_type: str
    text: str


RESOURCE_DEFINITIONS: tuple[CatalogResource, ...] = (
    CatalogResource(
        uri="assistant://templates/coding-assistant",
        name="Coding Assistant Template",
        description=(
            "Template for a coding assistant with code review, debugging, and "
            "programming guidance, with code interpreter and file search enabled."
        ),
        mimeType=JSON_MIME_TYPE,
        path="templates/coding-assistant.json",
    ),
    CatalogResource(
        uri="assistant://templates/data-analyst",
        name="Data Analyst Template",
        description="Template for a data analysis assistant with statistical and visualization capabilities",
        mimeType=JSON_MIME_TYPE,
        path="templates/data-analyst.json",
    ),
    CatalogResource(
        uri="assistant://templates/customer-support",
        name="Customer Support Template",
        description="Template for a customer support assistant with friendly and helpful responses",
        mimeType=JSON_MIME_TYPE,
        path="templates/customer-support.json",
    ),
    CatalogResource(
        uri="docs://openai-assistants-api",
        name="Assistants API Reference",
        description="API reference with ID formats, parameters, and the tool list",
        mimeType=MARKDOWN_MIME_TYPE,
        path="docs/openai-assistants-api.md",
    ),
    CatalogResource(
        uri="docs://best-practices",
        name="Best Practices Guide",
        description="Guidelines for assistant design, performance, security, and cost",
        mimeType=MARKDOWN_MIME_TYPE,
        path="docs/best-practices.md",
    ),
    CatalogResource(
        uri="docs://troubleshooting/common-issues",
        name="Troubleshooting Guide",
        description="Common issues and solutions when working with assistants",
        mimeType=MARKDOWN_MIME_TYPE,
        path="docs/troubleshooting.md",
    ),
    CatalogResource(
        uri="examples://workflows/basic-workflow",
        name="Basic Workflow Example",
        description="Step-by-step workflow: create an assistant and thread, add a message, run, and read the reply",
        mimeType=MARKDOWN_MIME_TYPE,
        path="workflows/basic-workflow.md",
    ),
    CatalogResource(
        uri="examples://workflows/advanced-workflow",
        name="Advanced Workflow Example",
        description="Workflow with tools, tool resources, tool call outputs, run steps, and error recovery",
        mimeType=MARKDOWN_MIME_TYPE,
        path="workflows/advanced-workflow.md",
    ),
    CatalogResource(
        uri="examples://workflows/batch-processing",
        name="Batch Processing Workflow",
        description="Processing several independent tasks with concurrent runs",
        mimeType=MARKDOWN_MIME_TYPE,
        path="workflows/batch-processing.md",
    ),
)


def _load_text(resource: CatalogResource) -> str:
    raw = (
        importlib_resources.files("assistants_mcp.catalog")
        .joinpath("data", resource.path)
        .read_text(encoding="utf-8")
    )
    if resource.mime_type == JSON_MIME_TYPE:
        return json.dumps(json.loads(raw), indent=2)
    return raw


class ResourceCatalog:
    """Read-only catalog of resources, in definition order."""

    def __init__(self, definitions: tuple[CatalogResource, ...] = RESOURCE_DEFINITIONS) -> None:
        self._resources = {resource.uri: resource for resource in definitions}
        self._contents = {resource.uri: _load_text(resource) for resource in definitions}

    def __len__(self) -> int:
        return len(self._resources)

    def list(self) -> list[CatalogResource]:
        return list(self._resources.values())

    def uris(self) -> list[str]:
        return list(self._resources)

    def get(self, uri: str) -> CatalogResource | None:
        return self._resources.get(uri)

    def read(self, uri: str) -> ResourceContent:
        """Return the body of ``uri``.

        Raises:
            ResourceNotFoundError: If ``uri`` is not in the catalog; lists the available URIs.
        """
        resource = self._resources.get(uri)
        if resource is None:
            raise ResourceNotFoundError(uri, self.uris())
        return ResourceContent(uri=uri, mime_type=resource.mime_type, text=self._contents[uri])
