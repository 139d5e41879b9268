"""MCP protocol types.

JSON-RPC 2.0 and MCP message types for initialize, tools, resources,
prompts, and completion. Models use extra="ignore" for forward
compatibility with future protocol fields.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from assistants_mcp.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
)

# Latest protocol version first; initialize echoes any listed version.
SUPPORTED_PROTOCOL_VERSIONS = ("2025-11-25", "2025-06-18", "2025-03-26", "2024-11-05")
MCP_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[0]

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "MCP_PROTOCOL_VERSION",
    "PARSE_ERROR",
    "SUPPORTED_PROTOCOL_VERSIONS",
]


def _mcp_model_config() -> ConfigDict:
    """Pydantic config for MCP models: allow extra fields for forward compatibility."""
    return ConfigDict(extra="ignore", populate_by_name=True)


# --- JSON-RPC 2.0 ---


class JSONRPCError(BaseModel):
    """JSON-RPC 2.0 error object."""

    model_config = _mcp_model_config()

    code: int = Field(description="Error code (integer)")
    message: str = Field(description="Short error description")
    data: Any = Field(default=None, description="Optional additional data")


class JSONRPCRequest(BaseModel):
    """JSON-RPC 2.0 request (has id, expects response)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, strict=True)

    jsonrpc: Literal["2.0"]
    id: str | int = Field(description="Request id (must not be null)")
    method: str = Field(description="Method name")
    params: dict[str, Any] | None = Field(default=None)


class JSONRPCResponse(BaseModel):
    """JSON-RPC 2.0 success response."""

    model_config = _mcp_model_config()

    jsonrpc: Literal["2.0"] = Field(default="2.0")
    id: str | int = Field(description="Same id as request")
    result: dict[str, Any] = Field(description="Result payload")


class JSONRPCErrorResponse(BaseModel):
    """JSON-RPC 2.0 error response."""

    model_config = _mcp_model_config()

    jsonrpc: Literal["2.0"] = Field(default="2.0")
    id: str | int | None = Field(description="Same id as request, or null")
    error: JSONRPCError = Field(description="Error object")


class JSONRPCNotification(BaseModel):
    """JSON-RPC 2.0 notification (no id, no response)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, strict=True)

    jsonrpc: Literal["2.0"]
    method: str = Field(description="Method name")
    params: dict[str, Any] | None = Field(default=None)


# --- Implementation (clientInfo / serverInfo) ---


class Implementation(BaseModel):
    """MCP implementation info (client or server)."""

    model_config = _mcp_model_config()

    name: str = Field(description="Programmatic name")
    version: str = Field(description="Version string")
    title: str | None = Field(default=None, description="Human-readable title")
    description: str | None = Field(default=None)


# --- Initialize ---


class InitializeRequestParams(BaseModel):
    """Params for initialize request."""

    model_config = _mcp_model_config()

    protocol_version: str = Field(alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=dict)
    client_info: Implementation | None = Field(default=None, alias="clientInfo")


class InitializeResult(BaseModel):
    """Result of initialize (server response)."""

    model_config = _mcp_model_config()

    protocol_version: str = Field(alias="protocolVersion", default=MCP_PROTOCOL_VERSION)
    capabilities: dict[str, Any] = Field(default_factory=dict)
    server_info: Implementation = Field(alias="serverInfo")
    instructions: str | None = Field(default=None)


class PaginatedRequestParams(BaseModel):
    """Params shared by tools/list, resources/list, and prompts/list."""

    model_config = _mcp_model_config()

    cursor: str | None = Field(default=None)


# --- Tools ---


class Tool(BaseModel):
    """MCP tool definition (tools/list item)."""

    model_config = _mcp_model_config()

    name: str = Field(description="Unique tool name")
    description: str = Field(description="Human-readable description")
    input_schema: dict[str, Any] = Field(
        alias="inputSchema",
        description="JSON Schema for parameters (object, not null)",
    )
    title: str | None = Field(default=None)
    annotations: dict[str, Any] | None = Field(default=None)


class TextContent(BaseModel):
    """Text content item in tool and prompt results."""

    model_config = _mcp_model_config()

    type: Literal["text"] = Field(default="text")
    text: str = Field(description="Text content")


class CallToolRequestParams(BaseModel):
    """Params for tools/call request."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, strict=True)

    name: str = Field(description="Tool name")
    arguments: dict[str, Any] = Field(default_factory=dict, description="Tool arguments")
    meta: dict[str, Any] | None = Field(default=None, alias="_meta")


class CallToolResult(BaseModel):
    """Result of tools/call (content + isError)."""

    model_config = _mcp_model_config()

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")


class ListToolsResult(BaseModel):
    """Result of tools/list."""

    model_config = _mcp_model_config()

    tools: list[Tool] = Field(default_factory=list)
    next_cursor: str | None = Field(default=None, alias="nextCursor")


# --- Resources ---


class Resource(BaseModel):
    """MCP resource descriptor (resources/list item)."""

    model_config = _mcp_model_config()

    uri: str
    name: str
    description: str | None = Field(default=None)
    mime_type: str | None = Field(default=None, alias="mimeType")


class ResourceContents(BaseModel):
    """Text contents of a resource (resources/read item)."""

    model_config = _mcp_model_config()

    uri: str
    mime_type: str | None = Field(default=None, alias="mimeType")
    text: str


class ReadResourceRequestParams(BaseModel):
    """Params for resources/read."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, strict=True)

    uri: str


class ReadResourceResult(BaseModel):
    """Result of resources/read."""

    model_config = _mcp_model_config()

    contents: list[ResourceContents] = Field(default_factory=list)


class ListResourcesResult(BaseModel):
    """Result of resources/list."""

    model_config = _mcp_model_config()

    resources: list[Resource] = Field(default_factory=list)
    next_cursor: str | None = Field(default=None, alias="nextCursor")


# --- Prompts ---


class PromptArgument(BaseModel):
    """Argument accepted by a prompt template."""

    model_config = _mcp_model_config()

    name: str
    description: str | None = Field(default=None)
    required: bool = Field(default=False)


class Prompt(BaseModel):
    """MCP prompt descriptor (prompts/list item)."""

    model_config = _mcp_model_config()

    name: str
    title: str | None = Field(default=None)
    description: str | None = Field(default=None)
    arguments: list[PromptArgument] = Field(default_factory=list)


class PromptMessage(BaseModel):
    """A message produced by prompts/get."""

    model_config = _mcp_model_config()

    role: Literal["user", "assistant"]
    content: TextContent


class GetPromptRequestParams(BaseModel):
    """Params for prompts/get."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, strict=True)

    name: str
    arguments: dict[str, str] = Field(default_factory=dict)


class GetPromptResult(BaseModel):
    """Result of prompts/get."""

    model_config = _mcp_model_config()

    description: str | None = Field(default=None)
    messages: list[PromptMessage] = Field(default_factory=list)


class ListPromptsResult(BaseModel):
    """Result of prompts/list."""

    model_config = _mcp_model_config()

    prompts: list[Prompt] = Field(default_factory=list)
    next_cursor: str | None = Field(default=None, alias="nextCursor")


# --- Completion ---


class CompletionReference(BaseModel):
    """Reference to the prompt or resource being completed."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, strict=True)

    type: str
    name: str | None = Field(default=None)
    uri: str | None = Field(default=None)


class CompletionArgument(BaseModel):
    """Argument being completed and its partial value."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, strict=True)

    name: str
    value: str = Field(default="")


class CompleteRequestParams(BaseModel):
    """Params for completion/complete."""

    model_config = _mcp_model_config()

    ref: CompletionReference
    argument: CompletionArgument


class Completion(BaseModel):
    """Completion values; at most 100 per response."""

    model_config = _mcp_model_config()

    values: list[str] = Field(default_factory=list, max_length=100)
    total: int | None = Field(default=None)
    has_more: bool | None = Field(default=None, alias="hasMore")


class CompleteResult(BaseModel):
    """Result of completion/complete."""

    model_config = _mcp_model_config()

    completions: list[Completion] = Field(default_factory=list)
