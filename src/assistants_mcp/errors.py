"""Error taxonomy for the assistants MCP server.

Every error raised inside the server derives from AssistantsMCPError and
carries a machine-readable ``category`` plus the JSON-RPC code it maps to.
The dispatcher converts these into JSON-RPC error objects; no new top-level
codes are ever invented, detail goes into ``error.data``.
"""

from __future__ import annotations

from typing import Any, ClassVar

from assistants_mcp.observability.logging import is_debug_mode

# JSON-RPC 2.0 standard error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class AssistantsMCPError(Exception):
    """Base exception for all assistants MCP errors.

    Attributes:
        code: Error code following the mcp:<area>/<kind> pattern
        message: Human-readable error message
        details: Optional additional error context (lands in ``error.data``)
    """

    category: ClassVar[str] = "internal"
    jsonrpc_code: ClassVar[int] = INTERNAL_ERROR

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def error_category(self) -> str:
        """Category reported in ``error.data.category``."""
        return self.category

    def error_code(self) -> int:
        """JSON-RPC code this error maps to."""
        return self.jsonrpc_code

    def to_jsonrpc(self) -> dict[str, Any]:
        """Serialize to a JSON-RPC error object ``{code, message, data}``."""
        return {
            "code": self.error_code(),
            "message": self.message,
            "data": {"category": self.error_category(), "error_code": self.code, **self.details},
        }


class ProtocolError(AssistantsMCPError):
    """Raised for malformed JSON-RPC envelopes.

    Always terminal; the reason is reported verbatim to the caller.
    """

    category = "protocol"

    def __init__(
        self,
        reason: str,
        jsonrpc_code: int = INVALID_REQUEST,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(code="mcp:protocol/invalid_request", message=reason, details=details)
        self.reason = reason
        self._jsonrpc_code = jsonrpc_code

    def error_code(self) -> int:
        return self._jsonrpc_code


class ParseError(ProtocolError):
    """Raised when a message is not valid JSON."""

    def __init__(self, reason: str = "Parse error") -> None:
        super().__init__(reason=reason, jsonrpc_code=PARSE_ERROR)
        self.code = "mcp:protocol/parse_error"


class MethodNotFoundError(ProtocolError):
    """Raised when a JSON-RPC method is not recognized."""

    def __init__(self, method: str) -> None:
        super().__init__(
            reason=f"Method not found: {method}",
            jsonrpc_code=METHOD_NOT_FOUND,
            details={"method": method},
        )
        self.code = "mcp:protocol/method_not_found"
        self.method = method


class ValidationError(AssistantsMCPError):
    """Raised when request or tool arguments fail validation.

    Attributes:
        parameter: Name of the offending parameter, if known
    """

    category = "validation"
    jsonrpc_code = INVALID_PARAMS

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        extra: dict[str, Any] = {"parameter": parameter} if parameter else {}
        super().__init__(
            code="mcp:params/invalid",
            message=message,
            details={**extra, **(details or {})},
        )
        self.parameter = parameter


class InvalidCursorError(AssistantsMCPError):
    """Raised when a pagination cursor is malformed, expired, or foreign."""

    category = "invalid_cursor"
    jsonrpc_code = INVALID_PARAMS

    def __init__(self, cursor: str, reason: str) -> None:
        super().__init__(
            code="mcp:params/invalid_cursor",
            message="Invalid pagination cursor",
            details={
                "cursor": cursor,
                "reason": reason,
                "hint": "Cursor may be malformed, expired, or from a different listing",
            },
        )
        self.cursor = cursor
        self.reason = reason


class NotFoundError(AssistantsMCPError):
    """Raised when an identifier does not resolve.

    Attributes:
        kind: What was looked up (tool, resource, prompt, provider)
        identifier: The identifier that failed to resolve
    """

    category = "not_found"
    jsonrpc_code = INVALID_PARAMS

    def __init__(self, kind: str, identifier: str, details: dict[str, Any] | None = None) -> None:
        message = f"{kind.capitalize()} not found: {identifier}"
        super().__init__(
            code=f"mcp:{kind}/not_found",
            message=message,
            details={"kind": kind, "identifier": identifier, **(details or {})},
        )
        self.kind = kind
        self.identifier = identifier


class ResourceNotFoundError(NotFoundError):
    """Raised by resources/read for an unknown URI."""

    def __init__(self, uri: str, available: list[str] | None = None) -> None:
        super().__init__("resource", uri, details={"available_resources": available or []})
        self.uri = uri


class PromptNotFoundError(NotFoundError):
    """Raised by prompts/get for an unknown prompt name."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        super().__init__("prompt", name, details={"available_prompts": available or []})
        self.name = name


class ToolNotFoundError(NotFoundError):
    """Raised when tools/call names a tool that is not registered.

    Maps to Method not found; ``suggestions`` lists nearby tool names.
    """

    jsonrpc_code = METHOD_NOT_FOUND

    def __init__(self, tool_name: str, suggestions: list[str], available: list[str]) -> None:
        super().__init__(
            "tool",
            tool_name,
            details={"suggestions": suggestions, "available_tools": available},
        )
        if suggestions:
            self.message = f"Tool not found: {tool_name}. Did you mean: {', '.join(suggestions)}?"
        self.args = (self.message,)
        self.tool_name = tool_name
        self.suggestions = suggestions


class ProviderNotFoundError(NotFoundError):
    """Raised when a provider name is well-formed but not configured."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        super().__init__("provider", name, details={"available_providers": available or []})
        self.message = f"Provider not configured: {name}"
        self.args = (self.message,)
        self.provider_name = name


class InvalidProviderNameError(ValidationError):
    """Raised when a requested provider name is malformed."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Invalid provider name '{name}'. Provider names are lowercase alphanumeric "
            "and start with a letter (e.g., 'openai').",
            parameter="provider",
            details={"provider": name},
        )
        self.code = "mcp:provider/invalid_name"
        self.provider_name = name


class UnsupportedOperationError(AssistantsMCPError):
    """Raised when a provider does not implement a requested capability.

    Distinct from NotFoundError: the operation exists, the provider lacks it.
    """

    category = "unsupported_operation"

    def __init__(self, provider: str, operation: str, reason: str | None = None) -> None:
        message = f"Operation '{operation}' is not supported by provider '{provider}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            code="mcp:provider/unsupported_operation",
            message=message,
            details={"provider": provider, "operation": operation, "reason": reason},
        )
        self.provider = provider
        self.operation = operation
        self.reason = reason


class UpstreamError(AssistantsMCPError):
    """Raised when the provider's backend call fails.

    Single attempt; the original status and message are preserved.

    Attributes:
        provider: Provider name
        status: Upstream HTTP status, or None for transport failures
        upstream_message: Message reported by the upstream API
        reason: unauthorized, not_found, rate_limited, timeout, unavailable, upstream_error
    """

    category = "upstream"

    def __init__(
        self,
        provider: str,
        status: int | None,
        upstream_message: str,
        reason: str = "upstream_error",
        details: dict[str, Any] | None = None,
    ) -> None:
        status_text = f" (HTTP {status})" if status is not None else ""
        super().__init__(
            code=f"mcp:upstream/{reason}",
            message=f"Provider '{provider}' request failed{status_text}: {upstream_message}",
            details={
                "provider": provider,
                "status": status,
                "upstream_message": upstream_message,
                "reason": reason,
                **(details or {}),
            },
        )
        self.provider = provider
        self.status = status
        self.upstream_message = upstream_message
        self.reason = reason


class ToolExecutionError(AssistantsMCPError):
    """Raised when a tool's provider call fails.

    Wraps the cause with the tool name and category. The cause's category and
    JSON-RPC code are kept so callers can still tell an unsupported
    operation from an upstream failure.
    """

    def __init__(self, tool_name: str, tool_category: str, cause: Exception) -> None:
        cause_details = cause.details if isinstance(cause, AssistantsMCPError) else {}
        if isinstance(cause, AssistantsMCPError):
            cause_message = cause.message
        else:
            cause_message = str(cause) if is_debug_mode() else "Internal error"
        super().__init__(
            code="mcp:tool/execution_failed",
            message=f"[{tool_name}] Execution failed: {cause_message}",
            details={**cause_details, "tool": tool_name, "tool_category": tool_category},
        )
        self.tool_name = tool_name
        self.tool_category = tool_category
        self.cause = cause

    def error_category(self) -> str:
        if isinstance(self.cause, AssistantsMCPError):
            return self.cause.error_category()
        return "internal"

    def error_code(self) -> int:
        if isinstance(self.cause, AssistantsMCPError):
            return self.cause.error_code()
        return INTERNAL_ERROR


class ConfigurationError(AssistantsMCPError):
    """Raised for server or provider misconfiguration."""

    category = "configuration"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(code="mcp:config/invalid", message=message, details=details)


class ProviderConfigurationError(ConfigurationError):
    """Raised when a provider cannot be registered or initialized."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(
            f"Provider '{provider}' configuration error: {reason}",
            details={"provider": provider, "reason": reason},
        )
        self.code = "mcp:provider/configuration"
        self.provider = provider
        self.reason = reason


class NoProviderConfiguredError(ConfigurationError):
    """Raised when no provider name was given and no default exists."""

    def __init__(self) -> None:
        super().__init__("No provider specified and no default provider is configured")
        self.code = "mcp:provider/no_default"


class DuplicateToolError(AssistantsMCPError):
    """Raised at construction time when a tool name is registered twice."""

    category = "registration"

    def __init__(self, tool_name: str, reason: str = "already registered") -> None:
        super().__init__(
            code="mcp:tool/duplicate",
            message=f"Tool '{tool_name}' cannot be registered: {reason}",
            details={"tool": tool_name},
        )
        self.tool_name = tool_name
