"""MCP server: JSON-RPC 2.0 dispatcher plus the stdio transport.

``MCPServer.handle`` takes one decoded message and returns the response
dict, or None for notifications. It never raises; every failure becomes a
JSON-RPC error whose ``data.category`` tells clients what went wrong.
``serve_stdio`` reads one message per line from stdin and writes one
response per line to stdout.
"""

from __future__ import annotations

import asyncio
import io
import json
import sys
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from assistants_mcp import __version__
from assistants_mcp.errors import (
    INTERNAL_ERROR,
    AssistantsMCPError,
    InvalidProviderNameError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    ToolNotFoundError,
    ValidationError,
)
from assistants_mcp.mcp.pagination import paginate
from assistants_mcp.mcp.protocol import (
    SUPPORTED_PROTOCOL_VERSIONS,
    CallToolRequestParams,
    CallToolResult,
    CompleteRequestParams,
    CompleteResult,
    Completion,
    GetPromptRequestParams,
    GetPromptResult,
    Implementation,
    InitializeResult,
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    ListPromptsResult,
    ListResourcesResult,
    ListToolsResult,
    PaginatedRequestParams,
    Prompt,
    PromptArgument,
    PromptMessage,
    ReadResourceRequestParams,
    ReadResourceResult,
    Resource,
    ResourceContents,
    TextContent,
    Tool,
)
from assistants_mcp.observability import bind_context, get_logger, is_debug_mode, unbind_context
from assistants_mcp.tools.registry import create_tool_registry, suggest_tool_names

if TYPE_CHECKING:
    from assistants_mcp.context import ServerContext

logger = get_logger(__name__)

SERVER_NAME = "openai-assistants-mcp"
SERVER_TITLE = "OpenAI Assistants MCP Server"

DEFAULT_INSTRUCTIONS = (
    "Tools manage the Assistants API objects of the configured provider: assistants, "
    "threads, messages, runs and run steps. Pass _meta.provider on tools/call to use a "
    "provider other than the default. Resources hold assistant templates and reference docs."
)

_INTERNAL_ERROR_MESSAGE = "Internal error"

ParamsT = TypeVar("ParamsT", bound=BaseModel)
MethodHandler = Callable[[dict[str, Any], "str | int"], Awaitable[dict[str, Any]]]


def _request_id(message: dict[str, Any]) -> str | int | None:
    """The message id if it is usable in a response, else None."""
    rid = message.get("id")
    if isinstance(rid, bool) or not isinstance(rid, (str, int)):
        return None
    return rid


def error_response(rid: str | int | None, error: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rid, "error": error}


def _parse_params(model: type[ParamsT], params: dict[str, Any]) -> ParamsT:
    try:
        return model.model_validate(params)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationError(
            f"Invalid params{f' at {location!r}' if location else ''}: {first['msg']}",
            parameter=location,
        ) from e


class MCPServer:
    """MCP dispatcher over an injected ServerContext.

    Supports initialize, ping, tools/list, tools/call, resources/list,
    resources/read, prompts/list, prompts/get, and completion/complete.
    """

    def __init__(
        self,
        context: ServerContext,
        *,
        name: str = SERVER_NAME,
        version: str = __version__,
        title: str | None = SERVER_TITLE,
        instructions: str | None = DEFAULT_INSTRUCTIONS,
    ) -> None:
        """Initialize the MCP server.

        Args:
            context: Registries, catalogs, and metrics built by ``build_context``.
            name: Server programmatic name.
            version: Server version string.
            title: Optional human-readable title.
            instructions: Optional instructions for the client/LLM.
        """
        self._context = context
        self._server_info = Implementation(name=name, version=version, title=title)
        self._instructions = instructions
        self._methods: dict[str, MethodHandler] = {
            "initialize": self._handle_initialize,
            "ping": self._handle_ping,
            "tools/list": self._handle_tools_list,
            "tools/call": self._handle_tools_call,
            "resources/list": self._handle_resources_list,
            "resources/read": self._handle_resources_read,
            "prompts/list": self._handle_prompts_list,
            "prompts/get": self._handle_prompts_get,
            "completion/complete": self._handle_completion,
        }

    @property
    def context(self) -> ServerContext:
        return self._context

    @property
    def methods(self) -> list[str]:
        return list(self._methods)

    # --- Entry points ---

    async def handle_line(self, line: str) -> dict[str, Any] | None:
        """Decode one JSON text and handle it; undecodable text gets a parse error."""
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            self._context.metrics.increment_counter("mcp_parse_errors_total")
            logger.warning("mcp.request.parse_error", error=str(e))
            return error_response(None, ParseError().to_jsonrpc())
        return await self.handle(message)

    async def handle(self, message: Any) -> dict[str, Any] | None:
        """Handle one decoded JSON-RPC message.

        Returns:
            The response dict, or None for notifications.
        """
        if isinstance(message, list):
            return self._reject(None, ProtocolError("Batch requests are not supported"))
        if not isinstance(message, dict):
            return self._reject(None, ProtocolError("Invalid Request: expected a JSON object"))

        if "id" not in message:
            try:
                notification = JSONRPCNotification.model_validate(message)
            except PydanticValidationError as e:
                return self._reject(None, ProtocolError(f"Invalid Request: {_first_error(e)}"))
            self._handle_notification(notification)
            return None

        try:
            request = JSONRPCRequest.model_validate(message)
        except PydanticValidationError as e:
            return self._reject(
                _request_id(message), ProtocolError(f"Invalid Request: {_first_error(e)}")
            )
        return await self._dispatch(request)

    # --- Dispatch ---

    async def _dispatch(self, request: JSONRPCRequest) -> dict[str, Any]:
        rid = request.id
        method = request.method
        known = method in self._methods
        metric_method = method if known else "unknown"
        bind_context(request_id=rid, method=method)
        logger.debug("mcp.request.received")
        start_time = time.perf_counter()
        status = "error"
        try:
            handler = self._methods.get(method)
            if handler is None:
                raise MethodNotFoundError(method)
            result = await handler(request.params or {}, rid)
            status = "ok"
            return JSONRPCResponse(id=rid, result=result).model_dump(by_alias=True)
        except AssistantsMCPError as e:
            logger.info(
                "mcp.request.failed",
                error_code=e.code,
                category=e.error_category(),
                message=e.message,
            )
            return error_response(rid, e.to_jsonrpc())
        except Exception as e:
            logger.exception("mcp.request.error", error=str(e), error_type=type(e).__name__)
            message = str(e) if is_debug_mode() else _INTERNAL_ERROR_MESSAGE
            return error_response(
                rid,
                {"code": INTERNAL_ERROR, "message": message, "data": {"category": "internal"}},
            )
        finally:
            duration = time.perf_counter() - start_time
            metrics = self._context.metrics
            metrics.increment_counter(
                "mcp_requests_total", {"method": metric_method, "status": status}
            )
            metrics.observe_histogram(
                "mcp_request_duration_seconds", duration, {"method": metric_method}
            )
            logger.debug(
                "mcp.request.completed", status=status, duration_ms=round(duration * 1000, 2)
            )
            unbind_context("request_id", "method")

    def _reject(self, rid: str | int | None, error: ProtocolError) -> dict[str, Any]:
        self._context.metrics.increment_counter(
            "mcp_requests_total", {"method": "invalid", "status": "error"}
        )
        logger.warning("mcp.request.invalid", reason=error.reason)
        return error_response(rid, error.to_jsonrpc())

    def _handle_notification(self, notification: JSONRPCNotification) -> None:
        """Handle notification (no response)."""
        self._context.metrics.increment_counter(
            "mcp_notifications_total", {"method": notification.method}
        )
        if notification.method == "notifications/initialized":
            logger.debug("mcp.initialized", message="Client sent initialized")
        elif notification.method == "notifications/cancelled":
            logger.debug("mcp.cancelled", params=notification.params)
        else:
            logger.debug(
                "mcp.notification", method=notification.method, params=notification.params
            )

    # --- Methods ---

    def _get_capabilities(self) -> dict[str, Any]:
        """Server capabilities for initialize result."""
        return {
            "tools": {"listChanged": False},
            "resources": {"subscribe": False, "listChanged": False},
            "prompts": {"listChanged": False},
            "completions": {},
        }

    async def _handle_initialize(self, params: dict[str, Any], rid: str | int) -> dict[str, Any]:
        """Negotiate the protocol version: echo a supported one, else answer the latest."""
        requested = params.get("protocolVersion")
        if isinstance(requested, str) and requested in SUPPORTED_PROTOCOL_VERSIONS:
            version = requested
        else:
            version = SUPPORTED_PROTOCOL_VERSIONS[0]
        logger.info(
            "mcp.initialize",
            requested_version=requested,
            protocol_version=version,
            client_info=params.get("clientInfo"),
        )
        result = InitializeResult(
            protocolVersion=version,
            capabilities=self._get_capabilities(),
            serverInfo=self._server_info,
            instructions=self._instructions,
        )
        return result.model_dump(by_alias=True, exclude_none=True)

    async def _handle_ping(self, params: dict[str, Any], rid: str | int) -> dict[str, Any]:
        return {}

    async def _handle_tools_list(self, params: dict[str, Any], rid: str | int) -> dict[str, Any]:
        parsed = _parse_params(PaginatedRequestParams, params)
        page = paginate(self._context.tool_definitions, parsed.cursor, self._context.page_size)
        tools = [
            Tool(
                name=definition.name,
                title=definition.title,
                description=definition.description,
                inputSchema=definition.input_schema,
                annotations=definition.annotations,
            )
            for definition in page.items
        ]
        result = ListToolsResult(tools=tools, nextCursor=page.next_cursor)
        return result.model_dump(by_alias=True, exclude_none=True)

    async def _handle_tools_call(self, params: dict[str, Any], rid: str | int) -> dict[str, Any]:
        """Run a tool against the selected provider; the result is JSON text content."""
        parsed = _parse_params(CallToolRequestParams, params)
        names = [definition.name for definition in self._context.tool_definitions]
        if parsed.name not in names:
            suggestions = suggest_tool_names(parsed.name, names)
            logger.warning("mcp.tool.not_found", tool=parsed.name, suggestions=suggestions)
            raise ToolNotFoundError(parsed.name, suggestions, sorted(names))

        provider_name = (parsed.meta or {}).get("provider")
        if provider_name is not None and not isinstance(provider_name, str):
            raise InvalidProviderNameError(str(provider_name))
        provider = self._context.provider_registry.select_provider(provider_name)
        registry = create_tool_registry(provider, request_id=rid)

        metrics = self._context.metrics
        start_time = time.perf_counter()
        status = "error"
        try:
            result = await registry.execute(parsed.name, parsed.arguments)
            status = "ok"
        finally:
            duration = time.perf_counter() - start_time
            metrics.increment_counter(
                "mcp_tool_calls_total", {"tool": parsed.name, "status": status}
            )
            metrics.observe_histogram("mcp_tool_duration_seconds", duration, {"tool": parsed.name})

        logger.info(
            "mcp.tool.executed",
            tool=parsed.name,
            provider=provider.name,
            duration_ms=round(duration * 1000, 2),
        )
        return CallToolResult(
            content=[TextContent(text=json.dumps(result))],
            isError=False,
        ).model_dump(by_alias=True, exclude_none=True)

    async def _handle_resources_list(
        self, params: dict[str, Any], rid: str | int
    ) -> dict[str, Any]:
        parsed = _parse_params(PaginatedRequestParams, params)
        page = paginate(self._context.resources.list(), parsed.cursor, self._context.page_size)
        resources = [
            Resource(
                uri=resource.uri,
                name=resource.name,
                description=resource.description,
                mimeType=resource.mime_type,
            )
            for resource in page.items
        ]
        result = ListResourcesResult(resources=resources, nextCursor=page.next_cursor)
        return result.model_dump(by_alias=True, exclude_none=True)

    async def _handle_resources_read(
        self, params: dict[str, Any], rid: str | int
    ) -> dict[str, Any]:
        parsed = _parse_params(ReadResourceRequestParams, params)
        content = self._context.resources.read(parsed.uri)
        result = ReadResourceResult(
            contents=[
                ResourceContents(uri=content.uri, mimeType=content.mime_type, text=content.text)
            ]
        )
        return result.model_dump(by_alias=True, exclude_none=True)

    async def _handle_prompts_list(self, params: dict[str, Any], rid: str | int) -> dict[str, Any]:
        parsed = _parse_params(PaginatedRequestParams, params)
        page = paginate(self._context.prompts.list(), parsed.cursor, self._context.page_size)
        prompts = [
            Prompt(
                name=prompt.name,
                title=prompt.title,
                description=prompt.description,
                arguments=[
                    PromptArgument(
                        name=arg.name, description=arg.description, required=arg.required
                    )
                    for arg in prompt.arguments
                ],
            )
            for prompt in page.items
        ]
        result = ListPromptsResult(prompts=prompts, nextCursor=page.next_cursor)
        return result.model_dump(by_alias=True, exclude_none=True)

    async def _handle_prompts_get(self, params: dict[str, Any], rid: str | int) -> dict[str, Any]:
        parsed = _parse_params(GetPromptRequestParams, params)
        rendered = self._context.prompts.render(parsed.name, parsed.arguments)
        result = GetPromptResult(
            description=rendered.description,
            messages=[PromptMessage(role="user", content=TextContent(text=rendered.text))],
        )
        return result.model_dump(by_alias=True, exclude_none=True)

    async def _handle_completion(self, params: dict[str, Any], rid: str | int) -> dict[str, Any]:
        parsed = _parse_params(CompleteRequestParams, params)
        completion = self._context.completion_engine.complete(parsed.ref, parsed.argument)
        result = CompleteResult(
            completions=[
                Completion(
                    values=completion.values,
                    total=completion.total,
                    hasMore=completion.has_more,
                )
            ]
        )
        return result.model_dump(by_alias=True, exclude_none=True)

    # --- stdio transport ---

    async def serve_stdio(
        self,
        stdin: io.TextIOBase | None = None,
        stdout: io.TextIOBase | None = None,
    ) -> None:
        """Run the server over stdio (stdin/stdout). Blocks until stdin closes.

        A producer task reads lines in a worker thread; requests are handled
        one at a time in the order they were received. Blank lines are skipped.

        Args:
            stdin: Optional input stream (default: sys.stdin).
            stdout: Optional output stream (default: sys.stdout).
        """
        _stdin = stdin if stdin is not None else sys.stdin
        _stdout = stdout if stdout is not None else sys.stdout
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=128)

        def read_stdin() -> str | None:
            try:
                line = _stdin.readline()
            except (EOFError, OSError) as e:
                logger.debug("mcp.transport.closed", reason=str(e))
                return None
            if not line:
                return None
            return line.rstrip("\n\r")

        async def producer() -> None:
            while True:
                line = await loop.run_in_executor(None, read_stdin)
                await queue.put(line)
                if line is None:
                    break

        async def consumer() -> None:
            while True:
                line = await queue.get()
                if line is None:
                    break
                if not line.strip():
                    continue
                response = await self.handle_line(line)
                if response is not None:
                    _stdout.write(json.dumps(response) + "\n")
                    _stdout.flush()

        logger.info("mcp.transport.stdio.started", server=self._server_info.name)
        await asyncio.gather(producer(), consumer())
        logger.info("mcp.transport.stdio.stopped")

    run_stdio = serve_stdio


def _first_error(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]
