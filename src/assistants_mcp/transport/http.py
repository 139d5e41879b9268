"""FastAPI transport for the MCP server.

This module exposes the same dispatcher as the stdio transport over HTTP:
- POST /mcp takes one JSON-RPC message and returns one JSON-RPC response
- Notifications are acknowledged with 202 and an empty body
- GET /health is a liveness probe
- GET /metrics returns Prometheus text from the context's collector

Example:
    >>> from assistants_mcp.transport.http import create_app
    >>> app = create_app()  # context is built from the environment at startup
    >>>
    >>> # Run with: uvicorn assistants_mcp.transport.http:create_app --factory --port 8000
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from assistants_mcp import __version__
from assistants_mcp.config import Settings
from assistants_mcp.context import ServerContext, build_context
from assistants_mcp.errors import ParseError
from assistants_mcp.mcp.server import MCPServer, error_response
from assistants_mcp.observability import get_logger, is_debug_mode

logger = get_logger(__name__)

MCP_PATH = "/mcp"


async def read_body(request: Request, max_size: int) -> bytes:
    """Read the request body, failing with 413 once it exceeds ``max_size``.

    Raises:
        HTTPException: If Content-Length or the streamed body is too large (413)
    """
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        logger.warning(
            "mcp.http.size_exceeded", content_length=int(content_length), max_size=max_size
        )
        raise HTTPException(
            status_code=413,
            detail=f"Request size ({content_length} bytes) exceeds maximum ({max_size} bytes)",
        )

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_size:
            logger.warning("mcp.http.size_exceeded", actual_size=len(body), max_size=max_size)
            raise HTTPException(
                status_code=413,
                detail=f"Request size ({len(body)} bytes) exceeds maximum ({max_size} bytes)",
            )
    return bytes(body)


def create_app(
    context: ServerContext | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        context: Prebuilt server context. When omitted, one is built from
            ``settings`` at startup and closed at shutdown.
        settings: Settings used for the body size limit and, without a
            context, for building one. Defaults to ``Settings.from_env()``.

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings.from_env()
    max_request_size = settings.max_request_size

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = app.state.server is None
        if owned:
            app.state.server = MCPServer(await build_context(settings))
        logger.info("mcp.http.started", max_request_size=max_request_size)
        try:
            yield
        finally:
            if owned:
                await app.state.server.context.aclose()
                app.state.server = None
            logger.info("mcp.http.stopped")

    app = FastAPI(
        title="OpenAI Assistants MCP Server",
        version=__version__,
        docs_url="/docs" if is_debug_mode() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if is_debug_mode() else None,
        lifespan=_lifespan,
    )
    app.state.server = MCPServer(context) if context is not None else None
    app.state.max_request_size = max_request_size

    def _server(request: Request) -> MCPServer:
        server: MCPServer | None = request.app.state.server
        if server is None:
            raise HTTPException(status_code=503, detail="Server is not ready")
        return server

    @app.get("/health")
    async def health() -> JSONResponse:
        """Liveness probe: always OK if the process is running."""
        return JSONResponse(status_code=200, content={"status": "ok"})

    @app.get("/metrics")
    async def get_metrics_endpoint(request: Request) -> PlainTextResponse:
        """Return Prometheus-compatible metrics.

        Example:
            curl http://localhost:8000/metrics
        """
        metrics = _server(request).context.metrics
        return PlainTextResponse(
            content=metrics.export_prometheus(),
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

    @app.post(MCP_PATH)
    async def handle_mcp_message(request: Request) -> Response:
        """Handle one JSON-RPC 2.0 message.

        Returns:
            200 with the JSON-RPC response, or 202 for a notification
        """
        server = _server(request)
        body = await read_body(request, request.app.state.max_request_size)
        try:
            message: Any = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            server.context.metrics.increment_counter("mcp_parse_errors_total")
            logger.warning("mcp.http.invalid_json", error=str(e))
            return JSONResponse(
                status_code=200, content=error_response(None, ParseError().to_jsonrpc())
            )

        response = await server.handle(message)
        if response is None:
            return Response(status_code=202)
        return JSONResponse(status_code=200, content=response)

    return app
