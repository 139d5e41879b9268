"""Tests for the FastAPI transport."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from helpers import THREAD_ID, rpc, tool_call

from assistants_mcp.config import Settings
from assistants_mcp.context import ServerContext
from assistants_mcp.providers.registry import ProviderRegistry
from assistants_mcp.testing import MockProvider, assert_jsonrpc_error, assert_tool_result
from assistants_mcp.transport import MCP_PATH, create_app


@pytest.fixture
def http_context() -> ServerContext:
    registry = ProviderRegistry()
    asyncio.run(registry.register_provider(MockProvider()))
    return ServerContext(provider_registry=registry)


@pytest.fixture
def client(http_context: ServerContext) -> Iterator[TestClient]:
    app = create_app(context=http_context, settings=Settings(max_request_size=4096))
    with TestClient(app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_request_response(client: TestClient) -> None:
    response = client.post(MCP_PATH, json=rpc("ping", request_id=11))
    assert response.status_code == 200
    assert response.json() == {"jsonrpc": "2.0", "id": 11, "result": {}}


def test_tool_call(client: TestClient) -> None:
    response = client.post(MCP_PATH, json=tool_call("thread-get", {"thread_id": THREAD_ID}))
    assert response.status_code == 200
    assert assert_tool_result(response.json())["id"] == THREAD_ID


def test_error_response_is_200(client: TestClient) -> None:
    response = client.post(MCP_PATH, json=rpc("nope/nope"))
    assert response.status_code == 200
    assert_jsonrpc_error(response.json(), -32601)


def test_invalid_json(client: TestClient, http_context: ServerContext) -> None:
    response = client.post(
        MCP_PATH, content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["id"] is None
    assert_jsonrpc_error(body, -32700)
    assert http_context.metrics.get_counter("mcp_parse_errors_total") == 1


def test_notification_is_accepted(client: TestClient) -> None:
    response = client.post(
        MCP_PATH, json={"jsonrpc": "2.0", "method": "notifications/initialized"}
    )
    assert response.status_code == 202
    assert response.content == b""


def test_batch_is_rejected(client: TestClient) -> None:
    response = client.post(MCP_PATH, json=[rpc("ping")])
    assert response.status_code == 200
    assert_jsonrpc_error(response.json(), -32600)


def test_oversized_body(client: TestClient) -> None:
    payload = json.dumps(rpc("ping", {"padding": "x" * 5000}))
    response = client.post(
        MCP_PATH, content=payload, headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 413


def test_metrics_endpoint(client: TestClient) -> None:
    client.post(MCP_PATH, json=rpc("ping"))
    response = client.get("/metrics")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert 'mcp_requests_total{method="ping",status="ok"} 1.0' in response.text


def test_docs_disabled_outside_debug(client: TestClient) -> None:
    assert client.get("/docs").status_code == 404


def test_not_ready_without_server() -> None:
    # Without entering the client context the lifespan never runs.
    test_client = TestClient(create_app(settings=Settings()))
    assert test_client.post(MCP_PATH, json=rpc("ping")).status_code == 503
    assert test_client.get("/metrics").status_code == 503


def test_lifespan_builds_and_closes_context(monkeypatch: pytest.MonkeyPatch) -> None:
    provider = MockProvider()

    async def fake_build_context(settings: Settings | None = None) -> ServerContext:
        registry = ProviderRegistry()
        await registry.register_provider(provider)
        return ServerContext(provider_registry=registry)

    monkeypatch.setattr("assistants_mcp.transport.http.build_context", fake_build_context)
    app = create_app(settings=Settings())
    with TestClient(app) as test_client:
        response = test_client.post(MCP_PATH, json=rpc("ping"))
        assert response.status_code == 200
        assert provider.closed is False
    assert provider.closed is True
    assert app.state.server is None
