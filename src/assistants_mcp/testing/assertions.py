"""Custom assertions for assistants MCP tests.

Functions:
    assert_jsonrpc_result: Assert a response succeeded and return its result.
    assert_jsonrpc_error: Assert a response failed with a given code (and category).
    assert_tool_result: Assert a tools/call succeeded and return the decoded JSON payload.
"""

import json
from typing import Any


def assert_jsonrpc_result(
    response: dict[str, Any] | None, *, request_id: str | int | None = None
) -> dict[str, Any]:
    """Assert that ``response`` is a JSON-RPC success and return ``result``.

    Raises:
        AssertionError: If the response is missing, an error, or has the wrong id.
    """
    assert response is not None, "Expected a response, got None"
    assert response.get("jsonrpc") == "2.0", f"Bad jsonrpc version in {response}"
    assert "error" not in response, f"Expected a result, got error {response['error']}"
    if request_id is not None:
        assert response.get("id") == request_id, (
            f"Response id {response.get('id')!r} != request id {request_id!r}"
        )
    result: dict[str, Any] = response["result"]
    return result


def assert_jsonrpc_error(
    response: dict[str, Any] | None,
    code: int,
    *,
    category: str | None = None,
) -> dict[str, Any]:
    """Assert that ``response`` is a JSON-RPC error with ``code``; return ``error``.

    Args:
        response: Response dict from MCPServer.handle.
        code: Expected JSON-RPC error code (e.g. -32602).
        category: If set, ``error.data.category`` must equal it.
    """
    assert response is not None, "Expected a response, got None"
    assert "result" not in response, f"Expected an error, got result {response['result']}"
    error: dict[str, Any] = response["error"]
    assert error["code"] == code, f"Error code {error['code']} != {code}: {error['message']}"
    if category is not None:
        actual = error.get("data", {}).get("category")
        assert actual == category, f"Error category {actual!r} != {category!r}"
    return error


def assert_tool_result(response: dict[str, Any] | None) -> Any:
    """Assert a successful tools/call and return the JSON decoded from its text content."""
    result = assert_jsonrpc_result(response)
    assert result.get("isError") is False, f"Tool reported an error: {result}"
    content = result["content"]
    assert len(content) == 1 and content[0]["type"] == "text", f"Unexpected content {content}"
    return json.loads(content[0]["text"])
