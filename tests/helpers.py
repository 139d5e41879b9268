"""Request builders and sample identifiers shared by the test modules."""

from __future__ import annotations

from typing import Any

# Valid-format identifiers (prefix + 24 alphanumerics)
ASSISTANT_ID = "asst_abc123def456ghi789jkl012"
THREAD_ID = "thread_abc123def456ghi789jkl012"
MESSAGE_ID = "msg_abc123def456ghi789jkl012"
RUN_ID = "run_abc123def456ghi789jkl012"
STEP_ID = "step_abc123def456ghi789jkl012"
CALL_ID = "call_abc123def456ghi789jkl012"


def rpc(
    method: str, params: dict[str, Any] | None = None, request_id: int | str = 1
) -> dict[str, Any]:
    """Build a JSON-RPC 2.0 request dict."""
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


def tool_call(
    name: str,
    arguments: dict[str, Any] | None = None,
    *,
    provider: str | None = None,
    request_id: int | str = 1,
) -> dict[str, Any]:
    """Build a tools/call request, optionally routed to ``provider``."""
    params: dict[str, Any] = {"name": name, "arguments": arguments or {}}
    if provider is not None:
        params["_meta"] = {"provider": provider}
    return rpc("tools/call", params, request_id)
