"""OpenAI Assistants API (v2) provider.

Every operation is a single HTTP request through ``httpx.AsyncClient``; no
retries. HTTP failures are converted to UpstreamError with the upstream
status and message preserved.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from assistants_mcp.errors import UpstreamError
from assistants_mcp.observability import get_logger
from assistants_mcp.providers.base import (
    AssistantProvider,
    JSONObject,
    OperationResult,
    ProviderCapabilities,
    ProviderFactory,
    ProviderMetadata,
    Supported,
)

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0
ASSISTANTS_BETA_HEADER = "assistants=v2"

# Query parameters accepted by list endpoints; everything else stays in the body.
_LIST_QUERY_KEYS = ("limit", "order", "after", "before", "run_id")

OPENAI_METADATA = ProviderMetadata(
    name="openai",
    display_name="OpenAI",
    version="2.0.0",
    description="OpenAI Assistants API (v2)",
    capabilities=ProviderCapabilities(
        assistants=True,
        threads=True,
        messages=True,
        runs=True,
        run_steps=True,
        file_search=True,
        code_interpreter=True,
        function_calling=True,
        streaming=False,
    ),
)


class OpenAIProviderConfig(BaseModel):
    """Connection settings for the OpenAI provider."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str = Field(min_length=1, description="OpenAI API key")
    base_url: str = Field(default=DEFAULT_BASE_URL)
    organization: str | None = Field(default=None)
    project: str | None = Field(default=None)
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("api_key")
    @classmethod
    def _api_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("api_key must not be blank")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def _reason_for_status(status: int) -> str:
    if status in (401, 403):
        return "unauthorized"
    if status == 404:
        return "not_found"
    if status == 429:
        return "rate_limited"
    return "upstream_error"


def _split_list_request(request: JSONObject) -> dict[str, Any]:
    return {key: request[key] for key in _LIST_QUERY_KEYS if request.get(key) is not None}


class OpenAIProvider(AssistantProvider):
    """Provider backed by the OpenAI Assistants REST API."""

    metadata = OPENAI_METADATA

    def __init__(
        self,
        config: OpenAIProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            config: Connection settings.
            transport: Optional httpx transport for testing (e.g. MockTransport).
        """
        self.config = config
        headers = {
            "Authorization": f"Bearer {config.api_key}",
            "OpenAI-Beta": ASSISTANTS_BETA_HEADER,
            "Content-Type": "application/json",
            **config.headers,
        }
        if config.organization:
            headers["OpenAI-Organization"] = config.organization
        if config.project:
            headers["OpenAI-Project"] = config.project
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=headers,
            timeout=httpx.Timeout(config.timeout),
            transport=transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: JSONObject | None = None,
        params: dict[str, Any] | None = None,
    ) -> JSONObject:
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.TimeoutException as e:
            logger.warning("provider.upstream.timeout", provider=self.name, path=path)
            raise UpstreamError(self.name, None, f"Request timed out: {e}", reason="timeout") from e
        except httpx.HTTPError as e:
            logger.warning(
                "provider.upstream.unavailable", provider=self.name, path=path, error=str(e)
            )
            message = str(e) or type(e).__name__
            raise UpstreamError(self.name, None, message, reason="unavailable") from e

        if response.is_error:
            message = response.reason_phrase or "Upstream error"
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and isinstance(body.get("error"), dict):
                message = body["error"].get("message") or message
            logger.warning(
                "provider.upstream.error",
                provider=self.name,
                method=method,
                path=path,
                status=response.status_code,
            )
            raise UpstreamError(
                self.name,
                response.status_code,
                message,
                reason=_reason_for_status(response.status_code),
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(
                "provider.upstream.invalid_json",
                provider=self.name,
                path=path,
                status=response.status_code,
            )
            raise UpstreamError(
                self.name,
                response.status_code,
                "Invalid JSON in upstream response",
                reason="upstream_error",
            ) from e
        return data if isinstance(data, dict) else {"data": data}

    async def validate_connection(self) -> bool:
        try:
            await self._request("GET", "/assistants", params={"limit": 1})
        except UpstreamError as e:
            logger.warning("provider.connection.failed", provider=self.name, error=e.message)
            return False
        return True

    async def aclose(self) -> None:
        await self._client.aclose()

    # --- Assistants ---

    async def create_assistant(self, request: JSONObject) -> OperationResult[JSONObject]:
        return Supported(await self._request("POST", "/assistants", json=request))

    async def list_assistants(self, request: JSONObject) -> OperationResult[JSONObject]:
        params = _split_list_request(request)
        return Supported(await self._request("GET", "/assistants", params=params))

    async def get_assistant(self, assistant_id: str) -> OperationResult[JSONObject]:
        return Supported(await self._request("GET", f"/assistants/{assistant_id}"))

    async def update_assistant(
        self, assistant_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return Supported(await self._request("POST", f"/assistants/{assistant_id}", json=request))

    async def delete_assistant(self, assistant_id: str) -> OperationResult[JSONObject]:
        return Supported(await self._request("DELETE", f"/assistants/{assistant_id}"))

    # --- Threads ---

    async def create_thread(self, request: JSONObject) -> OperationResult[JSONObject]:
        return Supported(await self._request("POST", "/threads", json=request))

    async def get_thread(self, thread_id: str) -> OperationResult[JSONObject]:
        return Supported(await self._request("GET", f"/threads/{thread_id}"))

    async def update_thread(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return Supported(await self._request("POST", f"/threads/{thread_id}", json=request))

    async def delete_thread(self, thread_id: str) -> OperationResult[JSONObject]:
        return Supported(await self._request("DELETE", f"/threads/{thread_id}"))

    # --- Messages ---

    async def create_message(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return Supported(
            await self._request("POST", f"/threads/{thread_id}/messages", json=request)
        )

    async def list_messages(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        params = _split_list_request(request)
        return Supported(
            await self._request("GET", f"/threads/{thread_id}/messages", params=params)
        )

    async def get_message(self, thread_id: str, message_id: str) -> OperationResult[JSONObject]:
        return Supported(await self._request("GET", f"/threads/{thread_id}/messages/{message_id}"))

    async def update_message(
        self, thread_id: str, message_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        path = f"/threads/{thread_id}/messages/{message_id}"
        return Supported(await self._request("POST", path, json=request))

    async def delete_message(self, thread_id: str, message_id: str) -> OperationResult[JSONObject]:
        path = f"/threads/{thread_id}/messages/{message_id}"
        return Supported(await self._request("DELETE", path))

    # --- Runs ---

    async def create_run(self, thread_id: str, request: JSONObject) -> OperationResult[JSONObject]:
        return Supported(await self._request("POST", f"/threads/{thread_id}/runs", json=request))

    async def list_runs(self, thread_id: str, request: JSONObject) -> OperationResult[JSONObject]:
        params = _split_list_request(request)
        return Supported(await self._request("GET", f"/threads/{thread_id}/runs", params=params))

    async def get_run(self, thread_id: str, run_id: str) -> OperationResult[JSONObject]:
        return Supported(await self._request("GET", f"/threads/{thread_id}/runs/{run_id}"))

    async def update_run(
        self, thread_id: str, run_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        path = f"/threads/{thread_id}/runs/{run_id}"
        return Supported(await self._request("POST", path, json=request))

    async def cancel_run(self, thread_id: str, run_id: str) -> OperationResult[JSONObject]:
        return Supported(await self._request("POST", f"/threads/{thread_id}/runs/{run_id}/cancel"))

    async def submit_tool_outputs(
        self, thread_id: str, run_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        path = f"/threads/{thread_id}/runs/{run_id}/submit_tool_outputs"
        return Supported(await self._request("POST", path, json=request))

    # --- Run steps ---

    async def list_run_steps(
        self, thread_id: str, run_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        params = _split_list_request(request)
        path = f"/threads/{thread_id}/runs/{run_id}/steps"
        return Supported(await self._request("GET", path, params=params))

    async def get_run_step(
        self, thread_id: str, run_id: str, step_id: str
    ) -> OperationResult[JSONObject]:
        path = f"/threads/{thread_id}/runs/{run_id}/steps/{step_id}"
        return Supported(await self._request("GET", path))


class OpenAIProviderFactory(ProviderFactory):
    """Factory for OpenAIProvider."""

    metadata = OPENAI_METADATA

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    def validate_config(self, config: dict[str, Any]) -> bool:
        api_key = config.get("api_key")
        return isinstance(api_key, str) and bool(api_key.strip())

    def create(self, config: dict[str, Any]) -> OpenAIProvider:
        return OpenAIProvider(OpenAIProviderConfig(**config), transport=self._transport)
