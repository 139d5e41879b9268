"""Base for providers that are recognized but implement no operations.

A placeholder registers like any other provider, so clients can route to it
by name, but every operation returns Unsupported. Through tools/call that
becomes an unsupported-operation error rather than a not-found one.
"""

from __future__ import annotations

from typing import Any, ClassVar

from assistants_mcp.providers.base import (
    AssistantProvider,
    JSONObject,
    OperationResult,
    ProviderFactory,
    Unsupported,
)


class PlaceholderProvider(AssistantProvider):
    """Provider whose every capability is unsupported.

    Subclasses set ``metadata`` and ``unsupported_reason``.
    """

    unsupported_reason: ClassVar[str] = "Provider is not implemented"

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    async def validate_connection(self) -> bool:
        return bool(self._api_key)

    def _unsupported(self) -> Unsupported:
        return Unsupported(self.unsupported_reason)

    async def create_assistant(self, request: JSONObject) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def list_assistants(self, request: JSONObject) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def get_assistant(self, assistant_id: str) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def update_assistant(
        self, assistant_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def delete_assistant(self, assistant_id: str) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def create_thread(self, request: JSONObject) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def get_thread(self, thread_id: str) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def update_thread(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def delete_thread(self, thread_id: str) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def create_message(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def list_messages(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def get_message(self, thread_id: str, message_id: str) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def update_message(
        self, thread_id: str, message_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def delete_message(self, thread_id: str, message_id: str) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def create_run(self, thread_id: str, request: JSONObject) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def list_runs(self, thread_id: str, request: JSONObject) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def get_run(self, thread_id: str, run_id: str) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def update_run(
        self, thread_id: str, run_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def cancel_run(self, thread_id: str, run_id: str) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def submit_tool_outputs(
        self, thread_id: str, run_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def list_run_steps(
        self, thread_id: str, run_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]:
        return self._unsupported()

    async def get_run_step(
        self, thread_id: str, run_id: str, step_id: str
    ) -> OperationResult[JSONObject]:
        return self._unsupported()


class PlaceholderProviderFactory(ProviderFactory):
    """Factory for a placeholder provider; requires a non-empty api_key."""

    provider_class: ClassVar[type[PlaceholderProvider]]

    def validate_config(self, config: dict[str, Any]) -> bool:
        api_key = config.get("api_key")
        return isinstance(api_key, str) and bool(api_key.strip())

    def create(self, config: dict[str, Any]) -> PlaceholderProvider:
        return self.provider_class(api_key=config["api_key"])
