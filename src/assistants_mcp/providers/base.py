"""Capability interface every assistant provider implements.

Each of the 22 domain operations returns an OperationResult: either
``Supported(value)`` carrying the provider's response unchanged, or
``Unsupported(reason)`` when the provider lacks the capability. Callers go
through ``AssistantProvider.unwrap``, which routes ``Unsupported`` into
``handle_unsupported_operation`` so a missing capability always fails loudly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from assistants_mcp.errors import UnsupportedOperationError

T = TypeVar("T")

JSONObject = dict[str, Any]


@dataclass(frozen=True)
class Supported(Generic[T]):
    """Operation result from a provider that implements the capability."""

    value: T


@dataclass(frozen=True)
class Unsupported:
    """Marker returned by a provider that does not implement the capability."""

    reason: str


OperationResult = Union[Supported[T], Unsupported]

# Provider operation names, in capability order.
OPERATIONS: tuple[str, ...] = (
    "create_assistant",
    "list_assistants",
    "get_assistant",
    "update_assistant",
    "delete_assistant",
    "create_thread",
    "get_thread",
    "update_thread",
    "delete_thread",
    "create_message",
    "list_messages",
    "get_message",
    "update_message",
    "delete_message",
    "create_run",
    "list_runs",
    "get_run",
    "update_run",
    "cancel_run",
    "submit_tool_outputs",
    "list_run_steps",
    "get_run_step",
)


class ProviderCapabilities(BaseModel):
    """Capability flags advertised by a provider."""

    model_config = ConfigDict(frozen=True)

    assistants: bool = False
    threads: bool = False
    messages: bool = False
    runs: bool = False
    run_steps: bool = False
    file_search: bool = False
    code_interpreter: bool = False
    function_calling: bool = False
    streaming: bool = False


class ProviderMetadata(BaseModel):
    """Static description of a provider implementation."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(pattern=r"^[a-z][a-z0-9]*$")
    display_name: str
    version: str = "1.0.0"
    description: str = ""
    capabilities: ProviderCapabilities = Field(default_factory=ProviderCapabilities)


class AssistantProvider(ABC):
    """Contract for assistant backends.

    Instances are created and connection-validated at registration and are
    then treated as read-only; request handling never mutates them.
    """

    metadata: ProviderMetadata

    @property
    def name(self) -> str:
        return self.metadata.name

    async def initialize(self, config: dict[str, Any]) -> None:
        """Apply configuration after construction. Default is a no-op."""

    @abstractmethod
    async def validate_connection(self) -> bool:
        """Return True if the provider can reach its backend."""

    async def aclose(self) -> None:
        """Release network resources. Default is a no-op."""

    def handle_unsupported_operation(self, operation: str, reason: str | None = None) -> NoReturn:
        """Fail loudly for an operation this provider does not implement.

        Raises:
            UnsupportedOperationError: Always.
        """
        raise UnsupportedOperationError(self.name, operation, reason)

    def unwrap(self, operation: str, outcome: OperationResult[T]) -> T:
        """Return the value of a Supported result or raise for Unsupported."""
        if isinstance(outcome, Unsupported):
            self.handle_unsupported_operation(operation, outcome.reason)
        return outcome.value

    # --- Assistants ---

    @abstractmethod
    async def create_assistant(self, request: JSONObject) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def list_assistants(self, request: JSONObject) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def get_assistant(self, assistant_id: str) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def update_assistant(
        self, assistant_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def delete_assistant(self, assistant_id: str) -> OperationResult[JSONObject]: ...

    # --- Threads ---

    @abstractmethod
    async def create_thread(self, request: JSONObject) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def get_thread(self, thread_id: str) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def update_thread(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def delete_thread(self, thread_id: str) -> OperationResult[JSONObject]: ...

    # --- Messages ---

    @abstractmethod
    async def create_message(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def list_messages(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def get_message(self, thread_id: str, message_id: str) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def update_message(
        self, thread_id: str, message_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def delete_message(
        self, thread_id: str, message_id: str
    ) -> OperationResult[JSONObject]: ...

    # --- Runs ---

    @abstractmethod
    async def create_run(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def list_runs(
        self, thread_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def get_run(self, thread_id: str, run_id: str) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def update_run(
        self, thread_id: str, run_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def cancel_run(self, thread_id: str, run_id: str) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def submit_tool_outputs(
        self, thread_id: str, run_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]: ...

    # --- Run steps ---

    @abstractmethod
    async def list_run_steps(
        self, thread_id: str, run_id: str, request: JSONObject
    ) -> OperationResult[JSONObject]: ...

    @abstractmethod
    async def get_run_step(
        self, thread_id: str, run_id: str, step_id: str
    ) -> OperationResult[JSONObject]: ...


class ProviderFactory(ABC):
    """Builds provider instances from their configuration."""

    metadata: ProviderMetadata

    @abstractmethod
    def validate_config(self, config: dict[str, Any]) -> bool:
        """Return True if ``config`` is sufficient to create a provider."""

    @abstractmethod
    def create(self, config: dict[str, Any]) -> AssistantProvider:
        """Create a provider from a validated configuration."""
