"""Base class for tool handlers.

A handler validates its arguments, calls exactly one provider operation, and
returns the provider's response unchanged. Validation failures surface as
ValidationError prefixed with the tool name; anything raised by the provider
is wrapped in ToolExecutionError so the caller knows which tool failed.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from assistants_mcp.errors import AssistantsMCPError, ToolExecutionError, ValidationError
from assistants_mcp.observability import get_logger
from assistants_mcp.providers.base import AssistantProvider, JSONObject
from assistants_mcp.tools.definitions import get_tool_definition
from assistants_mcp.tools.validation import validate_schema

logger = get_logger(__name__)


@dataclass(frozen=True)
class ToolContext:
    """Per-request state shared by the handlers of one tool registry."""

    provider: AssistantProvider
    request_id: str | int | None = None


class BaseToolHandler(ABC):
    """One tool: argument validation plus a single provider call.

    Subclasses set ``tool_name`` and ``category`` and implement ``execute``;
    ``check`` adds semantic validation on top of the JSON Schema check.
    """

    tool_name: ClassVar[str]
    category: ClassVar[str]

    def __init__(self, context: ToolContext) -> None:
        self.context = context

    @property
    def provider(self) -> AssistantProvider:
        return self.context.provider

    def check(self, args: Mapping[str, Any]) -> None:
        """Semantic argument checks. Default: none."""

    def validate(self, args: Mapping[str, Any]) -> None:
        """Run semantic checks, then the tool's input schema.

        Raises:
            ValidationError: If any argument is missing or malformed.
        """
        self.check(args)
        definition = get_tool_definition(self.tool_name)
        if definition is not None:
            validate_schema(args, definition.input_schema)

    @abstractmethod
    async def execute(self, args: Mapping[str, Any]) -> Any:
        """Call the provider with validated arguments."""

    async def handle(self, args: Mapping[str, Any]) -> Any:
        """Validate and execute.

        Raises:
            ValidationError: Arguments rejected; message prefixed with ``[tool-name]``.
            ToolExecutionError: The provider call failed.
        """
        try:
            self.validate(args)
        except ValidationError as e:
            raise ValidationError(
                f"[{self.tool_name}] {e.message}", parameter=e.parameter, details=e.details
            ) from e

        start_time = time.perf_counter()
        try:
            result = await self.execute(args)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            log = logger.warning if isinstance(e, AssistantsMCPError) else logger.exception
            log(
                "mcp.tool.error",
                tool=self.tool_name,
                tool_category=self.category,
                provider=self.provider.name,
                request_id=self.context.request_id,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2),
            )
            raise ToolExecutionError(self.tool_name, self.category, e) from e

        logger.debug(
            "mcp.tool.completed",
            tool=self.tool_name,
            provider=self.provider.name,
            request_id=self.context.request_id,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return result


def request_body(args: Mapping[str, Any], *path_params: str) -> JSONObject:
    """Arguments minus path parameters and unset values, as the upstream request body."""
    return {k: v for k, v in args.items() if k not in path_params and v is not None}
