"""Assistant management tools."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from assistants_mcp.tools.handlers.base import BaseToolHandler, request_body
from assistants_mcp.tools.validation import (
    validate_id,
    validate_metadata,
    validate_model,
    validate_numeric_range,
    validate_optional_string,
    validate_pagination,
    validate_tool_resources,
    validate_tools,
)


def _check_assistant_fields(args: Mapping[str, Any], model_required: bool) -> None:
    validate_model(args.get("model"), required=model_required)
    for field in ("name", "description", "instructions"):
        validate_optional_string(args.get(field), field)
    validate_tools(args.get("tools"))
    validate_tool_resources(args.get("tool_resources"), args.get("tools"))
    validate_metadata(args.get("metadata"))
    validate_numeric_range(args.get("temperature"), "temperature", 0, 2)
    validate_numeric_range(args.get("top_p"), "top_p", 0, 1)


class CreateAssistantHandler(BaseToolHandler):
    tool_name = "assistant-create"
    category = "assistant"

    def check(self, args: Mapping[str, Any]) -> None:
        _check_assistant_fields(args, model_required=True)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.create_assistant(request_body(args))
        return self.provider.unwrap("create_assistant", outcome)


class ListAssistantsHandler(BaseToolHandler):
    tool_name = "assistant-list"
    category = "assistant"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_pagination(args)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.list_assistants(request_body(args))
        return self.provider.unwrap("list_assistants", outcome)


class GetAssistantHandler(BaseToolHandler):
    tool_name = "assistant-get"
    category = "assistant"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("assistant_id"), "assistant", "assistant_id")

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.get_assistant(args["assistant_id"])
        return self.provider.unwrap("get_assistant", outcome)


class UpdateAssistantHandler(BaseToolHandler):
    tool_name = "assistant-update"
    category = "assistant"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("assistant_id"), "assistant", "assistant_id")
        _check_assistant_fields(args, model_required=False)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.update_assistant(
            args["assistant_id"], request_body(args, "assistant_id")
        )
        return self.provider.unwrap("update_assistant", outcome)


class DeleteAssistantHandler(BaseToolHandler):
    tool_name = "assistant-delete"
    category = "assistant"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("assistant_id"), "assistant", "assistant_id")

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.delete_assistant(args["assistant_id"])
        return self.provider.unwrap("delete_assistant", outcome)


ASSISTANT_HANDLERS: tuple[type[BaseToolHandler], ...] = (
    CreateAssistantHandler,
    ListAssistantsHandler,
    GetAssistantHandler,
    UpdateAssistantHandler,
    DeleteAssistantHandler,
)
