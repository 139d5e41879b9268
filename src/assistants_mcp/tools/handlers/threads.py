"""Thread management tools."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from assistants_mcp.errors import ValidationError
from assistants_mcp.tools.handlers.base import BaseToolHandler, request_body
from assistants_mcp.tools.validation import (
    validate_array,
    validate_id,
    validate_message_role,
    validate_metadata,
    validate_required_string,
    validate_tool_resources,
)

# Tool resources on a thread are not tied to the thread's own tools array.
_ALL_TOOLS = [{"type": "file_search"}, {"type": "code_interpreter"}]


def _check_initial_messages(messages: Any) -> None:
    validate_array(messages, "messages")
    for i, message in enumerate(messages or []):
        item = f"messages[{i}]"
        if not isinstance(message, dict):
            raise ValidationError(
                f"Parameter '{item}' must be an object with role and content. "
                "Example: {\"role\": \"user\", \"content\": \"Hello\"}.",
                parameter=item,
            )
        validate_message_role(message.get("role"), f"{item}.role")
        validate_required_string(message.get("content"), f"{item}.content")


class CreateThreadHandler(BaseToolHandler):
    tool_name = "thread-create"
    category = "thread"

    def check(self, args: Mapping[str, Any]) -> None:
        _check_initial_messages(args.get("messages"))
        validate_tool_resources(args.get("tool_resources"), _ALL_TOOLS)
        validate_metadata(args.get("metadata"))

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.create_thread(request_body(args))
        return self.provider.unwrap("create_thread", outcome)


class GetThreadHandler(BaseToolHandler):
    tool_name = "thread-get"
    category = "thread"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("thread_id"), "thread", "thread_id")

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.get_thread(args["thread_id"])
        return self.provider.unwrap("get_thread", outcome)


class UpdateThreadHandler(BaseToolHandler):
    tool_name = "thread-update"
    category = "thread"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("thread_id"), "thread", "thread_id")
        validate_tool_resources(args.get("tool_resources"), _ALL_TOOLS)
        validate_metadata(args.get("metadata"))

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.update_thread(
            args["thread_id"], request_body(args, "thread_id")
        )
        return self.provider.unwrap("update_thread", outcome)


class DeleteThreadHandler(BaseToolHandler):
    tool_name = "thread-delete"
    category = "thread"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("thread_id"), "thread", "thread_id")

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.delete_thread(args["thread_id"])
        return self.provider.unwrap("delete_thread", outcome)


THREAD_HANDLERS: tuple[type[BaseToolHandler], ...] = (
    CreateThreadHandler,
    GetThreadHandler,
    UpdateThreadHandler,
    DeleteThreadHandler,
)
