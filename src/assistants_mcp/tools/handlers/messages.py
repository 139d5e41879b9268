"""Message management tools."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from assistants_mcp.tools.handlers.base import BaseToolHandler, request_body
from assistants_mcp.tools.validation import (
    validate_id,
    validate_message_role,
    validate_metadata,
    validate_pagination,
    validate_required_string,
)


def _check_message_path(args: Mapping[str, Any]) -> None:
    validate_id(args.get("thread_id"), "thread", "thread_id")
    validate_id(args.get("message_id"), "message", "message_id")


class CreateMessageHandler(BaseToolHandler):
    tool_name = "message-create"
    category = "message"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("thread_id"), "thread", "thread_id")
        validate_message_role(args.get("role"))
        validate_required_string(args.get("content"), "content")
        validate_metadata(args.get("metadata"))

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.create_message(
            args["thread_id"], request_body(args, "thread_id")
        )
        return self.provider.unwrap("create_message", outcome)


class ListMessagesHandler(BaseToolHandler):
    tool_name = "message-list"
    category = "message"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("thread_id"), "thread", "thread_id")
        validate_pagination(args)
        validate_id(args.get("run_id"), "run", "run_id", required=False)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.list_messages(
            args["thread_id"], request_body(args, "thread_id")
        )
        return self.provider.unwrap("list_messages", outcome)


class GetMessageHandler(BaseToolHandler):
    tool_name = "message-get"
    category = "message"

    def check(self, args: Mapping[str, Any]) -> None:
        _check_message_path(args)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.get_message(args["thread_id"], args["message_id"])
        return self.provider.unwrap("get_message", outcome)


class UpdateMessageHandler(BaseToolHandler):
    tool_name = "message-update"
    category = "message"

    def check(self, args: Mapping[str, Any]) -> None:
        _check_message_path(args)
        validate_metadata(args.get("metadata"))

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.update_message(
            args["thread_id"], args["message_id"], request_body(args, "thread_id", "message_id")
        )
        return self.provider.unwrap("update_message", outcome)


class DeleteMessageHandler(BaseToolHandler):
    tool_name = "message-delete"
    category = "message"

    def check(self, args: Mapping[str, Any]) -> None:
        _check_message_path(args)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.delete_message(args["thread_id"], args["message_id"])
        return self.provider.unwrap("delete_message", outcome)


MESSAGE_HANDLERS: tuple[type[BaseToolHandler], ...] = (
    CreateMessageHandler,
    ListMessagesHandler,
    GetMessageHandler,
    UpdateMessageHandler,
    DeleteMessageHandler,
)
