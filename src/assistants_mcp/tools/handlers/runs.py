"""Run management tools."""

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
    validate_tool_outputs,
    validate_tools,
)


def _check_run_path(args: Mapping[str, Any]) -> None:
    validate_id(args.get("thread_id"), "thread", "thread_id")
    validate_id(args.get("run_id"), "run", "run_id")


class CreateRunHandler(BaseToolHandler):
    tool_name = "run-create"
    category = "run"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("thread_id"), "thread", "thread_id")
        validate_id(args.get("assistant_id"), "assistant", "assistant_id")
        validate_model(args.get("model"), required=False)
        validate_optional_string(args.get("instructions"), "instructions")
        validate_optional_string(args.get("additional_instructions"), "additional_instructions")
        validate_tools(args.get("tools"))
        validate_metadata(args.get("metadata"))
        validate_numeric_range(args.get("temperature"), "temperature", 0, 2)
        validate_numeric_range(args.get("top_p"), "top_p", 0, 1)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.create_run(args["thread_id"], request_body(args, "thread_id"))
        return self.provider.unwrap("create_run", outcome)


class ListRunsHandler(BaseToolHandler):
    tool_name = "run-list"
    category = "run"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("thread_id"), "thread", "thread_id")
        validate_pagination(args)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.list_runs(args["thread_id"], request_body(args, "thread_id"))
        return self.provider.unwrap("list_runs", outcome)


class GetRunHandler(BaseToolHandler):
    tool_name = "run-get"
    category = "run"

    def check(self, args: Mapping[str, Any]) -> None:
        _check_run_path(args)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.get_run(args["thread_id"], args["run_id"])
        return self.provider.unwrap("get_run", outcome)


class UpdateRunHandler(BaseToolHandler):
    tool_name = "run-update"
    category = "run"

    def check(self, args: Mapping[str, Any]) -> None:
        _check_run_path(args)
        validate_metadata(args.get("metadata"))

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.update_run(
            args["thread_id"], args["run_id"], request_body(args, "thread_id", "run_id")
        )
        return self.provider.unwrap("update_run", outcome)


class CancelRunHandler(BaseToolHandler):
    tool_name = "run-cancel"
    category = "run"

    def check(self, args: Mapping[str, Any]) -> None:
        _check_run_path(args)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.cancel_run(args["thread_id"], args["run_id"])
        return self.provider.unwrap("cancel_run", outcome)


class SubmitToolOutputsHandler(BaseToolHandler):
    tool_name = "run-submit-tool-outputs"
    category = "run"

    def check(self, args: Mapping[str, Any]) -> None:
        _check_run_path(args)
        validate_tool_outputs(args.get("tool_outputs"))

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.submit_tool_outputs(
            args["thread_id"], args["run_id"], request_body(args, "thread_id", "run_id")
        )
        return self.provider.unwrap("submit_tool_outputs", outcome)


RUN_HANDLERS: tuple[type[BaseToolHandler], ...] = (
    CreateRunHandler,
    ListRunsHandler,
    GetRunHandler,
    UpdateRunHandler,
    CancelRunHandler,
    SubmitToolOutputsHandler,
)
