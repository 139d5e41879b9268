"""Run step tools (read-only)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from assistants_mcp.tools.handlers.base import BaseToolHandler, request_body
from assistants_mcp.tools.validation import validate_id, validate_pagination


class ListRunStepsHandler(BaseToolHandler):
    tool_name = "run-step-list"
    category = "run-step"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("thread_id"), "thread", "thread_id")
        validate_id(args.get("run_id"), "run", "run_id")
        validate_pagination(args)

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.list_run_steps(
            args["thread_id"], args["run_id"], request_body(args, "thread_id", "run_id")
        )
        return self.provider.unwrap("list_run_steps", outcome)


class GetRunStepHandler(BaseToolHandler):
    tool_name = "run-step-get"
    category = "run-step"

    def check(self, args: Mapping[str, Any]) -> None:
        validate_id(args.get("thread_id"), "thread", "thread_id")
        validate_id(args.get("run_id"), "run", "run_id")
        validate_id(args.get("step_id"), "step", "step_id")

    async def execute(self, args: Mapping[str, Any]) -> Any:
        outcome = await self.provider.get_run_step(
            args["thread_id"], args["run_id"], args["step_id"]
        )
        return self.provider.unwrap("get_run_step", outcome)


RUN_STEP_HANDLERS: tuple[type[BaseToolHandler], ...] = (ListRunStepsHandler, GetRunStepHandler)
