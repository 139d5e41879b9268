"""Tests for tool handlers against the mock provider."""

from __future__ import annotations

import pytest
from helpers import ASSISTANT_ID, CALL_ID, MESSAGE_ID, RUN_ID, STEP_ID, THREAD_ID

from assistants_mcp.errors import (
    ToolExecutionError,
    UnsupportedOperationError,
    UpstreamError,
    ValidationError,
)
from assistants_mcp.testing import MockProvider
from assistants_mcp.tools.handlers import ToolContext, request_body
from assistants_mcp.tools.handlers.assistants import (
    CreateAssistantHandler,
    DeleteAssistantHandler,
    ListAssistantsHandler,
)
from assistants_mcp.tools.handlers.messages import CreateMessageHandler, ListMessagesHandler
from assistants_mcp.tools.handlers.run_steps import GetRunStepHandler
from assistants_mcp.tools.handlers.runs import CancelRunHandler, SubmitToolOutputsHandler
from assistants_mcp.tools.handlers.threads import CreateThreadHandler


@pytest.fixture
def context(mock_provider: MockProvider) -> ToolContext:
    return ToolContext(provider=mock_provider, request_id=1)


def test_request_body_drops_path_params_and_none() -> None:
    body = request_body({"thread_id": THREAD_ID, "limit": 5, "after": None}, "thread_id")
    assert body == {"limit": 5}


class TestAssistantHandlers:
    @pytest.mark.asyncio
    async def test_create_passes_body(
        self, context: ToolContext, mock_provider: MockProvider
    ) -> None:
        args = {"model": "gpt-4", "name": "Helper", "tools": [{"type": "code_interpreter"}]}
        result = await CreateAssistantHandler(context).handle(args)
        assert result["object"] == "assistant"
        assert result["name"] == "Helper"
        (call,) = mock_provider.calls
        assert call.operation == "create_assistant"
        assert call.arguments == {"request": args}

    @pytest.mark.asyncio
    async def test_create_requires_model(
        self, context: ToolContext, mock_provider: MockProvider
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await CreateAssistantHandler(context).handle({"name": "Helper"})
        assert exc_info.value.message.startswith(
            "[assistant-create] Required parameter 'model' is missing"
        )
        assert exc_info.value.parameter == "model"
        assert mock_provider.calls == []

    @pytest.mark.asyncio
    async def test_temperature_out_of_range(
        self, context: ToolContext, mock_provider: MockProvider
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await CreateAssistantHandler(context).handle({"model": "gpt-4", "temperature": 3})
        assert exc_info.value.parameter == "temperature"
        assert mock_provider.calls == []

    @pytest.mark.asyncio
    async def test_schema_rejects_wrong_type(
        self, context: ToolContext, mock_provider: MockProvider
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await ListAssistantsHandler(context).handle({"order": "asc", "after": 5})
        assert exc_info.value.message.startswith("[assistant-list]")
        assert mock_provider.calls == []

    @pytest.mark.asyncio
    async def test_delete(self, context: ToolContext) -> None:
        result = await DeleteAssistantHandler(context).handle({"assistant_id": ASSISTANT_ID})
        assert result == {"id": ASSISTANT_ID, "object": "assistant.deleted", "deleted": True}


class TestThreadAndMessageHandlers:
    @pytest.mark.asyncio
    async def test_create_thread_without_arguments(
        self, context: ToolContext, mock_provider: MockProvider
    ) -> None:
        result = await CreateThreadHandler(context).handle({})
        assert result["object"] == "thread"
        assert mock_provider.calls[0].arguments == {"request": {}}

    @pytest.mark.asyncio
    async def test_create_message_moves_thread_id_to_path(
        self, context: ToolContext, mock_provider: MockProvider
    ) -> None:
        args = {"thread_id": THREAD_ID, "role": "user", "content": "Hello"}
        result = await CreateMessageHandler(context).handle(args)
        assert result["thread_id"] == THREAD_ID
        assert mock_provider.calls[0].arguments == {
            "thread_id": THREAD_ID,
            "request": {"role": "user", "content": "Hello"},
        }

    @pytest.mark.asyncio
    async def test_create_message_rejects_system_role(self, context: ToolContext) -> None:
        args = {"thread_id": THREAD_ID, "role": "system", "content": "Hello"}
        with pytest.raises(ValidationError) as exc_info:
            await CreateMessageHandler(context).handle(args)
        assert exc_info.value.parameter == "role"

    @pytest.mark.asyncio
    async def test_list_messages_checks_run_filter(self, context: ToolContext) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await ListMessagesHandler(context).handle({"thread_id": THREAD_ID, "run_id": "run_1"})
        assert exc_info.value.parameter == "run_id"


class TestRunHandlers:
    @pytest.mark.asyncio
    async def test_cancel(self, context: ToolContext) -> None:
        result = await CancelRunHandler(context).handle({"thread_id": THREAD_ID, "run_id": RUN_ID})
        assert result["status"] == "cancelling"
        assert result["id"] == RUN_ID

    @pytest.mark.asyncio
    async def test_submit_tool_outputs(
        self, context: ToolContext, mock_provider: MockProvider
    ) -> None:
        outputs = [{"tool_call_id": CALL_ID, "output": "42"}]
        await SubmitToolOutputsHandler(context).handle(
            {"thread_id": THREAD_ID, "run_id": RUN_ID, "tool_outputs": outputs}
        )
        (call,) = mock_provider.calls_for("submit_tool_outputs")
        assert call.arguments["request"] == {"tool_outputs": outputs}

    @pytest.mark.asyncio
    async def test_run_step_get(self, context: ToolContext, mock_provider: MockProvider) -> None:
        args = {"thread_id": THREAD_ID, "run_id": RUN_ID, "step_id": STEP_ID}
        result = await GetRunStepHandler(context).handle(args)
        assert result["id"] == STEP_ID
        assert result["object"] == "thread.run.step"


class TestProviderFailures:
    @pytest.mark.asyncio
    async def test_unsupported_is_wrapped_and_keeps_category(
        self, context: ToolContext, mock_provider: MockProvider
    ) -> None:
        mock_provider.set_unsupported("cancel_run")
        with pytest.raises(ToolExecutionError) as exc_info:
            await CancelRunHandler(context).handle({"thread_id": THREAD_ID, "run_id": RUN_ID})
        error = exc_info.value
        assert isinstance(error.cause, UnsupportedOperationError)
        assert error.error_category() == "unsupported_operation"
        assert error.details["tool"] == "run-cancel"
        assert error.details["tool_category"] == "run"
        assert error.message.startswith("[run-cancel] Execution failed")

    @pytest.mark.asyncio
    async def test_upstream_error_is_wrapped(
        self, context: ToolContext, mock_provider: MockProvider
    ) -> None:
        mock_provider.set_failure(UpstreamError("mock", 429, "Slow down", reason="rate_limited"))
        with pytest.raises(ToolExecutionError) as exc_info:
            await GetRunStepHandler(context).handle(
                {"thread_id": THREAD_ID, "run_id": RUN_ID, "step_id": STEP_ID}
            )
        assert exc_info.value.error_category() == "upstream"
        assert exc_info.value.details["status"] == 429

    @pytest.mark.asyncio
    async def test_failure_is_one_shot(
        self, context: ToolContext, mock_provider: MockProvider
    ) -> None:
        mock_provider.set_failure(RuntimeError("boom"), "delete_assistant")
        handler = DeleteAssistantHandler(context)
        with pytest.raises(ToolExecutionError) as exc_info:
            await handler.handle({"assistant_id": ASSISTANT_ID})
        assert exc_info.value.error_category() == "internal"
        assert (await handler.handle({"assistant_id": ASSISTANT_ID}))["deleted"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "args",
    [
        {"thread_id": THREAD_ID, "message_id": MESSAGE_ID},
        {"thread_id": THREAD_ID, "message_id": MESSAGE_ID, "metadata": {"k": "v"}},
    ],
)
async def test_message_path_handlers_accept_valid_ids(
    context: ToolContext, mock_provider: MockProvider, args: dict
) -> None:
    from assistants_mcp.tools.handlers.messages import UpdateMessageHandler

    result = await UpdateMessageHandler(context).handle(args)
    assert result["id"] == MESSAGE_ID
    assert mock_provider.calls[0].arguments["message_id"] == MESSAGE_ID
