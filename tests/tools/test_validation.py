"""Tests for tool argument validation."""

from __future__ import annotations

import pytest
from helpers import ASSISTANT_ID, CALL_ID, RUN_ID, THREAD_ID

from assistants_mcp.errors import ValidationError
from assistants_mcp.tools.validation import (
    validate_enum,
    validate_id,
    validate_message_role,
    validate_metadata,
    validate_model,
    validate_numeric_range,
    validate_pagination,
    validate_required_string,
    validate_schema,
    validate_tool_outputs,
    validate_tool_resources,
    validate_tools,
)


class TestValidateId:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (ASSISTANT_ID, "assistant"),
            (THREAD_ID, "thread"),
            (RUN_ID, "run"),
            (CALL_ID, "tool_call"),
        ],
    )
    def test_valid(self, value: str, kind: str) -> None:
        validate_id(value, kind, "id")

    def test_missing_required(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_id(None, "assistant", "assistant_id")
        assert exc_info.value.message.startswith("Required parameter 'assistant_id' is missing")
        assert exc_info.value.parameter == "assistant_id"

    def test_missing_optional(self) -> None:
        validate_id(None, "run", "run_id", required=False)
        validate_id("", "run", "run_id", required=False)

    @pytest.mark.parametrize(
        "value",
        ["invalid-id", "asst_short", f"{ASSISTANT_ID}x", "thread_abc123def456ghi789jkl012"],
    )
    def test_wrong_format(self, value: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_id(value, "assistant", "assistant_id")
        message = exc_info.value.message
        assert message.startswith("Invalid assistant ID format for parameter 'assistant_id'")
        assert f"received: '{value}'" in message
        assert "asst_abc123def456ghi789jkl012" in message

    def test_not_a_string(self) -> None:
        with pytest.raises(ValidationError, match="must be a string"):
            validate_id(42, "thread", "thread_id")


class TestValidateModel:
    def test_supported(self) -> None:
        validate_model("gpt-4o")

    def test_unsupported(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_model("gpt-2")
        assert exc_info.value.message.startswith("Invalid model 'gpt-2'")
        assert "gpt-4" in exc_info.value.message

    def test_missing(self) -> None:
        with pytest.raises(ValidationError, match="Required parameter 'model' is missing"):
            validate_model(None)
        validate_model(None, required=False)


class TestNumericRange:
    def test_bounds_are_inclusive(self) -> None:
        validate_numeric_range(0, "temperature", 0, 2)
        validate_numeric_range(2, "temperature", 0, 2)

    def test_out_of_range(self) -> None:
        with pytest.raises(ValidationError, match="must be between 0 and 2"):
            validate_numeric_range(2.5, "temperature", 0, 2)

    @pytest.mark.parametrize("value", ["1", True, float("nan"), float("inf"), float("-inf")])
    def test_not_a_number(self, value: object) -> None:
        with pytest.raises(ValidationError, match="must be a valid number"):
            validate_numeric_range(value, "top_p", 0, 1)


class TestStrings:
    def test_required_string(self) -> None:
        validate_required_string("hello", "content")
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_required_string("   ", "content")
        with pytest.raises(ValidationError, match="is missing"):
            validate_required_string(None, "content")

    def test_examples_are_listed(self) -> None:
        with pytest.raises(ValidationError, match="Examples: a, b"):
            validate_required_string(None, "content", examples=["a", "b"])

    def test_enum(self) -> None:
        validate_enum("asc", "order", ("asc", "desc"))
        with pytest.raises(ValidationError, match="Allowed values: asc, desc"):
            validate_enum("up", "order", ("asc", "desc"))

    def test_message_role(self) -> None:
        validate_message_role("user")
        with pytest.raises(ValidationError):
            validate_message_role("system")


class TestMetadata:
    def test_must_be_object(self) -> None:
        with pytest.raises(ValidationError, match="must be an object"):
            validate_metadata(["a"])

    def test_size_limit(self) -> None:
        with pytest.raises(ValidationError, match="exceeds the 16KB size limit"):
            validate_metadata({"blob": "x" * 17000})


class TestTools:
    def test_valid_tools(self) -> None:
        validate_tools(
            [
                {"type": "code_interpreter"},
                {"type": "function", "function": {"name": "get_weather"}},
            ]
        )

    def test_unknown_type(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_tools([{"type": "retrieval"}])
        assert exc_info.value.parameter == "tools[0].type"

    def test_function_requires_name(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_tools([{"type": "function", "function": {}}])
        assert exc_info.value.parameter == "tools[0].function.name"

    def test_tool_resources_need_matching_tool(self) -> None:
        resources = {"file_search": {"vector_store_ids": ["vs_1"]}}
        validate_tool_resources(resources, [{"type": "file_search"}])
        with pytest.raises(ValidationError) as exc_info:
            validate_tool_resources(resources, [{"type": "code_interpreter"}])
        assert exc_info.value.parameter == "tool_resources.file_search"

    def test_tool_resources_ids_must_be_array(self) -> None:
        with pytest.raises(ValidationError):
            validate_tool_resources(
                {"code_interpreter": {"file_ids": "file-1"}}, [{"type": "code_interpreter"}]
            )


class TestPagination:
    def test_valid(self) -> None:
        validate_pagination({"limit": 20, "order": "desc", "after": ASSISTANT_ID})

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_range(self, limit: int) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_pagination({"limit": limit})
        assert exc_info.value.parameter == "limit"

    @pytest.mark.parametrize("limit", [True, 2.5, "10"])
    def test_limit_must_be_integer(self, limit: object) -> None:
        with pytest.raises(ValidationError, match="must be an integer"):
            validate_pagination({"limit": limit})

    def test_after_and_before_are_exclusive(self) -> None:
        with pytest.raises(ValidationError, match="mutually exclusive") as exc_info:
            validate_pagination({"after": ASSISTANT_ID, "before": ASSISTANT_ID})
        assert exc_info.value.parameter == "after"


class TestToolOutputs:
    def test_valid(self) -> None:
        validate_tool_outputs([{"tool_call_id": CALL_ID, "output": "42"}])

    def test_empty(self) -> None:
        with pytest.raises(ValidationError, match="at least one output"):
            validate_tool_outputs([])

    def test_bad_call_id(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_tool_outputs([{"tool_call_id": "call_1", "output": "42"}])
        assert exc_info.value.parameter == "tool_outputs[0].tool_call_id"

    def test_output_must_be_string(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_tool_outputs([{"tool_call_id": CALL_ID, "output": 42}])
        assert exc_info.value.parameter == "tool_outputs[0].output"


class TestSchema:
    SCHEMA = {
        "type": "object",
        "properties": {"limit": {"type": "integer", "maximum": 100}},
        "required": ["limit"],
    }

    def test_valid(self) -> None:
        validate_schema({"limit": 5}, self.SCHEMA)

    def test_nested_path_is_reported(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_schema({"limit": 500}, self.SCHEMA)
        assert exc_info.value.message.startswith("Invalid arguments at 'limit'")
        assert exc_info.value.parameter == "limit"

    def test_missing_required(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_schema({}, self.SCHEMA)
        assert exc_info.value.parameter is None
        assert "'limit' is a required property" in exc_info.value.message
