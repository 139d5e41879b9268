"""Argument validation for assistant tools.

Each check raises ValidationError naming the offending parameter and giving
an example of valid input; a passing check returns None.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

import jsonschema

from assistants_mcp.errors import ValidationError

SUPPORTED_MODELS = (
    "gpt-4",
    "gpt-4o",
    "gpt-4o-mini",
    "gpt-4-turbo",
    "gpt-4-turbo-preview",
    "gpt-4-0125-preview",
    "gpt-4-1106-preview",
    "gpt-4-vision-preview",
    "gpt-3.5-turbo",
    "gpt-3.5-turbo-0125",
    "gpt-3.5-turbo-1106",
    "gpt-3.5-turbo-16k",
)

# kind -> (prefix, pattern)
ID_FORMATS: dict[str, tuple[str, re.Pattern[str]]] = {
    "assistant": ("asst_", re.compile(r"^asst_[a-zA-Z0-9]{24}$")),
    "thread": ("thread_", re.compile(r"^thread_[a-zA-Z0-9]{24}$")),
    "message": ("msg_", re.compile(r"^msg_[a-zA-Z0-9]{24}$")),
    "run": ("run_", re.compile(r"^run_[a-zA-Z0-9]{24}$")),
    "step": ("step_", re.compile(r"^step_[a-zA-Z0-9]{24}$")),
    "file": ("file-", re.compile(r"^file-[a-zA-Z0-9]{24}$")),
    "tool_call": ("call_", re.compile(r"^call_[a-zA-Z0-9]{24}$")),
}

TOOL_TYPES = ("code_interpreter", "file_search", "function")
MESSAGE_ROLES = ("user", "assistant")
SORT_ORDERS = ("asc", "desc")

MAX_METADATA_SIZE = 16384
MIN_LIST_LIMIT = 1
MAX_LIST_LIMIT = 100

_DOCS_HINT = "See docs://openai-assistants-api for details."


def _example_id(kind: str) -> str:
    prefix, _ = ID_FORMATS[kind]
    return f"{prefix}abc123def456ghi789jkl012"


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def validate_id(value: Any, kind: str, param: str, required: bool = True) -> None:
    """Check an ID parameter against its ``<prefix><24 alphanumerics>`` format."""
    prefix, pattern = ID_FORMATS[kind]
    example = _example_id(kind)
    if value is None or value == "":
        if not required:
            return
        raise ValidationError(
            f"Required parameter '{param}' is missing. Provide a valid {kind} ID in format "
            f"'{prefix}' followed by 24 characters (e.g., '{example}'). {_DOCS_HINT}",
            parameter=param,
        )
    if not isinstance(value, str):
        raise ValidationError(
            f"Parameter '{param}' must be a string. Expected {kind} ID format: "
            f"'{prefix}' followed by 24 characters (e.g., '{example}').",
            parameter=param,
        )
    if not pattern.match(value):
        raise ValidationError(
            f"Invalid {kind} ID format for parameter '{param}'. Expected '{prefix}' followed by "
            f"24 characters (e.g., '{example}'), but received: '{value}'. {_DOCS_HINT}",
            parameter=param,
        )


def validate_model(value: Any, param: str = "model", required: bool = True) -> None:
    if value is None or value == "":
        if not required:
            return
        raise ValidationError(
            f"Required parameter '{param}' is missing. Specify a supported model like 'gpt-4', "
            f"'gpt-4o', 'gpt-4-turbo', or 'gpt-3.5-turbo'. {_DOCS_HINT}",
            parameter=param,
        )
    if not isinstance(value, str):
        raise ValidationError(
            f"Parameter '{param}' must be a string. Supported models include: "
            f"{', '.join(SUPPORTED_MODELS)}.",
            parameter=param,
        )
    if value not in SUPPORTED_MODELS:
        raise ValidationError(
            f"Invalid model '{value}' for parameter '{param}'. Supported models include: "
            f"{', '.join(SUPPORTED_MODELS)}. See assistant://templates/coding-assistant "
            "for a configuration example.",
            parameter=param,
        )


def validate_numeric_range(
    value: Any, param: str, minimum: float, maximum: float, required: bool = False
) -> None:
    if value is None:
        if not required:
            return
        raise ValidationError(
            f"Required parameter '{param}' is missing. Provide a number between {minimum} "
            f"and {maximum} (inclusive).",
            parameter=param,
        )
    if not _is_number(value):
        raise ValidationError(
            f"Parameter '{param}' must be a valid number between {minimum} and {maximum} "
            f"(inclusive), but received: {value!r}. Example: {param}: {minimum}.",
            parameter=param,
        )
    if value < minimum or value > maximum:
        raise ValidationError(
            f"Parameter '{param}' must be between {minimum} and {maximum} (inclusive), "
            f"but received: {value}. Adjust the value to be within the valid range.",
            parameter=param,
        )


def validate_required_string(
    value: Any, param: str, examples: Iterable[str] | None = None
) -> None:
    example_text = f" Examples: {', '.join(examples)}." if examples else ""
    if value is None:
        raise ValidationError(
            f"Required parameter '{param}' is missing. Provide a non-empty string value."
            f"{example_text}",
            parameter=param,
        )
    if not isinstance(value, str):
        raise ValidationError(
            f"Parameter '{param}' must be a string, but received: {type(value).__name__}."
            f"{example_text}",
            parameter=param,
        )
    if not value.strip():
        raise ValidationError(
            f"Parameter '{param}' cannot be empty. Provide a non-empty string value."
            f"{example_text}",
            parameter=param,
        )


def validate_optional_string(value: Any, param: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationError(
            f"Parameter '{param}' must be a string, but received: {type(value).__name__}.",
            parameter=param,
        )


def validate_enum(
    value: Any, param: str, allowed: Iterable[str], required: bool = False
) -> None:
    allowed = tuple(allowed)
    if value is None:
        if not required:
            return
        raise ValidationError(
            f"Required parameter '{param}' is missing. Allowed values: {', '.join(allowed)}.",
            parameter=param,
        )
    if value not in allowed:
        raise ValidationError(
            f"Invalid value '{value}' for parameter '{param}'. Allowed values: "
            f"{', '.join(allowed)}. Example: {param}: \"{allowed[0]}\".",
            parameter=param,
        )


def validate_array(value: Any, param: str, required: bool = False) -> None:
    if value is None:
        if not required:
            return
        raise ValidationError(
            f"Required parameter '{param}' is missing. Provide an array value. "
            f"Example: {param}: [].",
            parameter=param,
        )
    if not isinstance(value, list):
        raise ValidationError(
            f"Parameter '{param}' must be an array, but received: {type(value).__name__}. "
            f"Example: {param}: [].",
            parameter=param,
        )


def validate_metadata(value: Any, param: str = "metadata") -> None:
    if value is None:
        return
    if not isinstance(value, dict):
        raise ValidationError(
            f"Parameter '{param}' must be an object with key-value pairs, but received: "
            f"{type(value).__name__}. Example: {param}: {{\"key\": \"value\"}}.",
            parameter=param,
        )
    size = len(json.dumps(value))
    if size > MAX_METADATA_SIZE:
        raise ValidationError(
            f"Parameter '{param}' exceeds the 16KB size limit. Current size: {size} bytes. "
            "Reduce the amount of metadata or use shorter keys/values.",
            parameter=param,
        )


def validate_tools(value: Any, param: str = "tools") -> None:
    validate_array(value, param)
    if value is None:
        return
    for i, tool in enumerate(value):
        item = f"{param}[{i}]"
        if not isinstance(tool, dict):
            raise ValidationError(
                f"Parameter '{item}' must be an object. "
                "Example: {\"type\": \"code_interpreter\"}.",
                parameter=item,
            )
        if tool.get("type") not in TOOL_TYPES:
            raise ValidationError(
                f"Invalid tool type '{tool.get('type')}' at {item}. Supported types: "
                f"{', '.join(TOOL_TYPES)}. Example: {{\"type\": \"file_search\"}}.",
                parameter=f"{item}.type",
            )
        if tool["type"] == "function":
            function = tool.get("function")
            if not isinstance(function, dict) or not function.get("name"):
                raise ValidationError(
                    f"Function tool at {item} requires a 'function' object with a 'name'. "
                    "Example: {\"type\": \"function\", \"function\": {\"name\": \"get_weather\"}}.",
                    parameter=f"{item}.function.name",
                )


def validate_tool_resources(
    value: Any, tools: Any, param: str = "tool_resources"
) -> None:
    """Check tool_resources and that every resource has its matching tool enabled."""
    if value is None:
        return
    if not isinstance(value, dict):
        raise ValidationError(
            f"Parameter '{param}' must be an object. Example: "
            f"{param}: {{\"file_search\": {{\"vector_store_ids\": [\"vs_abc123\"]}}}}.",
            parameter=param,
        )
    enabled = {t.get("type") for t in tools or [] if isinstance(t, dict)}
    for resource, key in (("file_search", "vector_store_ids"), ("code_interpreter", "file_ids")):
        if resource not in value:
            continue
        if resource not in enabled:
            raise ValidationError(
                f"Parameter '{param}.{resource}' requires the '{resource}' tool to be enabled. "
                f"Add {{\"type\": \"{resource}\"}} to the tools array.",
                parameter=f"{param}.{resource}",
            )
        entry = value[resource]
        if not isinstance(entry, dict) or not isinstance(entry.get(key), list):
            raise ValidationError(
                f"Parameter '{param}.{resource}.{key}' must be an array. "
                f"Example: {key}: [\"...\"].",
                parameter=f"{param}.{resource}.{key}",
            )


def validate_message_role(value: Any, param: str = "role") -> None:
    validate_enum(value, param, MESSAGE_ROLES, required=True)


def validate_pagination(args: Mapping[str, Any]) -> None:
    """Check limit, order, after, and before list arguments."""
    limit = args.get("limit")
    if limit is not None:
        if not isinstance(limit, int) or isinstance(limit, bool):
            raise ValidationError(
                f"Parameter 'limit' must be an integer between {MIN_LIST_LIMIT} and "
                f"{MAX_LIST_LIMIT}, but received: {limit!r}. Example: limit: 20.",
                parameter="limit",
            )
        validate_numeric_range(limit, "limit", MIN_LIST_LIMIT, MAX_LIST_LIMIT)
    validate_enum(args.get("order"), "order", SORT_ORDERS)
    for key in ("after", "before"):
        cursor = args.get(key)
        if cursor is not None and (not isinstance(cursor, str) or not cursor.strip()):
            raise ValidationError(
                f"Parameter '{key}' must be a non-empty string ID. "
                f"Example: {key}: \"{_example_id('assistant')}\".",
                parameter=key,
            )
    if args.get("after") is not None and args.get("before") is not None:
        raise ValidationError(
            "Parameters 'after' and 'before' are mutually exclusive. Provide only one of them.",
            parameter="after",
        )


def validate_tool_outputs(value: Any, param: str = "tool_outputs") -> None:
    validate_array(value, param, required=True)
    if not value:
        raise ValidationError(
            f"Parameter '{param}' must contain at least one output. Example: {param}: "
            f"[{{\"tool_call_id\": \"{_example_id('tool_call')}\", \"output\": \"42\"}}].",
            parameter=param,
        )
    for i, output in enumerate(value):
        item = f"{param}[{i}]"
        if not isinstance(output, dict):
            raise ValidationError(
                f"Parameter '{item}' must be an object with tool_call_id and output.",
                parameter=item,
            )
        validate_id(output.get("tool_call_id"), "tool_call", f"{item}.tool_call_id")
        if not isinstance(output.get("output"), str):
            raise ValidationError(
                f"Parameter '{item}.output' must be a string. Example: output: \"42\".",
                parameter=f"{item}.output",
            )


def validate_schema(args: Mapping[str, Any], schema: Mapping[str, Any]) -> None:
    """Check arguments against a tool's JSON Schema."""
    try:
        jsonschema.validate(instance=dict(args), schema=dict(schema))
    except jsonschema.ValidationError as e:
        path = ".".join(str(part) for part in e.absolute_path)
        raise ValidationError(
            f"Invalid arguments{f' at {path!r}' if path else ''}: {e.message}",
            parameter=path or None,
        ) from e
