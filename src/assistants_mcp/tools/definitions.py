"""Static tool definitions exposed through tools/list.

Definitions are ordered; tools/list pages through them in this order so
cursors stay valid between calls.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TOOL_CATEGORIES = ("assistant", "thread", "message", "run", "run-step")


class ToolDefinition(BaseModel):
    """MCP metadata for one tool."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(pattern=r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")
    title: str
    description: str
    category: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")
    read_only_hint: bool = False
    destructive_hint: bool = False

    @property
    def annotations(self) -> dict[str, bool]:
        """MCP tool annotations (behavior hints)."""
        return {"readOnlyHint": self.read_only_hint, "destructiveHint": self.destructive_hint}


def _id(kind: str, prefix: str) -> dict[str, Any]:
    return {
        "type": "string",
        "description": f"The {kind} ID (format: '{prefix}' followed by 24 characters).",
    }


def _object(
    properties: dict[str, Any], required: tuple[str, ...] = ()
) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


_METADATA = {
    "type": "object",
    "description": "Custom key-value pairs (e.g., {\"department\": \"support\"}). Max 16KB.",
}

_TOOLS = {
    "type": "array",
    "description": "Tools to enable: code_interpreter, file_search, function.",
    "items": {
        "type": "object",
        "properties": {
            "type": {"type": "string", "enum": ["code_interpreter", "file_search", "function"]}
        },
        "required": ["type"],
    },
}

_TOOL_RESOURCES = {
    "type": "object",
    "description": "Resources for tools; must match the tools array.",
    "properties": {
        "file_search": {
            "type": "object",
            "properties": {"vector_store_ids": {"type": "array", "items": {"type": "string"}}},
            "required": ["vector_store_ids"],
        },
        "code_interpreter": {
            "type": "object",
            "properties": {"file_ids": {"type": "array", "items": {"type": "string"}}},
            "required": ["file_ids"],
        },
    },
}


def _pagination(noun: str, prefix: str) -> dict[str, Any]:
    return {
        "limit": {
            "type": "integer",
            "minimum": 1,
            "maximum": 100,
            "description": f"Maximum number of {noun} to return (1-100, default: 20).",
        },
        "order": {
            "type": "string",
            "enum": ["asc", "desc"],
            "description": "Sort order by creation date (default: desc).",
        },
        "after": {"type": "string", "description": f"List {noun} after this ID ({prefix}...)."},
        "before": {"type": "string", "description": f"List {noun} before this ID ({prefix}...)."},
    }


_ASSISTANT_FIELDS = {
    "model": {"type": "string", "description": "Model to use (e.g., \"gpt-4\", \"gpt-4o\")."},
    "name": {"type": "string", "description": "Descriptive name for the assistant."},
    "description": {"type": "string", "description": "What the assistant does."},
    "instructions": {"type": "string", "description": "System instructions for the assistant."},
    "tools": _TOOLS,
    "tool_resources": _TOOL_RESOURCES,
    "metadata": _METADATA,
    "temperature": {"type": "number", "minimum": 0, "maximum": 2},
    "top_p": {"type": "number", "minimum": 0, "maximum": 1},
}

_ASSISTANT_ID = _id("assistant", "asst_")
_THREAD_ID = _id("thread", "thread_")
_MESSAGE_ID = _id("message", "msg_")
_RUN_ID = _id("run", "run_")
_STEP_ID = _id("run step", "step_")


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="assistant-create",
        title="Create AI Assistant",
        description=(
            "Create a new AI assistant with custom instructions and tools "
            "(code interpreter, file search, functions). Returns the assistant ID."
        ),
        category="assistant",
        inputSchema=_object(_ASSISTANT_FIELDS, required=("model",)),
    ),
    ToolDefinition(
        name="assistant-list",
        title="List All Assistants",
        description="List assistants with pagination support.",
        category="assistant",
        inputSchema=_object(_pagination("assistants", "asst_")),
        read_only_hint=True,
    ),
    ToolDefinition(
        name="assistant-get",
        title="Get Assistant Details",
        description="Retrieve an assistant's configuration, tools, and metadata.",
        category="assistant",
        inputSchema=_object({"assistant_id": _ASSISTANT_ID}, required=("assistant_id",)),
        read_only_hint=True,
    ),
    ToolDefinition(
        name="assistant-update",
        title="Update Assistant",
        description="Modify an existing assistant's model, instructions, tools, or metadata.",
        category="assistant",
        inputSchema=_object(
            {"assistant_id": _ASSISTANT_ID, **_ASSISTANT_FIELDS}, required=("assistant_id",)
        ),
    ),
    ToolDefinition(
        name="assistant-delete",
        title="Delete Assistant",
        description="Permanently delete an assistant. This cannot be undone.",
        category="assistant",
        inputSchema=_object({"assistant_id": _ASSISTANT_ID}, required=("assistant_id",)),
        destructive_hint=True,
    ),
    ToolDefinition(
        name="thread-create",
        title="Create Conversation Thread",
        description="Create a conversation thread, optionally seeded with messages.",
        category="thread",
        inputSchema=_object(
            {
                "messages": {
                    "type": "array",
                    "description": "Initial messages ({role, content}).",
                    "items": {"type": "object"},
                },
                "tool_resources": _TOOL_RESOURCES,
                "metadata": _METADATA,
            }
        ),
    ),
    ToolDefinition(
        name="thread-get",
        title="Get Thread Details",
        description="Retrieve a thread's metadata.",
        category="thread",
        inputSchema=_object({"thread_id": _THREAD_ID}, required=("thread_id",)),
        read_only_hint=True,
    ),
    ToolDefinition(
        name="thread-update",
        title="Update Thread",
        description="Update a thread's metadata or tool resources.",
        category="thread",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, "tool_resources": _TOOL_RESOURCES, "metadata": _METADATA},
            required=("thread_id",),
        ),
    ),
    ToolDefinition(
        name="thread-delete",
        title="Delete Thread",
        description="Permanently delete a thread and its messages.",
        category="thread",
        inputSchema=_object({"thread_id": _THREAD_ID}, required=("thread_id",)),
        destructive_hint=True,
    ),
    ToolDefinition(
        name="message-create",
        title="Create Message",
        description="Add a message to a thread.",
        category="message",
        inputSchema=_object(
            {
                "thread_id": _THREAD_ID,
                "role": {"type": "string", "enum": ["user", "assistant"]},
                "content": {"type": "string", "description": "Message text."},
                "metadata": _METADATA,
            },
            required=("thread_id", "role", "content"),
        ),
    ),
    ToolDefinition(
        name="message-list",
        title="List Thread Messages",
        description="List the messages of a thread, optionally filtered by run.",
        category="message",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, **_pagination("messages", "msg_"), "run_id": _RUN_ID},
            required=("thread_id",),
        ),
        read_only_hint=True,
    ),
    ToolDefinition(
        name="message-get",
        title="Get Message Details",
        description="Retrieve a single message.",
        category="message",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, "message_id": _MESSAGE_ID},
            required=("thread_id", "message_id"),
        ),
        read_only_hint=True,
    ),
    ToolDefinition(
        name="message-update",
        title="Update Message",
        description="Update a message's metadata.",
        category="message",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, "message_id": _MESSAGE_ID, "metadata": _METADATA},
            required=("thread_id", "message_id"),
        ),
    ),
    ToolDefinition(
        name="message-delete",
        title="Delete Message",
        description="Permanently delete a message.",
        category="message",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, "message_id": _MESSAGE_ID},
            required=("thread_id", "message_id"),
        ),
        destructive_hint=True,
    ),
    ToolDefinition(
        name="run-create",
        title="Create Assistant Run",
        description="Start a run: have an assistant process a thread.",
        category="run",
        inputSchema=_object(
            {
                "thread_id": _THREAD_ID,
                "assistant_id": _ASSISTANT_ID,
                "model": {"type": "string", "description": "Override the assistant's model."},
                "instructions": {"type": "string"},
                "additional_instructions": {"type": "string"},
                "tools": _TOOLS,
                "metadata": _METADATA,
                "temperature": {"type": "number", "minimum": 0, "maximum": 2},
                "top_p": {"type": "number", "minimum": 0, "maximum": 1},
            },
            required=("thread_id", "assistant_id"),
        ),
    ),
    ToolDefinition(
        name="run-list",
        title="List Thread Runs",
        description="List the runs of a thread.",
        category="run",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, **_pagination("runs", "run_")}, required=("thread_id",)
        ),
        read_only_hint=True,
    ),
    ToolDefinition(
        name="run-get",
        title="Get Run Details",
        description="Retrieve a run's status and details.",
        category="run",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, "run_id": _RUN_ID}, required=("thread_id", "run_id")
        ),
        read_only_hint=True,
    ),
    ToolDefinition(
        name="run-update",
        title="Update Run",
        description="Update a run's metadata.",
        category="run",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, "run_id": _RUN_ID, "metadata": _METADATA},
            required=("thread_id", "run_id"),
        ),
    ),
    ToolDefinition(
        name="run-cancel",
        title="Cancel Run",
        description="Cancel a run that is in progress.",
        category="run",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, "run_id": _RUN_ID}, required=("thread_id", "run_id")
        ),
    ),
    ToolDefinition(
        name="run-submit-tool-outputs",
        title="Submit Tool Outputs",
        description="Submit tool call outputs for a run in the requires_action state.",
        category="run",
        inputSchema=_object(
            {
                "thread_id": _THREAD_ID,
                "run_id": _RUN_ID,
                "tool_outputs": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "tool_call_id": {"type": "string"},
                            "output": {"type": "string"},
                        },
                        "required": ["tool_call_id", "output"],
                    },
                },
            },
            required=("thread_id", "run_id", "tool_outputs"),
        ),
    ),
    ToolDefinition(
        name="run-step-list",
        title="List Run Steps",
        description="List the steps of a run.",
        category="run-step",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, "run_id": _RUN_ID, **_pagination("run steps", "step_")},
            required=("thread_id", "run_id"),
        ),
        read_only_hint=True,
    ),
    ToolDefinition(
        name="run-step-get",
        title="Get Run Step Details",
        description="Retrieve a single run step.",
        category="run-step",
        inputSchema=_object(
            {"thread_id": _THREAD_ID, "run_id": _RUN_ID, "step_id": _STEP_ID},
            required=("thread_id", "run_id", "step_id"),
        ),
        read_only_hint=True,
    ),
)

TOOL_DEFINITIONS_BY_NAME: dict[str, ToolDefinition] = {d.name: d for d in TOOL_DEFINITIONS}


def get_tool_definition(name: str) -> ToolDefinition | None:
    return TOOL_DEFINITIONS_BY_NAME.get(name)
