"""Static prompt catalog.

Each prompt renders a single user message from a ``str.format`` template.
Optional arguments fall back to per-argument defaults; an optional section
(``sections``) is included only when its argument is supplied.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from assistants_mcp.errors import PromptNotFoundError, ValidationError


class PromptArgumentSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    required: bool = False
    default: str | None = None


class PromptTemplate(BaseModel):
    """A prompt definition plus the template that renders it."""

    model_config = ConfigDict(frozen=True)

    name: str
    title: str
    description: str
    category: str
    tags: tuple[str, ...] = ()
    arguments: tuple[PromptArgumentSpec, ...] = ()
    template: str = Field(exclude=True)
    sections: dict[str, str] = Field(default_factory=dict, exclude=True)

    def argument(self, name: str) -> PromptArgumentSpec | None:
        return next((arg for arg in self.arguments if arg.name == name), None)


class RenderedPrompt(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    text: str


def _arg(
    name: str, description: str, required: bool = False, default: str | None = None
) -> PromptArgumentSpec:
    return PromptArgumentSpec(name=name, description=description, required=required, default=default)


PROMPT_DEFINITIONS: tuple[PromptTemplate, ...] = (
    PromptTemplate(
        name="create-coding-assistant",
        title="Create Coding Assistant",
        description="Generate a specialized coding assistant with custom instructions and tools",
        category="assistant",
        tags=("coding", "development", "assistant"),
        arguments=(
            _arg(
                "specialization",
                'Programming specialization (e.g., "Python web development", "React frontend", "DevOps")',
                required=True,
            ),
            _arg(
                "experience_level",
                "Target experience level (beginner, intermediate, expert)",
                default="intermediate",
            ),
            _arg(
                "additional_tools",
                "Additional tools to enable (code_interpreter, file_search)",
                default="code_interpreter",
            ),
        ),
        template=(
            "Create a specialized coding assistant for {specialization}. The assistant should "
            "be designed for {experience_level} developers and include {additional_tools} tools. "
            "Please provide the complete assistant configuration including name, description, "
            "instructions, and tools array."
        ),
    ),
    PromptTemplate(
        name="create-data-analyst",
        title="Create Data Analyst Assistant",
        description="Generate a data analysis assistant with statistical and visualization capabilities",
        category="assistant",
        tags=("data", "analytics", "statistics", "assistant"),
        arguments=(
            _arg(
                "domain",
                'Data analysis domain (e.g., "business intelligence", "scientific research", "marketing")',
                required=True,
            ),
            _arg("tools_focus", "Primary tools focus (python, r, sql, visualization)", default="python"),
        ),
        template=(
            "Create a data analyst assistant specialized in {domain} with a focus on {tools_focus}. "
            "The assistant should be capable of data analysis, statistical modeling, and creating "
            "visualizations. Include appropriate tools and detailed instructions for data analysis "
            "workflows."
        ),
    ),
    PromptTemplate(
        name="create-writing-assistant",
        title="Create Writing Assistant",
        description="Generate a professional writing assistant for content creation and editing",
        category="assistant",
        tags=("writing", "content", "editing", "assistant"),
        arguments=(
            _arg(
                "writing_type",
                'Type of writing (e.g., "technical documentation", "marketing copy", "academic papers")',
                required=True,
            ),
            _arg(
                "tone",
                "Preferred writing tone (professional, casual, academic, creative)",
                default="professional",
            ),
            _arg(
                "audience",
                "Target audience (general public, technical experts, students, customers)",
                default="general public",
            ),
        ),
        template=(
            "Create a writing assistant specialized in {writing_type} with a {tone} tone for "
            "{audience}. The assistant should help with content creation, editing, proofreading, "
            "and style optimization. Include file_search tools for research capabilities."
        ),
    ),
    PromptTemplate(
        name="create-conversation-thread",
        title="Create Conversation Thread",
        description="Set up a new conversation thread with initial context and metadata",
        category="thread",
        tags=("thread", "conversation", "setup"),
        arguments=(
            _arg(
                "purpose",
                'Purpose of the conversation (e.g., "code review", "data analysis", "writing help")',
                required=True,
            ),
            _arg("context", "Initial context or background information"),
            _arg("user_id", "User identifier for tracking", default="anonymous"),
        ),
        template=(
            "Create a new conversation thread for {purpose}. Set up appropriate metadata including "
            'user_id: "{user_id}", session_type: "{purpose}", and timestamp.{context_section}'
        ),
        sections={"context": "\n\nContext: {context}"},
    ),
    PromptTemplate(
        name="organize-thread-messages",
        title="Organize Thread Messages",
        description="Analyze and organize messages in a thread for better conversation flow",
        category="thread",
        tags=("thread", "organization", "messages"),
        arguments=(
            _arg("thread_id", "Thread ID to analyze", required=True),
            _arg(
                "organization_type",
                "How to organize (chronological, by_topic, by_importance)",
                default="chronological",
            ),
        ),
        template=(
            "Analyze and organize the messages in thread {thread_id} using {organization_type} "
            "organization. Provide a summary of the conversation flow and suggest any improvements "
            "for better structure."
        ),
    ),
    PromptTemplate(
        name="explain-code",
        title="Explain Code",
        description="Provide detailed explanation of how code works",
        category="analysis",
        tags=("code", "explanation", "education"),
        arguments=(
            _arg("code", "Code to explain", required=True),
            _arg("language", "Programming language", default="auto-detect"),
            _arg("detail_level", "Level of detail (basic, intermediate, advanced)", default="intermediate"),
        ),
        template=(
            "Explain how this {language} code works at a {detail_level} level:\n\n```\n{code}\n```\n\n"
            "Break down the logic, explain key concepts, and describe what each part does."
        ),
    ),
    PromptTemplate(
        name="review-code",
        title="Code Review",
        description="Perform comprehensive code review with suggestions for improvement",
        category="analysis",
        tags=("code", "review", "quality"),
        arguments=(
            _arg("code", "Code to review", required=True),
            _arg("language", "Programming language", default="auto-detect"),
            _arg(
                "focus_areas",
                "Specific areas to focus on (security, performance, readability, best_practices)",
                default="all aspects",
            ),
        ),
        template=(
            "Please review this {language} code focusing on {focus_areas}:\n\n```\n{code}\n```\n\n"
            "Provide feedback on code quality, potential issues, and suggestions for improvement."
        ),
    ),
    PromptTemplate(
        name="configure-assistant-run",
        title="Configure Assistant Run",
        description="Set up optimal run configuration for an assistant based on the task",
        category="run",
        tags=("run", "configuration", "optimization"),
        arguments=(
            _arg(
                "task_type",
                "Type of task (code_review, data_analysis, writing, general_qa)",
                required=True,
            ),
            _arg("complexity", "Task complexity (simple, moderate, complex)", default="moderate"),
            _arg("time_sensitivity", "Time sensitivity (low, medium, high)", default="medium"),
        ),
        template=(
            "Configure an optimal assistant run for a {task_type} task with {complexity} complexity "
            "and {time_sensitivity} time sensitivity. Recommend appropriate model, temperature, "
            "max_tokens, and tool_choice settings."
        ),
    ),
    PromptTemplate(
        name="debug-run-issues",
        title="Debug Run Issues",
        description="Analyze and troubleshoot assistant run problems",
        category="run",
        tags=("debug", "troubleshooting", "run"),
        arguments=(
            _arg("run_id", "Run ID that has issues", required=True),
            _arg("issue_description", "Description of the observed issue", required=True),
            _arg(
                "run_status",
                "Current run status (failed, cancelled, requires_action, etc.)",
                default="unknown",
            ),
        ),
        template=(
            "Debug issues with run {run_id}. Current status: {run_status}. Issue description: "
            "{issue_description}. Analyze the run steps, check for errors, and provide "
            "troubleshooting recommendations."
        ),
    ),
    PromptTemplate(
        name="analyze-dataset",
        title="Analyze Dataset",
        description="Perform comprehensive analysis of a dataset",
        category="data",
        tags=("data", "analysis", "statistics"),
        arguments=(
            _arg("dataset_description", "Description of the dataset", required=True),
            _arg("analysis_goals", "What you want to learn from the data", required=True),
            _arg("data_format", "Format of the data (CSV, JSON, database, etc.)", default="CSV"),
        ),
        template=(
            "Analyze this {data_format} dataset: {dataset_description}\n\n"
            "Analysis goals: {analysis_goals}\n\n"
            "Perform exploratory data analysis, identify patterns, and provide insights. Include "
            "statistical summaries and visualizations where appropriate."
        ),
    ),
)


class PromptCatalog:
    """Read-only catalog of prompt templates, in definition order."""

    def __init__(self, definitions: tuple[PromptTemplate, ...] = PROMPT_DEFINITIONS) -> None:
        self._prompts = {prompt.name: prompt for prompt in definitions}

    def __len__(self) -> int:
        return len(self._prompts)

    def list(self) -> list[PromptTemplate]:
        return list(self._prompts.values())

    def names(self) -> list[str]:
        return list(self._prompts)

    def get(self, name: str) -> PromptTemplate | None:
        return self._prompts.get(name)

    def render(self, name: str, arguments: Mapping[str, str] | None = None) -> RenderedPrompt:
        """Fill a prompt's template.

        Raises:
            PromptNotFoundError: If ``name`` is not in the catalog.
            ValidationError: If a required argument is missing or empty.
        """
        prompt = self._prompts.get(name)
        if prompt is None:
            raise PromptNotFoundError(name, self.names())

        supplied = {key: value for key, value in (arguments or {}).items() if value}
        values: dict[str, str] = {}
        for arg in prompt.arguments:
            if arg.name in supplied:
                values[arg.name] = supplied[arg.name]
            elif arg.required:
                raise ValidationError(
                    f"[{name}] Required argument '{arg.name}' is missing. {arg.description}.",
                    parameter=arg.name,
                    details={"prompt": name},
                )
            else:
                values[arg.name] = arg.default or ""

        for arg_name, section in prompt.sections.items():
            values[f"{arg_name}_section"] = (
                section.format(**values) if arg_name in supplied else ""
            )
        return RenderedPrompt(description=prompt.description, text=prompt.template.format(**values))
