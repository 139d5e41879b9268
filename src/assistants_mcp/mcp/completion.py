"""Argument completion for prompts and resource URIs (completion/complete).

Candidates for a prompt argument come from a per-prompt table first and a
table of common argument names second. Filtering removes duplicates, keeps
candidate order, and matches case-insensitively by prefix, falling back to
substring matching when no candidate starts with the typed value.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from assistants_mcp.catalog import PromptCatalog, ResourceCatalog
from assistants_mcp.errors import ValidationError
from assistants_mcp.mcp.protocol import CompletionArgument, CompletionReference

MAX_COMPLETION_VALUES = 100

REF_PROMPT = "ref/prompt"
REF_RESOURCE = "ref/resource"
REFERENCE_TYPES = (REF_PROMPT, REF_RESOURCE)

MODELS = ["gpt-4", "gpt-4-turbo", "gpt-3.5-turbo", "gpt-4o", "gpt-4o-mini"]
TOOL_TYPES = ["code_interpreter", "file_search", "function"]

_WRITING_TONES = [
    "professional",
    "casual",
    "academic",
    "creative",
    "technical",
    "journalistic",
    "marketing",
    "conversational",
]
_CONTENT_TYPES = [
    "blog posts",
    "technical documentation",
    "marketing copy",
    "academic papers",
    "social media content",
    "email campaigns",
    "product descriptions",
    "press releases",
]
_DATA_TYPES = [
    "financial data",
    "customer data",
    "sales data",
    "marketing data",
    "operational data",
    "survey data",
    "time series data",
    "geospatial data",
    "social media data",
    "web analytics data",
]
_ANALYSIS_TYPES = [
    "descriptive analysis",
    "predictive analysis",
    "prescriptive analysis",
    "diagnostic analysis",
    "exploratory data analysis",
    "statistical analysis",
    "trend analysis",
    "correlation analysis",
]

# prompt name -> argument name -> candidates
PROMPT_ARGUMENT_VALUES: dict[str, dict[str, list[str]]] = {
    "create-coding-assistant": {
        "specialization": [
            "Python web development",
            "React frontend development",
            "Node.js backend development",
            "DevOps and infrastructure",
            "Mobile app development",
            "Machine learning and AI",
            "Database design and optimization",
            "API development and integration",
            "Cloud architecture",
            "Microservices architecture",
            "Full-stack JavaScript",
            "Data engineering",
            "Cybersecurity",
            "Game development",
            "Blockchain development",
        ],
        "experience_level": ["beginner", "intermediate", "expert", "senior"],
        "additional_tools": [
            "code_interpreter",
            "file_search",
            "code_interpreter, file_search",
            "function",
        ],
    },
    "create-data-analyst": {
        "domain": [
            "business intelligence",
            "scientific research",
            "marketing",
            "finance",
            "healthcare",
            "operations",
        ],
        "tools_focus": ["python", "r", "sql", "visualization"],
        "data_type": _DATA_TYPES,
        "analysis_type": _ANALYSIS_TYPES,
    },
    "create-writing-assistant": {
        "writing_type": _CONTENT_TYPES,
        "content_type": _CONTENT_TYPES,
        "tone": _WRITING_TONES,
        "writing_style": _WRITING_TONES,
        "audience": ["general public", "technical experts", "students", "customers"],
    },
    "configure-assistant-run": {
        "task_type": ["code_review", "data_analysis", "writing", "general_qa"],
        "complexity": ["simple", "moderate", "complex"],
        "time_sensitivity": ["low", "medium", "high"],
        "model": MODELS,
        "tool_choice": ["auto", "none", "required"],
    },
    "organize-thread-messages": {
        "organization_type": ["chronological", "by_topic", "by_importance"],
    },
    "explain-code": {
        "detail_level": ["basic", "intermediate", "advanced"],
    },
    "review-code": {
        "focus_areas": ["security", "performance", "readability", "best_practices"],
    },
    "debug-run-issues": {
        "run_status": [
            "queued",
            "in_progress",
            "requires_action",
            "cancelling",
            "cancelled",
            "failed",
            "completed",
            "expired",
        ],
    },
    "analyze-dataset": {
        "data_format": ["CSV", "JSON", "database", "Excel", "Parquet"],
    },
}

# ID argument -> ID prefix
ID_ARGUMENT_PREFIXES = {
    "assistant_id": "asst_",
    "thread_id": "thread_",
    "message_id": "msg_",
    "run_id": "run_",
    "file_id": "file-",
}

_EXAMPLE_ID_SUFFIXES = (
    "abc123def456ghi789jkl012",
    "def456ghi789jkl012mno345",
    "ghi789jkl012mno345pqr678",
)

GENERIC_ARGUMENT_VALUES: dict[str, list[str]] = {
    "model": MODELS,
    "tools": TOOL_TYPES,
    "additional_tools": TOOL_TYPES,
    "tool_choice": ["auto", "none", "required"],
    "order": ["asc", "desc"],
    "limit": ["10", "20", "50", "100"],
}

RESOURCE_URI_PATTERNS = [
    "assistant://templates/",
    "docs://",
    "examples://workflows/",
]


@dataclass(frozen=True)
class CompletionResult:
    values: list[str] = field(default_factory=list)
    total: int = 0
    has_more: bool = False


def _id_candidates(prefix: str) -> list[str]:
    return [prefix, *(f"{prefix}{suffix}" for suffix in _EXAMPLE_ID_SUFFIXES)]


def filter_candidates(candidates: list[str], value: str) -> tuple[list[str], int]:
    """Dedupe and filter ``candidates`` by ``value``; return (capped values, uncapped total)."""
    unique = list(dict.fromkeys(candidates))
    needle = value.lower()
    if needle:
        matches = [c for c in unique if c.lower().startswith(needle)]
        if not matches:
            matches = [c for c in unique if needle in c.lower()]
    else:
        matches = unique
    return matches[:MAX_COMPLETION_VALUES], len(matches)


class CompletionEngine:
    """Completes prompt arguments and resource URIs from the static catalogs."""

    def __init__(self, prompts: PromptCatalog, resources: ResourceCatalog) -> None:
        self._prompts = prompts
        self._resources = resources

    def prompt_candidates(self, prompt_name: str | None, argument_name: str) -> list[str]:
        per_prompt = PROMPT_ARGUMENT_VALUES.get(prompt_name or "", {})
        if argument_name in per_prompt:
            return list(per_prompt[argument_name])
        if argument_name in ID_ARGUMENT_PREFIXES:
            return _id_candidates(ID_ARGUMENT_PREFIXES[argument_name])
        if argument_name in GENERIC_ARGUMENT_VALUES:
            return list(GENERIC_ARGUMENT_VALUES[argument_name])
        prompt = self._prompts.get(prompt_name) if prompt_name else None
        spec = prompt.argument(argument_name) if prompt else None
        return [spec.default] if spec is not None and spec.default else []

    def resource_candidates(self) -> list[str]:
        return [*self._resources.uris(), *RESOURCE_URI_PATTERNS]

    def complete(
        self, ref: CompletionReference, argument: CompletionArgument
    ) -> CompletionResult:
        """Return matching values for ``argument`` in the context of ``ref``.

        Raises:
            ValidationError: If ``ref.type`` is not a supported reference type.
        """
        if ref.type == REF_PROMPT:
            candidates = self.prompt_candidates(ref.name, argument.name)
        elif ref.type == REF_RESOURCE:
            candidates = self.resource_candidates()
        else:
            raise ValidationError(
                f"Unsupported reference type: {ref.type}. Supported types: "
                f"{', '.join(REFERENCE_TYPES)}.",
                parameter="ref.type",
            )
        values, total = filter_candidates(candidates, argument.value)
        return CompletionResult(
            values=values, total=total, has_more=total > MAX_COMPLETION_VALUES
        )
