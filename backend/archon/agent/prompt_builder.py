"""Message builders for the three review pipeline stages. Pure functions, no I/O."""

import json

from archon.agent.artifacts import (
    ArchitectureInput,
    ArchitectureIssue,
    ArchitectureModel,
    CodeProfile,
    LLMMessage,
)
from archon.agent.prompts.extraction import EXTRACTION_SYSTEM_PROMPT
from archon.agent.prompts.issues import ISSUE_DETECTION_SYSTEM_PROMPT
from archon.agent.prompts.report import REPORT_GENERATION_SYSTEM_PROMPT


def _to_json(artifact) -> str:
    return artifact.model_dump_json(by_alias=True, indent=2)


def _render_sections(input_data: ArchitectureInput) -> str:
    if not input_data.sections:
        return ""
    body = "\n\n".join(f"## {section.title}\n{section.content}" for section in input_data.sections)
    return f"Sections found:\n{body}"


def _render_diagrams(input_data: ArchitectureInput) -> str:
    if not input_data.diagrams:
        return ""
    body = "\n\n".join(
        f"Type: {diagram.type}\n```\n{diagram.raw}\n```" for diagram in input_data.diagrams
    )
    return f"Diagrams found:\n{body}"


def build_extraction_prompt(input_data: ArchitectureInput) -> list[LLMMessage]:
    parts = [
        f"Architecture Document:\n\n{input_data.raw_text}",
        _render_sections(input_data),
        _render_diagrams(input_data),
        "Please extract the architecture model as JSON.",
    ]
    return [
        LLMMessage(role="system", content=EXTRACTION_SYSTEM_PROMPT),
        LLMMessage(role="user", content="\n\n".join(part for part in parts if part)),
    ]


def build_issue_detection_prompt(
    model: ArchitectureModel,
    code_profile: CodeProfile | None = None,
) -> list[LLMMessage]:
    parts = [f"Architecture Model:\n{_to_json(model)}"]
    if code_profile is not None:
        parts.append(f"Code Profile:\n{_to_json(code_profile)}")
    parts.append("Please analyze and return detected issues as JSON array.")
    return [
        LLMMessage(role="system", content=ISSUE_DETECTION_SYSTEM_PROMPT),
        LLMMessage(role="user", content="\n\n".join(parts)),
    ]


def build_report_generation_prompt(
    model: ArchitectureModel,
    issues: list[ArchitectureIssue],
) -> list[LLMMessage]:
    issues_json = json.dumps([issue.model_dump(by_alias=True) for issue in issues], indent=2)
    parts = [
        f"Architecture Model:\n{_to_json(model)}",
        f"Detected Issues:\n{issues_json}",
        "Please generate the architecture review report as JSON.",
    ]
    return [
        LLMMessage(role="system", content=REPORT_GENERATION_SYSTEM_PROMPT),
        LLMMessage(role="user", content="\n\n".join(parts)),
    ]
