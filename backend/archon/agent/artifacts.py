from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

ComponentType = Literal["service", "db", "queue", "cache", "frontend", "job", "external-api"]
IssueCategory = Literal["scalability", "reliability", "security", "data", "observability", "devex"]
Severity = Literal["low", "medium", "high"]
EffortEstimate = Literal["S", "M", "L"]
DiagramType = Literal["mermaid", "plantuml", "unknown"]


class ArtifactModel(BaseModel):
    """Base for every artifact exchanged with the LLM or the HTTP client (camelCase on the wire)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LLMMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class Section(ArtifactModel):
    title: str
    content: str = ""


class Diagram(ArtifactModel):
    type: DiagramType
    raw: str


class ArchitectureInput(ArtifactModel):
    """Parsed form of the user's architecture document."""
    raw_text: str = Field(description="The document exactly as submitted")
    sections: list[Section] = Field(default_factory=list)
    diagrams: list[Diagram] = Field(default_factory=list)


class Component(ArtifactModel):
    id: str = Field(description="Kebab-case identifier, unique within the model")
    name: str
    type: ComponentType
    description: str
    tech_stack: list[str] | None = None
    data_stored: list[str] | None = None
    # Ids of other components. Never checked against the model; the LLM may invent them.
    sync_dependencies: list[str] = Field(default_factory=list)
    async_dependencies: list[str] = Field(default_factory=list)


class CrossCuttingConcerns(ArtifactModel):
    logging: str | None = None
    monitoring: str | None = None
    auth: str | None = None
    resilience: str | None = None


class ArchitectureModel(ArtifactModel):
    """Artifact produced by the extraction stage."""
    context: str = Field(description="Overall purpose and context of the system")
    components: list[Component] = Field(default_factory=list)
    cross_cutting_concerns: CrossCuttingConcerns = Field(default_factory=CrossCuttingConcerns)

    @model_validator(mode="after")
    def _unique_component_ids(self) -> "ArchitectureModel":
        seen: set[str] = set()
        duplicates: list[str] = []
        for component in self.components:
            if component.id in seen and component.id not in duplicates:
                duplicates.append(component.id)
            seen.add(component.id)
        if duplicates:
            raise ValueError(f"Duplicate component ids: {', '.join(duplicates)}")
        return self

    def dangling_dependencies(self) -> dict[str, list[str]]:
        """Map component id -> dependency ids that name no component in this model."""
        known = {component.id for component in self.components}
        dangling: dict[str, list[str]] = {}
        for component in self.components:
            missing = [
                dep
                for dep in component.sync_dependencies + component.async_dependencies
                if dep not in known
            ]
            if missing:
                dangling[component.id] = missing
        return dangling


class ArchitectureIssue(ArtifactModel):
    """A single risk produced by the issue detection stage."""
    id: str
    title: str
    description: str
    category: IssueCategory
    severity: Severity
    # Best effort only; not checked against the model's component ids.
    components_involved: list[str] = Field(default_factory=list)
    recommendation: str
    effort_estimate: EffortEstimate = Field(description="S=days, M=weeks, L=months")


class CodeProfile(ArtifactModel):
    """Summary of a code repository. Repository analysis is not implemented, so nothing produces this yet."""
    languages: list[str] = Field(default_factory=list)
    frameworks: list[str] = Field(default_factory=list)
    service_count_estimate: int = 0
    infra_hints: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)


class ReviewReport(ArtifactModel):
    """Artifact produced by the report generation stage."""
    summary: str = Field(description="2-3 sentence executive summary")
    recommendations_overview: str
    full_report_markdown: str


class ArchitectureReview(ArtifactModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    summary: str
    architecture_model: ArchitectureModel
    issues: list[ArchitectureIssue]
    recommendations_overview: str
    full_report_markdown: str
    created_at: str = Field(description="ISO-8601 UTC timestamp")
