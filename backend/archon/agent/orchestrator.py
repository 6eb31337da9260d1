import json
import logging
import secrets
from collections.abc import AsyncIterator, Callable
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from archon.agent.artifacts import (
    ArchitectureInput,
    ArchitectureIssue,
    ArchitectureModel,
    ArchitectureReview,
    CodeProfile,
    ReviewReport,
)
from archon.agent.extraction_agent import ExtractionAgent
from archon.agent.issue_agent import IssueDetectionAgent
from archon.agent.llm_client import CompletionProvider, LLMClient
from archon.agent.report_agent import ReportAgent
from archon.store import ReviewStore

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str], CompletionProvider]

REVIEW_READY = "review_ready"

STAGE_MESSAGES = {
    "extraction": "Extracting architecture model...",
    "extraction_done": "Architecture model extracted.",
    "issues": "Detecting architecture issues...",
    "issues_done": "Issue detection finished.",
    "report": "Writing review report...",
    "report_done": "Review report written.",
}


def new_review_id() -> str:
    return secrets.token_urlsafe(16)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _dump(artifact: Any) -> Any:
    if isinstance(artifact, BaseModel):
        return artifact.model_dump(by_alias=True)
    if isinstance(artifact, list):
        return [_dump(item) for item in artifact]
    return artifact


def assemble_review(
    architecture_model: ArchitectureModel,
    issues: list[ArchitectureIssue],
    report: ReviewReport,
) -> ArchitectureReview:
    return ArchitectureReview(
        id=new_review_id(),
        summary=report.summary,
        architecture_model=architecture_model,
        issues=issues,
        recommendations_overview=report.recommendations_overview,
        full_report_markdown=report.full_report_markdown,
        created_at=utc_timestamp(),
    )


class ReviewOrchestrator:
    """
    Runs extract -> detect issues -> generate report, strictly in sequence.

    A per-run model override gets its own completion provider which is passed to
    that run's stage agents; the orchestrator's default provider is never swapped,
    so concurrent runs cannot observe each other's override.
    """

    def __init__(
        self,
        llm: CompletionProvider | None = None,
        provider_factory: ProviderFactory | None = None,
    ):
        self.llm = llm if llm is not None else LLMClient()
        self._provider_factory = provider_factory or (lambda model: LLMClient(model_name=model))

    def provider_for(self, model: str | None) -> CompletionProvider:
        if model:
            logger.info("Using per-run model override %s", model)
            return self._provider_factory(model)
        return self.llm

    async def _release(self, llm: CompletionProvider) -> None:
        """Close a provider built for a single run; the default provider stays open."""
        if llm is self.llm:
            return
        aclose = getattr(llm, "aclose", None)
        if aclose is not None:
            await aclose()

    async def _pipeline(
        self,
        input_data: ArchitectureInput,
        *,
        llm: CompletionProvider,
        code_profile: CodeProfile | None,
    ) -> AsyncIterator[tuple[str, Any]]:
        yield "extraction", None
        architecture_model = await ExtractionAgent(llm=llm).run(input_data)
        yield "extraction_done", architecture_model

        yield "issues", None
        issues = await IssueDetectionAgent(llm=llm).run(architecture_model, code_profile=code_profile)
        yield "issues_done", issues

        yield "report", None
        report = await ReportAgent(llm=llm).run(architecture_model, issues)
        yield "report_done", report

        yield REVIEW_READY, assemble_review(architecture_model, issues, report)

    async def perform_review(
        self,
        input_data: ArchitectureInput,
        code_profile: CodeProfile | None = None,
        model: str | None = None,
    ) -> ArchitectureReview:
        """Run the full pipeline. Any stage failure propagates; nothing partial is returned."""
        llm = self.provider_for(model)
        try:
            async for status, artifact in self._pipeline(input_data, llm=llm, code_profile=code_profile):
                if status == REVIEW_READY:
                    logger.info(
                        "Review %s generated with %s issue(s)",
                        artifact.id,
                        len(artifact.issues),
                    )
                    return artifact
            raise RuntimeError("Review pipeline ended without producing a review")
        finally:
            await self._release(llm)

    async def stream_review(
        self,
        input_data: ArchitectureInput,
        store: ReviewStore,
        *,
        code_profile: CodeProfile | None = None,
        model: str | None = None,
    ) -> AsyncIterator[str]:
        """
        Same pipeline as perform_review, yielding JSON progress events for SSE.
        The review is stored before the final "completed" event; on failure an
        "error" event names the stage and nothing is stored.
        """
        yield json.dumps({"status": "starting", "message": "Initializing review pipeline..."})
        stage = "extraction"
        llm = self.provider_for(model)
        try:
            async for status, artifact in self._pipeline(input_data, llm=llm, code_profile=code_profile):
                if status == REVIEW_READY:
                    store.save(artifact)
                    yield json.dumps({
                        "status": "completed",
                        "message": "Review completed.",
                        "artifact": _dump(artifact),
                    })
                    return

                stage = status.removesuffix("_done")
                event: dict[str, Any] = {"status": status, "message": STAGE_MESSAGES[status]}
                if artifact is not None:
                    event["artifact"] = _dump(artifact)
                yield json.dumps(event)
        except Exception as e:
            logger.error("Review pipeline error during %s stage: %s", stage, e, exc_info=True)
            yield json.dumps({"status": "error", "stage": stage, "message": str(e)})
        finally:
            await self._release(llm)
