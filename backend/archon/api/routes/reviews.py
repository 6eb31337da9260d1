import logging
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from openai import APIError
from sse_starlette.sse import EventSourceResponse

from archon.agent.artifacts import ArchitectureReview, CodeProfile
from archon.agent.document_parser import parse_architecture_document
from archon.api.deps import OrchestratorDep, StoreDep
from archon.models import ErrorResponse, ReviewRequest, ValidationErrorResponse

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ValidationErrorResponse},
    500: {"model": ErrorResponse},
}


def provider_error_detail(exc: APIError) -> str:
    """Prefer the provider's own `error.message` over the client library's wrapper text."""
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return exc.message


def _code_profile_for(payload: ReviewRequest) -> CodeProfile | None:
    if payload.repo_url is not None:
        logger.info("Repository analysis is not available; ignoring repoUrl %s", payload.repo_url)
    return None


@router.post(
    "",
    status_code=201,
    response_model=ArchitectureReview,
    responses=ERROR_RESPONSES,
)
async def create_review(
    payload: ReviewRequest,
    orchestrator: OrchestratorDep,
    store: StoreDep,
) -> Any:
    """Parse the document, run the three-stage review pipeline and store the result."""
    try:
        input_data = parse_architecture_document(payload.architecture_text)
        review = await orchestrator.perform_review(
            input_data,
            code_profile=_code_profile_for(payload),
            model=payload.model,
        )
        store.save(review)
        return review
    except APIError as e:
        logger.error("Completion provider error: %s", e, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "API Error", "details": provider_error_detail(e)},
        )
    except Exception as e:
        logger.error("Review generation failed: %s", e, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to generate architecture review", "details": str(e)},
        )


@router.post("/stream", responses={400: {"model": ValidationErrorResponse}})
async def stream_review(
    payload: ReviewRequest,
    orchestrator: OrchestratorDep,
    store: StoreDep,
):
    """Run the review pipeline and stream progress via SSE."""
    input_data = parse_architecture_document(payload.architecture_text)
    return EventSourceResponse(
        orchestrator.stream_review(
            input_data,
            store,
            code_profile=_code_profile_for(payload),
            model=payload.model,
        )
    )


@router.get("", response_model=list[ArchitectureReview])
async def list_reviews(store: StoreDep) -> Any:
    return store.find_all()


@router.get("/{review_id}", response_model=ArchitectureReview, responses={404: {"model": ErrorResponse}})
async def read_review(review_id: str, store: StoreDep) -> Any:
    review = store.find_by_id(review_id)
    if review is None:
        return JSONResponse(status_code=404, content={"error": "Review not found"})
    return review
