from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from archon.agent.orchestrator import ReviewOrchestrator
from archon.store import ReviewStore


@lru_cache
def get_review_store() -> ReviewStore:
    return ReviewStore()


@lru_cache
def get_orchestrator() -> ReviewOrchestrator:
    return ReviewOrchestrator()


StoreDep = Annotated[ReviewStore, Depends(get_review_store)]
OrchestratorDep = Annotated[ReviewOrchestrator, Depends(get_orchestrator)]
