from collections.abc import AsyncGenerator, Callable, Iterator
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from archon.agent.orchestrator import ReviewOrchestrator
from archon.api.deps import get_orchestrator, get_review_store
from archon.main import app
from archon.store import ReviewStore


class ScriptedProvider:
    """Completion provider returning canned responses (or raising canned errors) in order."""

    def __init__(self, responses, model_name: str = "default-model"):
        self.model_name = model_name
        self._responses = list(responses)

    async def complete(self, messages, *, temperature=None, max_tokens=None):
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def store() -> ReviewStore:
    return ReviewStore()


@pytest.fixture
def use_responses() -> Callable[[list], ReviewOrchestrator]:
    """Install an orchestrator whose provider replays the given completions."""

    def install(responses: list) -> ReviewOrchestrator:
        orchestrator = ReviewOrchestrator(llm=ScriptedProvider(responses))
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        return orchestrator

    return install


@pytest_asyncio.fixture
async def client(store: ReviewStore) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing, with a fresh store per test."""
    app.dependency_overrides[get_review_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def without_api_key() -> Iterator[None]:
    """Run with neither LLM_API_KEY nor GROQ_API_KEY set and the real orchestrator dependency."""
    get_orchestrator.cache_clear()
    with patch("archon.agent.llm_client.settings.LLM_API_KEY", None), \
         patch("archon.agent.llm_client.settings.GROQ_API_KEY", None):
        yield
    get_orchestrator.cache_clear()
