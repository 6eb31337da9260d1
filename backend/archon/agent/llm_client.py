import logging
from collections.abc import Sequence
from typing import Protocol

from openai import AsyncOpenAI, OpenAIError

from archon.agent.artifacts import LLMMessage
from archon.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096


class CompletionProvider(Protocol):
    """Anything that turns a conversation into completion text."""

    model_name: str

    async def complete(
        self,
        messages: Sequence[LLMMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str: ...


class LLMClient:
    """Completion provider for any endpoint speaking the OpenAI chat completions API (Groq by default)."""

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT

        # Use LLM_API_KEY or fall back to GROQ_API_KEY
        self._api_key = api_key or settings.LLM_API_KEY or settings.GROQ_API_KEY
        self._base_url = base_url or settings.LLM_BASE_URL
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        """The underlying AsyncOpenAI client, built on first use so a missing key fails the request, not startup."""
        if self._client is None:
            if not self._api_key:
                raise OpenAIError("No API key configured: set LLM_API_KEY or GROQ_API_KEY")
            client_kwargs = {"base_url": self._base_url, "api_key": self._api_key}
            if settings.LLM_TIMEOUT_SECONDS is not None:
                client_kwargs["timeout"] = settings.LLM_TIMEOUT_SECONDS
            self._client = AsyncOpenAI(**client_kwargs)
        return self._client

    async def aclose(self) -> None:
        """Release the HTTP connection pool, if a client was ever built."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    def _chat_completion_kwargs(self, *, temperature: float | None, max_tokens: int | None) -> dict:
        """Build provider/model-compatible kwargs for chat completions."""
        kwargs: dict = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        model_name = (self.model_name or "").lower()
        # GPT-5 family rejects non-default temperature values in some OpenAI endpoints.
        if temperature is not None and not model_name.startswith("gpt-5"):
            kwargs["temperature"] = temperature
        return kwargs

    async def complete(
        self,
        messages: Sequence[LLMMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Send the conversation and return the first choice's text, or "" when the provider
        returned no content. Provider errors (auth, rate limit, bad request) propagate.
        """
        temperature = DEFAULT_TEMPERATURE if temperature is None else temperature
        max_tokens = DEFAULT_MAX_TOKENS if max_tokens is None else max_tokens

        logger.info(
            "Issuing completion request to model %s (temperature=%s, max_tokens=%s)...",
            self.model_name,
            temperature,
            max_tokens,
        )
        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=[message.model_dump() for message in messages],
                **self._chat_completion_kwargs(temperature=temperature, max_tokens=max_tokens),
            )
        except Exception as e:
            logger.error("Error calling LLM provider %s: %s", self.model_name, e)
            raise

        if not getattr(response, "choices", None):
            logger.warning("Received 0 choices from %s", self.model_name)
            return ""

        text_response = response.choices[0].message.content or ""
        logger.info(
            "Received %s characters from %s.",
            len(text_response),
            self.model_name,
        )
        return text_response
