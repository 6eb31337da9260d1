import logging
import time
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from archon.agent.artifacts import LLMMessage
from archon.agent.llm_client import CompletionProvider, LLMClient
from archon.agent.normalizer import decode_completion

logger = logging.getLogger(__name__)

InType = TypeVar("InType", bound=BaseModel)
OutType = TypeVar("OutType")


class BaseAgent(ABC, Generic[InType, OutType]):
    """Abstract base class for the review pipeline stages."""

    stage: ClassVar[str]
    context: ClassVar[str]
    temperature: ClassVar[float]
    max_tokens: ClassVar[int]

    def __init__(self, llm: CompletionProvider | None = None):
        self.llm = llm if llm is not None else LLMClient()

    @abstractmethod
    async def run(self, input_data: InType) -> OutType:
        """Run the stage on the given input to produce the output artifact."""
        pass

    async def _complete_and_decode(self, messages: list[LLMMessage], schema: Any) -> Any:
        started = time.monotonic()
        logger.info("Stage %s started (model=%s)", self.stage, self.llm.model_name)
        completion = await self.llm.complete(
            messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        result = decode_completion(completion, self.context, schema)
        logger.info(
            "Stage %s finished in %.2fs",
            self.stage,
            time.monotonic() - started,
        )
        return result
