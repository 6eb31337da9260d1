import logging

from archon.agent.artifacts import ArchitectureInput, ArchitectureModel
from archon.agent.base import BaseAgent
from archon.agent.prompt_builder import build_extraction_prompt

logger = logging.getLogger(__name__)


class ExtractionAgent(BaseAgent[ArchitectureInput, ArchitectureModel]):
    """
    Extracts a structured ArchitectureModel from the parsed document.
    """

    stage = "extraction"
    context = "ArchitectureModel"
    temperature = 0.3
    max_tokens = 4096

    async def run(self, input_data: ArchitectureInput) -> ArchitectureModel:
        model = await self._complete_and_decode(build_extraction_prompt(input_data), ArchitectureModel)

        # Dependency ids are not validated against the component set; the model may invent them.
        dangling = model.dangling_dependencies()
        if dangling:
            logger.warning("Extracted model references unknown components: %s", dangling)
        return model
