from archon.agent.artifacts import ArchitectureIssue, ArchitectureModel, ReviewReport
from archon.agent.base import BaseAgent
from archon.agent.prompt_builder import build_report_generation_prompt


class ReportAgent(BaseAgent[ArchitectureModel, ReviewReport]):
    """
    Writes the human-readable review: summary, recommendations and the full Markdown report.
    """

    stage = "report"
    context = "Report"
    temperature = 0.7
    # Largest budget: the whole Markdown report comes back inside one JSON string.
    max_tokens = 8192

    async def run(self, input_data: ArchitectureModel, issues: list[ArchitectureIssue]) -> ReviewReport:
        messages = build_report_generation_prompt(input_data, issues)
        return await self._complete_and_decode(messages, ReviewReport)
