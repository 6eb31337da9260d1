from archon.agent.artifacts import ArchitectureIssue, ArchitectureModel, CodeProfile
from archon.agent.base import BaseAgent
from archon.agent.prompt_builder import build_issue_detection_prompt


class IssueDetectionAgent(BaseAgent[ArchitectureModel, list[ArchitectureIssue]]):
    """
    Detects architectural risks in an ArchitectureModel. An empty list means no issues.
    """

    stage = "issues"
    context = "ArchitectureIssues"
    temperature = 0.5
    max_tokens = 4096

    async def run(
        self,
        input_data: ArchitectureModel,
        code_profile: CodeProfile | None = None,
    ) -> list[ArchitectureIssue]:
        messages = build_issue_detection_prompt(input_data, code_profile)
        return await self._complete_and_decode(messages, list[ArchitectureIssue])
