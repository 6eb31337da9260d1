import json

import pytest

from archon.agent.artifacts import ArchitectureIssue, ArchitectureModel
from archon.agent.normalizer import (
    ParseFailure,
    ParseOk,
    ReviewDecodeError,
    clean,
    decode_completion,
    parse_as,
    repair_control_characters,
)

PAYLOAD = '{"summary": "ok", "items": [1, 2, 3]}'


@pytest.mark.parametrize(
    "raw",
    [
        PAYLOAD,
        f"```json\n{PAYLOAD}\n```",
        f"```\n{PAYLOAD}\n```",
        f"Here's the JSON:\n{PAYLOAD}",
        f"Here is the response: {PAYLOAD}",
        f"<think>\nThe user wants {{json}}.\nLet me think.\n</think>\n{PAYLOAD}",
        f"<THINK>plan</THINK>Here's the JSON:\n```json\n{PAYLOAD}\n```",
        f"   \n{PAYLOAD}\n\n",
    ],
)
def test_clean_then_decode_recovers_payload(raw):
    result = parse_as(clean(raw), "Report")

    assert isinstance(result, ParseOk)
    assert result.value == json.loads(PAYLOAD)


def test_clean_is_idempotent_on_clean_json():
    once = clean(PAYLOAD)

    assert once == PAYLOAD
    assert clean(once) == once


def test_clean_handles_empty_input():
    assert clean("") == ""
    assert clean(None) == ""


def test_clean_removes_multiple_think_blocks():
    raw = "<think>a</think><think>\nb\n</think>[]"

    assert clean(raw) == "[]"


def test_parse_as_repairs_literal_newline_in_string():
    raw = '{"fullReportMarkdown": "# Title\nBody\twith tab"}'
    with pytest.raises(json.JSONDecodeError):
        json.loads(raw)

    result = parse_as(raw, "Report")

    assert isinstance(result, ParseOk)
    assert result.value["fullReportMarkdown"] == "# Title\nBody\twith tab"
    assert "\\n" not in result.value["fullReportMarkdown"]


def test_repair_drops_other_control_characters_and_keeps_escapes():
    raw = '{"a": "x\x01y\x7fz", "b": "already\\nescaped \\" quote"}\n'

    repaired = repair_control_characters(raw)

    assert json.loads(repaired) == {"a": "xyz", "b": 'already\nescaped " quote'}


def test_repair_leaves_whitespace_between_tokens_alone():
    raw = '{\n  "a": "line1\nline2"\n}'

    assert repair_control_characters(raw) == '{\n  "a": "line1\\nline2"\n}'


def test_parse_as_reports_failure_without_repair_for_syntax_errors():
    result = parse_as('{"summary": ', "ArchitectureModel")

    assert isinstance(result, ParseFailure)
    assert result.context == "ArchitectureModel"
    assert result.repair_cause is None
    assert result.raw_snippet == '{"summary": '


def test_parse_as_reports_both_errors_when_repair_fails():
    result = parse_as('{"a": "line\nbreak", }', "ArchitectureIssues")

    assert isinstance(result, ParseFailure)
    assert result.repair_cause is not None
    assert "Original error" in result.describe()
    assert "Fix attempt error" in result.describe()

    error = result.to_error()
    assert isinstance(error, ReviewDecodeError)
    assert "ArchitectureIssues" in str(error)


def test_decode_completion_validates_against_schema():
    raw = """Here's the JSON:
```json
[
  {
    "id": "issue-1",
    "title": "Single database",
    "description": "All services share one Postgres instance.",
    "category": "scalability",
    "severity": "high",
    "componentsInvolved": ["postgres-db", "ghost-component"],
    "recommendation": "Split read replicas.",
    "effortEstimate": "M"
  }
]
```"""

    issues = decode_completion(raw, "ArchitectureIssues", list[ArchitectureIssue])

    assert len(issues) == 1
    assert issues[0].components_involved == ["postgres-db", "ghost-component"]
    assert issues[0].effort_estimate == "M"


def test_decode_completion_accepts_empty_issue_list():
    assert decode_completion("[]", "ArchitectureIssues", list[ArchitectureIssue]) == []


def test_decode_completion_never_coerces_wrong_shape():
    with pytest.raises(ReviewDecodeError) as exc_info:
        decode_completion('{"components": []}', "ArchitectureModel", ArchitectureModel)

    assert exc_info.value.context == "ArchitectureModel"
    assert "ArchitectureModel" in str(exc_info.value)


def test_decode_completion_raises_for_prose():
    with pytest.raises(ReviewDecodeError, match="Report"):
        decode_completion("I'm sorry, I can't help with that.", "Report", dict)
