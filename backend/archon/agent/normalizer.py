"""Turn a model's free-text completion into JSON.

Hosted models do not reliably honour "JSON only" instructions, so completions
are cleaned (reasoning tags, chat preambles, code fences) before decoding, and
a single repair pass is attempted when a string literal contains raw control
characters. Anything still undecodable is reported as a ``ParseFailure``;
there is no fallback value.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RAW_SNIPPET_CHARS = 500

_THINK_RE = re.compile(r"<think>[\s\S]*?</think>", re.IGNORECASE)
_PREAMBLE_RE = re.compile(
    r"^(?:Here(?:'s|s|\s+is)?\s+(?:the\s+)?"
    r"(?:JSON|response|architecture|report)(?:\s+(?:JSON|object|array|model|review|report))?[\s:]*)",
    re.IGNORECASE,
)
_OPENING_FENCE_RE = re.compile(r"^```(?:json)?\n?")
_CLOSING_FENCE_RE = re.compile(r"\n?```\s*$")

_ESCAPED_CONTROL_CHARS = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


class ReviewDecodeError(ValueError):
    """A pipeline stage's completion could not be decoded into the expected shape."""

    def __init__(self, context: str, message: str, raw_snippet: str = ""):
        super().__init__(f"Failed to parse {context} from LLM response: {message}")
        self.context = context
        self.raw_snippet = raw_snippet


@dataclass(frozen=True)
class ParseOk(Generic[T]):
    value: T


@dataclass(frozen=True)
class ParseFailure:
    context: str
    raw_snippet: str
    cause: str
    repair_cause: str | None = None

    def describe(self) -> str:
        if self.repair_cause is None:
            return self.cause
        return f"Original error: {self.cause}. Fix attempt error: {self.repair_cause}"

    def to_error(self) -> ReviewDecodeError:
        return ReviewDecodeError(self.context, self.describe(), self.raw_snippet)


ParseResult = ParseOk[Any] | ParseFailure


def clean(raw: str) -> str:
    """Strip reasoning tags, a conversational preamble and a surrounding code fence."""
    cleaned = (raw or "").strip()
    cleaned = _THINK_RE.sub("", cleaned).strip()
    cleaned = _PREAMBLE_RE.sub("", cleaned, count=1).strip()
    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE_RE.sub("", cleaned, count=1)
        cleaned = _CLOSING_FENCE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def repair_control_characters(text: str) -> str:
    """Escape raw newlines/tabs inside JSON string literals and drop other control characters there."""
    out: list[str] = []
    in_string = False
    escape = False
    for ch in text:
        if not in_string:
            if ch == '"':
                in_string = True
            out.append(ch)
            continue

        if escape:
            escape = False
            out.append(ch)
        elif ch == "\\":
            escape = True
            out.append(ch)
        elif ch == '"':
            in_string = False
            out.append(ch)
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            replacement = _ESCAPED_CONTROL_CHARS.get(ch)
            if replacement:
                out.append(replacement)
        else:
            out.append(ch)
    return "".join(out)


def _is_control_character_error(exc: json.JSONDecodeError) -> bool:
    return "control character" in exc.msg.lower()


def parse_as(cleaned: str, context: str) -> ParseResult:
    """Decode cleaned completion text, with one control-character repair attempt."""
    snippet = cleaned[:RAW_SNIPPET_CHARS]
    try:
        return ParseOk(json.loads(cleaned))
    except json.JSONDecodeError as exc:
        if not _is_control_character_error(exc):
            return ParseFailure(context=context, raw_snippet=snippet, cause=str(exc))
        original_error = exc

    logger.info("Repairing control characters in %s response", context)
    try:
        return ParseOk(json.loads(repair_control_characters(cleaned)))
    except json.JSONDecodeError as repair_error:
        return ParseFailure(
            context=context,
            raw_snippet=snippet,
            cause=str(original_error),
            repair_cause=str(repair_error),
        )


def decode_completion(raw: str, context: str, schema: Any) -> Any:
    """clean -> parse_as -> validate against ``schema``; raises ReviewDecodeError on any failure."""
    cleaned = clean(raw)
    result = parse_as(cleaned, context)
    if isinstance(result, ParseFailure):
        logger.error("Could not decode %s: %s", context, result.describe())
        raise result.to_error()

    try:
        return TypeAdapter(schema).validate_python(result.value)
    except ValidationError as exc:
        logger.error("%s response did not match the expected shape: %s", context, exc)
        raise ReviewDecodeError(context, str(exc), cleaned[:RAW_SNIPPET_CHARS]) from exc
