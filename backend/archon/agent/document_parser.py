"""Split a raw architecture document into heading sections and diagram blocks.

Diagram classification is an ordered rule table; the first matching rule wins
and blocks matching no rule are dropped:

    1. language tag ``plantuml`` or ``puml``            -> plantuml
    2. body contains ``@startuml``                       -> plantuml
    3. language tag ``mermaid``                          -> mermaid
    4. trimmed body starts with ``graph``/``sequenceDiagram`` -> mermaid
"""

import logging
import re
from collections.abc import Callable

from archon.agent.artifacts import ArchitectureInput, Diagram, DiagramType, Section

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_CODE_BLOCK_RE = re.compile(r"```(\w*)\n([\s\S]*?)```")

DiagramRule = tuple[DiagramType, Callable[[str, str], bool]]

DIAGRAM_RULES: list[DiagramRule] = [
    ("plantuml", lambda lang, body: lang in ("plantuml", "puml")),
    ("plantuml", lambda lang, body: "@startuml" in body),
    ("mermaid", lambda lang, body: lang == "mermaid"),
    ("mermaid", lambda lang, body: body.strip().startswith(("graph", "sequenceDiagram"))),
]


def classify_diagram(lang: str, body: str) -> DiagramType:
    lang = (lang or "").lower()
    for diagram_type, matches in DIAGRAM_RULES:
        if matches(lang, body):
            return diagram_type
    return "unknown"


def extract_sections(text: str) -> list[Section]:
    sections: list[Section] = []
    title: str | None = None
    content: list[str] = []

    for line in text.split("\n"):
        heading = _HEADING_RE.match(line)
        if heading:
            if title is not None:
                sections.append(Section(title=title, content="".join(content)))
            title = heading.group(2).strip()
            content = []
        elif title is not None:
            content.append(line + "\n")

    if title is not None:
        sections.append(Section(title=title, content="".join(content)))
    return sections


def extract_diagrams(text: str) -> list[Diagram]:
    diagrams: list[Diagram] = []
    for match in _CODE_BLOCK_RE.finditer(text):
        lang, body = match.group(1), match.group(2)
        diagram_type = classify_diagram(lang, body)
        if diagram_type == "unknown":
            logger.debug("Skipping unrecognised code block (lang=%r)", lang)
            continue
        diagrams.append(Diagram(type=diagram_type, raw=body.strip()))
    return diagrams


def parse_architecture_document(raw_text: str) -> ArchitectureInput:
    """Never fails; an empty document yields no sections and no diagrams."""
    return ArchitectureInput(
        raw_text=raw_text,
        sections=extract_sections(raw_text),
        diagrams=extract_diagrams(raw_text),
    )
