"""
Extraction and heuristic validation of Mermaid code returned by the model.

The validator is a smoke test, not a parser: it checks for a known header,
a body and, for ER diagrams, some entity or relationship syntax. Plenty of
semantically broken diagrams pass it; only rendering proves a diagram works.
"""

import logging
import re

from mermaidgen.exceptions import ExtractionFailure

logger = logging.getLogger(__name__)

# Headers accepted when pulling code out of a model response
DIAGRAM_HEADERS = (
    "graph", "flowchart", "classDiagram", "sequenceDiagram",
    "erDiagram", "stateDiagram", "gantt", "pie", "journey",
    "gitgraph", "mindmap", "timeline",
)

# Headers the validator accepts
VALIDATED_HEADERS = (
    "graph", "flowchart", "classDiagram", "sequenceDiagram",
    "erDiagram", "stateDiagram", "gantt", "pie", "journey",
)

ONE_TO_MANY = "||--o{"
ONE_TO_ONE = "||--||"
MANY_TO_MANY = "}o--o{"
RELATIONSHIP_OPERATORS = (ONE_TO_MANY, ONE_TO_ONE, MANY_TO_MANY)

# A word right after the fence is a language tag unless it is a diagram header
_FENCE_RE = re.compile(
    r"```(?:(?!(?:%s))[\w-]+)?[ \t]*\n?" % "|".join(DIAGRAM_HEADERS),
    re.IGNORECASE,
)
_ENTITY_BLOCK_RE = re.compile(r"\w+\s*\{")
_RELATIONSHIP_RE = re.compile(r"\|\|--|\}o--|\|\|--o\{|\}o--o\{")


def _starts_with_header(code: str, headers) -> bool:
    lowered = code.lower()
    return any(lowered.startswith(header.lower()) for header in headers)


def is_er_diagram(code: str) -> bool:
    return code.strip().lower().startswith("erdiagram")


def extract_mermaid_code(raw_text: str) -> str:
    """
    Strip code fences from a model response and check it opens with a diagram header.

    Args:
        raw_text: Text returned by the generation API

    Returns:
        The cleaned diagram code

    Raises:
        ExtractionFailure: If no recognized diagram header starts the text
    """
    code = _FENCE_RE.sub("", raw_text or "").strip()

    if not _starts_with_header(code, DIAGRAM_HEADERS):
        logger.warning(f"Generated code does not start with a valid Mermaid diagram type: {code[:50]!r}")
        raise ExtractionFailure(raw_text)

    logger.debug(f"Cleaned diagram code:\n{code}")
    return code


def _is_valid_er(body: str) -> bool:
    # Either entity blocks or relationship operators are enough
    return bool(_ENTITY_BLOCK_RE.search(body) or _RELATIONSHIP_RE.search(body))


def is_valid_mermaid(code) -> bool:
    """Heuristically check that code looks like a renderable Mermaid diagram."""
    if not code or not isinstance(code, str):
        return False

    trimmed = code.strip()
    if not _starts_with_header(trimmed, VALIDATED_HEADERS):
        return False

    lines = [line for line in trimmed.split("\n") if line.strip()]
    if len(lines) < 2:
        return False

    if is_er_diagram(trimmed):
        return _is_valid_er("\n".join(lines[1:]))

    return True
