"""
Best-effort repair of common defects in generated ER diagrams.

Each rewrite is a pure text-to-text function. They run in the order listed in
ER_REPAIRS; later rewrites assume the earlier ones already ran.
"""

import logging
import re
from typing import Callable, Tuple

from mermaidgen.agents.mermaid_syntax import RELATIONSHIP_OPERATORS, is_valid_mermaid

logger = logging.getLogger(__name__)

_BELONGS_TO_RELATION_RE = re.compile(
    r"(\w+)[ \t]*\|\|--o\{[ \t]*(\w+)[ \t]*:[ \t]*belongs[ \t]+to\b", re.IGNORECASE
)
_BELONGS_TO_LABEL_RE = re.compile(r":[ \t]*belongs[ \t]+to\b", re.IGNORECASE)
_WRITTEN_BY_LABEL_RE = re.compile(r":[ \t]*written[ \t]+by\b", re.IGNORECASE)
_IDENTIFYING_RE = re.compile(r"\bIDENTIFYING\b[ \t]*", re.IGNORECASE)
_GLUED_BELONGS_TO_RE = re.compile(r"(\w+)[ \t]*:[ \t]*belongs[ \t]*to(\w+)", re.IGNORECASE)
_PRODUCT_CATEGORY_RE = re.compile(
    r"\b(product)[ \t]*\|\|--o\{[ \t]*(category)\b[ \t]*:[^\n]*", re.IGNORECASE
)


def flip_belongs_to_relationships(code: str) -> str:
    """A ||--o{ B : belongs to  ->  B ||--o{ A : categorizes"""
    return _BELONGS_TO_RELATION_RE.sub(r"\2 ||--o{ \1 : categorizes", code)


def replace_belongs_to_labels(code: str) -> str:
    return _BELONGS_TO_LABEL_RE.sub(": categorizes", code)


def replace_written_by_labels(code: str) -> str:
    return _WRITTEN_BY_LABEL_RE.sub(": writes", code)


def remove_identifying_keyword(code: str) -> str:
    return _IDENTIFYING_RE.sub("", code)


def split_glued_belongs_to(code: str) -> str:
    """X : belongs toY  ->  Y ||--o{ X : categorizes"""
    return _GLUED_BELONGS_TO_RE.sub(r"\2 ||--o{ \1 : categorizes", code)


def flip_product_category(code: str) -> str:
    """Categories contain products, never the other way round."""
    return _PRODUCT_CATEGORY_RE.sub(r"\2 ||--o{ \1 : categorizes", code)


def normalize_spacing(code: str) -> str:
    """One space around relationship operators and between tokens, no blank lines."""
    for operator in RELATIONSHIP_OPERATORS:
        code = code.replace(operator, f" {operator} ")
    lines = (" ".join(line.split()) for line in code.split("\n"))
    return "\n".join(line for line in lines if line)


ER_REPAIRS: Tuple[Callable[[str], str], ...] = (
    flip_belongs_to_relationships,
    replace_belongs_to_labels,
    replace_written_by_labels,
    remove_identifying_keyword,
    split_glued_belongs_to,
    flip_product_category,
    normalize_spacing,
)


MAX_REPAIR_PASSES = 5


def apply_er_repairs(code: str) -> str:
    """Run the repair pipeline until a pass leaves the code unchanged.

    A later rewrite can expose work for an earlier one, e.g. removing
    IDENTIFYING uncovers a ``belongs to`` label, so a single pass is not
    always stable.
    """
    for _ in range(MAX_REPAIR_PASSES):
        repaired = code
        for repair in ER_REPAIRS:
            repaired = repair(repaired)
        if repaired == code:
            break
        code = repaired
    return code


def repair_er_diagram(code: str) -> str:
    """
    Repair an ER diagram, keeping the original if the repair fails validation.

    Args:
        code: Extracted ER diagram code

    Returns:
        The repaired code, or the untouched input when the repaired version
        no longer passes is_valid_mermaid
    """
    repaired = apply_er_repairs(code)
    if not is_valid_mermaid(repaired):
        logger.warning("ER repair produced invalid code, keeping the original")
        return code
    if repaired != code:
        logger.info("Applied ER syntax repairs to generated diagram")
    return repaired
