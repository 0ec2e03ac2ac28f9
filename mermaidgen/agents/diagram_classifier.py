"""
Keyword heuristics that guess a diagram family from a free-text description.

Rules are evaluated in declaration order and the first match wins, so the
precedence is fixed: ER > class > sequence. Nothing matching means the prompt
falls back to letting the model pick the diagram type.
"""

from dataclasses import dataclass
from typing import Tuple

from mermaidgen.models import DiagramType


@dataclass(frozen=True)
class ClassificationRule:
    family: DiagramType
    keywords: Tuple[str, ...]
    phrases: Tuple[str, ...] = ()

    def matches(self, description: str) -> bool:
        lower_desc = description.lower()
        return (any(keyword in lower_desc for keyword in self.keywords)
                or any(phrase in lower_desc for phrase in self.phrases))


CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        family=DiagramType.ER,
        keywords=(
            "entity", "entities", "relationship", "database", "schema", "table", "tables",
            "customer", "order", "product", "user", "post", "comment", "category",
            "foreign key", "primary key", "one-to-many", "many-to-many", "one-to-one",
        ),
        phrases=("er diagram", "erd"),
    ),
    ClassificationRule(
        family=DiagramType.CLASS,
        keywords=(
            "class", "classes", "inheritance", "method", "methods", "property", "properties",
            "object", "objects", "extends", "implements", "interface", "abstract",
        ),
        phrases=("class diagram", "uml"),
    ),
    ClassificationRule(
        family=DiagramType.SEQUENCE,
        keywords=(
            "sequence", "interaction", "message", "actor", "participant", "timeline",
            "request", "response", "call", "invoke", "send", "receive",
        ),
        phrases=("sequence diagram",),
    ),
)


def classify(description: str, rules: Tuple[ClassificationRule, ...] = CLASSIFICATION_RULES) -> DiagramType:
    """Return the first family whose rule matches, or AUTO when none does."""
    for rule in rules:
        if rule.matches(description):
            return rule.family
    return DiagramType.AUTO


def resolve_diagram_type(requested: DiagramType, description: str) -> DiagramType:
    """An explicit request always wins; only AUTO goes through the classifier."""
    if requested != DiagramType.AUTO:
        return requested
    return classify(description)
