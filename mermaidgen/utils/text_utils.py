import re
from typing import List

_SCRIPT_TAG_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_JS_PROTOCOL_RE = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE)

LONG_DESCRIPTION_CHARS = 1500
AMBIGUOUS_TERMS = ["and/or", "maybe", "possibly", "sometimes"]
DIAGRAM_MENTIONS = ["flowchart", "class diagram", "sequence", "entity relationship", "state machine"]


def sanitize_input(text) -> str:
    """
    Strip script tags, javascript: URLs and inline event handlers from user text.

    Args:
        text: Raw user input

    Returns:
        Sanitized, whitespace-trimmed text ("" for non-string input)
    """
    if not isinstance(text, str):
        return ""
    text = _SCRIPT_TAG_RE.sub("", text)
    text = _JS_PROTOCOL_RE.sub("", text)
    text = _EVENT_HANDLER_RE.sub("", text)
    return text.strip()


def check_description_content(description: str) -> List[str]:
    """Return non-blocking warnings about a description."""
    warnings = []
    lowered = description.lower()

    if len(description) > LONG_DESCRIPTION_CHARS:
        warnings.append("Very long descriptions may result in incomplete diagrams")

    if any(term in lowered for term in AMBIGUOUS_TERMS):
        warnings.append("Ambiguous terms detected - consider being more specific for better results")

    mentioned = [keyword for keyword in DIAGRAM_MENTIONS if keyword in lowered]
    if len(mentioned) > 1:
        warnings.append("Multiple diagram types detected - consider creating separate diagrams")

    return warnings
