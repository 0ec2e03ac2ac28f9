"""
Error types raised by the diagram generation pipeline.

Every error carries a message plus a details dict so the API layer can pick
a status code and the logs keep enough context to debug a bad generation.
"""

from enum import Enum
from typing import Any, Dict, Optional


class DiagramServiceError(Exception):
    """Base class for all diagram service errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class GenerationFailure(DiagramServiceError):
    """The model did not give us usable diagram code."""


class UpstreamErrorKind(str, Enum):
    """Classification of failures coming from the generation API."""
    AUTH = "auth"
    QUOTA = "quota"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


class UpstreamError(GenerationFailure):
    """Raised when the generation API call itself fails."""

    def __init__(
        self,
        kind: UpstreamErrorKind,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            kind: Failure classification (auth, quota, transport, unknown)
            message: Message reported by the API or the transport layer
            status_code: HTTP status returned by the API, if there was one
            details: Additional context
        """
        details = details or {}
        details["kind"] = kind.value
        if status_code is not None:
            details["status_code"] = status_code
        self.kind = kind
        self.status_code = status_code
        super().__init__(message, details)


class ExtractionFailure(GenerationFailure):
    """Raised when the model output does not start with a Mermaid header."""

    def __init__(self, raw_text: str, details: Optional[Dict[str, Any]] = None):
        details = details or {}
        details["preview"] = (raw_text or "")[:50]
        super().__init__("Generated text does not start with a valid Mermaid diagram type", details)


class InvalidSyntaxError(DiagramServiceError):
    """Raised when the final diagram code fails the syntax smoke test."""

    def __init__(self, code: str, details: Optional[Dict[str, Any]] = None):
        details = details or {}
        details["code_length"] = len(code or "")
        self.code = code
        super().__init__("Generated diagram code is invalid", details)
