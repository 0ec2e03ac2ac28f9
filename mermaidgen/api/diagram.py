import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from mermaidgen.agents.diagram_agent import DiagramAgent
from mermaidgen.agents.mermaid_syntax import is_valid_mermaid
from mermaidgen.exceptions import (
    ExtractionFailure,
    GenerationFailure,
    InvalidSyntaxError,
    UpstreamError,
    UpstreamErrorKind,
)
from mermaidgen.models import (
    DiagramData,
    DiagramRequest,
    DiagramResponse,
    ResponseMetadata,
    ValidateRequest,
    ValidateResponse,
    ValidationData,
)
from mermaidgen.utils.catalog import DIAGRAM_EXAMPLES, DIAGRAM_TYPES
from mermaidgen.utils.text_utils import check_description_content, sanitize_input

logger = logging.getLogger(__name__)

router = APIRouter()

_diagram_agent: Optional[DiagramAgent] = None


def get_diagram_agent() -> DiagramAgent:
    global _diagram_agent
    if _diagram_agent is None:
        _diagram_agent = DiagramAgent()
    return _diagram_agent


_UPSTREAM_STATUS = {
    UpstreamErrorKind.AUTH: (401, "Authentication failed", "Invalid or missing API key"),
    UpstreamErrorKind.QUOTA: (429, "Rate limit exceeded", "API quota exceeded. Please try again later."),
    UpstreamErrorKind.TRANSPORT: (503, "Service unavailable", "External service is currently unavailable"),
    UpstreamErrorKind.UNKNOWN: (500, "Internal server error", "Failed to generate diagram. Please try again."),
}


def _to_http_exception(exc: Exception) -> HTTPException:
    """Translate a pipeline error into the HTTP status and message the client sees."""
    if isinstance(exc, UpstreamError):
        status_code, error, details = _UPSTREAM_STATUS[exc.kind]
    elif isinstance(exc, ExtractionFailure):
        status_code, error, details = (
            500, "Diagram generation failed",
            "The AI response did not contain a Mermaid diagram. Please try rephrasing your description.",
        )
    elif isinstance(exc, InvalidSyntaxError):
        status_code, error, details = (
            500, "Generated diagram code is invalid",
            "The AI generated invalid Mermaid syntax. Please try rephrasing your description.",
        )
    else:
        status_code, error, details = _UPSTREAM_STATUS[UpstreamErrorKind.UNKNOWN]
    return HTTPException(status_code=status_code, detail={"error": error, "details": details})


@router.post("/generate", response_model=DiagramResponse)
async def generate_diagram(request: DiagramRequest, agent: DiagramAgent = Depends(get_diagram_agent)):
    description = sanitize_input(request.description)
    warnings = check_description_content(description)

    try:
        result = await agent.generate_diagram(description, request.diagram_type, request.options)
    except (GenerationFailure, InvalidSyntaxError) as e:
        logger.error(f"Diagram generation failed: {e}")
        raise _to_http_exception(e)

    return DiagramResponse(
        data=DiagramData(
            mermaid_code=result.mermaid_code,
            diagram_type=result.diagram_type,
            generation_time=f"{result.generation_time_ms}ms",
            warnings=warnings,
        ),
        metadata=ResponseMetadata(
            input_length=len(description),
            output_length=len(result.mermaid_code),
            timestamp=datetime.now(timezone.utc).isoformat(),
        ),
    )


@router.post("/validate", response_model=ValidateResponse)
def validate_diagram(request: ValidateRequest):
    """Run the syntax smoke test on client-supplied Mermaid code."""
    code = request.mermaid_code
    if not code:
        raise HTTPException(
            status_code=400,
            detail={"error": "Invalid input", "details": "Mermaid code is required and must be a string"},
        )
    return ValidateResponse(
        data=ValidationData(
            is_valid=is_valid_mermaid(code),
            code_length=len(code),
            line_count=len(code.split("\n")),
        )
    )


@router.get("/examples")
def list_examples():
    categories = list(dict.fromkeys(example["category"] for example in DIAGRAM_EXAMPLES))
    return {
        "success": True,
        "data": DIAGRAM_EXAMPLES,
        "metadata": {"count": len(DIAGRAM_EXAMPLES), "categories": categories},
    }


@router.get("/types")
def list_diagram_types():
    return {"success": True, "data": DIAGRAM_TYPES}
