"""
End-to-end pipeline tests for DiagramAgent with the Gemini SDK mocked out.
"""

import pytest
from google.genai import errors as genai_errors

from mermaidgen.exceptions import (
    ExtractionFailure,
    GenerationFailure,
    InvalidSyntaxError,
    UpstreamError,
    UpstreamErrorKind,
)
from mermaidgen.models import AUTO_DETECTED, DiagramOptions, DiagramType

COFFEE = ("Create a flowchart showing the process of making coffee: "
          "start, boil water, grind beans, brew coffee, serve")


def _sent_prompt(genai_client) -> str:
    return genai_client.aio.models.generate_content.await_args.kwargs["contents"]


@pytest.mark.asyncio
async def test_flowchart_with_auto_detection(agent, genai_client, model_reply):
    model_reply("graph TD\n A[Start] --> B[End]")

    result = await agent.generate_diagram(COFFEE, DiagramType.AUTO)

    assert result.mermaid_code == "graph TD\n A[Start] --> B[End]"
    assert result.diagram_type == AUTO_DETECTED
    assert result.detected_type == DiagramType.AUTO
    assert result.generation_time_ms >= 0
    prompt = _sent_prompt(genai_client)
    assert "SPECIFIC REQUIREMENTS" not in prompt
    assert prompt.index(COFFEE) > 0


@pytest.mark.asyncio
async def test_er_output_is_repaired(agent, model_reply):
    model_reply("```mermaid\nerDiagram\n  PRODUCT ||--o{ CATEGORY : belongs to\n```")

    result = await agent.generate_diagram("Design the tables for an online store", DiagramType.AUTO)

    assert result.mermaid_code == "erDiagram\nCATEGORY ||--o{ PRODUCT : categorizes"
    assert result.detected_type == DiagramType.ER


@pytest.mark.asyncio
async def test_prose_response_is_a_generation_failure(agent, model_reply):
    model_reply("Sure! Here's your diagram: some text with no header")

    with pytest.raises(ExtractionFailure):
        await agent.generate_diagram(COFFEE)


@pytest.mark.asyncio
async def test_invalid_final_code(agent, model_reply):
    model_reply("gantt")

    with pytest.raises(InvalidSyntaxError):
        await agent.generate_diagram(COFFEE, DiagramType.GANTT)


@pytest.mark.asyncio
async def test_er_repair_rollback_keeps_original(agent, model_reply):
    model_reply("erDiagram\n    IDENTIFYING {\n    }")

    result = await agent.generate_diagram("Design the database", DiagramType.ER)

    assert result.mermaid_code == "erDiagram\n    IDENTIFYING {\n    }"
    assert result.diagram_type == "er"


@pytest.mark.asyncio
async def test_upstream_error_propagates(agent, genai_client):
    genai_client.aio.models.generate_content.side_effect = genai_errors.ClientError(
        429, {"error": {"code": 429, "message": "Resource has been exhausted", "status": "RESOURCE_EXHAUSTED"}})

    with pytest.raises(GenerationFailure) as exc_info:
        await agent.generate_diagram(COFFEE)

    assert isinstance(exc_info.value, UpstreamError)
    assert exc_info.value.kind == UpstreamErrorKind.QUOTA
    assert genai_client.aio.models.generate_content.await_count == 1


@pytest.mark.asyncio
async def test_explicit_type_is_reported_and_guides_prompt(agent, genai_client, model_reply):
    model_reply("sequenceDiagram\n Alice->>Bob: Hi")

    result = await agent.generate_diagram(COFFEE, DiagramType.SEQUENCE)

    assert result.diagram_type == "sequence"
    assert "SEQUENCE DIAGRAM SPECIFIC REQUIREMENTS" in _sent_prompt(genai_client)


@pytest.mark.asyncio
async def test_request_options_override_generation(agent, genai_client, settings, model_reply):
    model_reply("graph TD\n A --> B")

    await agent.generate_diagram(COFFEE, options=DiagramOptions(temperature=0.5, max_tokens=1000))

    config = genai_client.aio.models.generate_content.await_args.kwargs["config"]
    assert config.temperature == 0.5
    assert config.max_output_tokens == 1000
    # Shared settings are untouched
    assert settings.generation.temperature == 0.1
