import logging
import time
from dataclasses import dataclass
from typing import Optional

from mermaidgen.agents.diagram_classifier import resolve_diagram_type
from mermaidgen.agents.er_repair import repair_er_diagram
from mermaidgen.agents.gemini_client import GeminiClient
from mermaidgen.agents.mermaid_syntax import extract_mermaid_code, is_er_diagram, is_valid_mermaid
from mermaidgen.agents.prompt_builder import build_prompt
from mermaidgen.config import Settings, get_settings
from mermaidgen.exceptions import InvalidSyntaxError
from mermaidgen.models import AUTO_DETECTED, DiagramOptions, DiagramType

logger = logging.getLogger(__name__)


@dataclass
class DiagramResult:
    mermaid_code: str
    diagram_type: str
    detected_type: DiagramType
    generation_time_ms: int


class DiagramAgent:
    def __init__(self, settings: Optional[Settings] = None, client: Optional[GeminiClient] = None):
        self.settings = settings or get_settings()
        self.client = client or GeminiClient(self.settings)

    def _clean_generated_code(self, raw_code: str) -> str:
        """Extract the diagram, then repair it if it is an ER diagram."""
        code = extract_mermaid_code(raw_code)
        if is_er_diagram(code):
            code = repair_er_diagram(code)
        return code

    async def generate_diagram(self, description: str, diagram_type: DiagramType = DiagramType.AUTO,
                               options: Optional[DiagramOptions] = None) -> DiagramResult:
        """
        Generate Mermaid code for a description.

        Raises:
            UpstreamError: The Gemini call failed
            ExtractionFailure: The response had no recognizable diagram
            InvalidSyntaxError: The final code failed validation
        """
        diagram_type = DiagramType(diagram_type)
        family = resolve_diagram_type(diagram_type, description)
        logger.info(f"Generating diagram: requested={diagram_type.value}, detected={family.value}, "
                    f"description_length={len(description)}")

        prompt = build_prompt(description, diagram_type, family)
        generation = self.settings.generation
        if options is not None:
            generation = generation.with_options(options.temperature, options.max_tokens)

        start = time.perf_counter()
        raw_code = await self.client.generate(prompt, generation)
        code = self._clean_generated_code(raw_code)
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        if not is_valid_mermaid(code):
            logger.error(f"Generated diagram failed validation after {elapsed_ms}ms")
            raise InvalidSyntaxError(code)

        logger.info(f"Diagram generated in {elapsed_ms}ms ({len(code)} chars)")
        return DiagramResult(
            mermaid_code=code,
            diagram_type=AUTO_DETECTED if diagram_type == DiagramType.AUTO else diagram_type.value,
            detected_type=family,
            generation_time_ms=elapsed_ms,
        )
