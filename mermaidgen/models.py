from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DiagramType(str, Enum):
    AUTO = "auto"
    FLOWCHART = "flowchart"
    CLASS = "class"
    SEQUENCE = "sequence"
    ER = "er"
    STATE = "state"
    GANTT = "gantt"


AUTO_DETECTED = "auto-detected"


class CamelModel(BaseModel):
    """Base schema that reads and writes camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DiagramOptions(CamelModel):
    temperature: Optional[float] = Field(None, ge=0.0, le=1.0, description="Sampling temperature override")
    max_tokens: Optional[int] = Field(None, ge=100, le=4000, description="Output token limit override")


class DiagramRequest(CamelModel):
    description: str = Field(..., min_length=10, max_length=2000,
                             description="Natural language description of the diagram")
    diagram_type: DiagramType = Field(DiagramType.AUTO, description="Requested diagram family")
    options: DiagramOptions = Field(default_factory=DiagramOptions)


class DiagramData(CamelModel):
    mermaid_code: str
    diagram_type: str
    generation_time: str
    warnings: List[str] = Field(default_factory=list)


class ResponseMetadata(CamelModel):
    input_length: int
    output_length: int
    timestamp: str


class DiagramResponse(CamelModel):
    success: bool = True
    data: DiagramData
    metadata: ResponseMetadata


class ValidateRequest(CamelModel):
    mermaid_code: Optional[str] = Field(None, description="Mermaid code to check")


class ValidationData(CamelModel):
    is_valid: bool
    code_length: int
    line_count: int


class ValidateResponse(CamelModel):
    success: bool = True
    data: ValidationData
