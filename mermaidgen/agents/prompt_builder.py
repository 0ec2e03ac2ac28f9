from typing import Optional

from mermaidgen.agents.diagram_classifier import resolve_diagram_type
from mermaidgen.models import DiagramType

ER_GUIDANCE = """

**ER DIAGRAM SPECIFIC REQUIREMENTS:**
- Start with "erDiagram"
- Define entities with their attributes inside curly braces
- Relationship notation: ||--o{ (one-to-many), ||--|| (one-to-one), }o--o{ (many-to-many)
- Relationship labels MUST be a single simple verb: places, contains, has, owns, creates, manages, categorizes, writes
- STRICTLY FORBIDDEN: multi-word phrases such as "belongs to" or "written by", and the keyword IDENTIFYING
- Categorization is written from the category side: CATEGORY ||--o{ PRODUCT : categorizes
- Authorship is written from the author side: AUTHOR ||--o{ BOOK : writes
- Attribute format: "type name" with optional PK/FK marker (e.g. "int customer_id PK", "string name")

**CORRECT ER DIAGRAM EXAMPLE:**
erDiagram
    CUSTOMER {
        int customer_id PK
        string name
        string email
    }
    ORDER {
        int order_id PK
        int customer_id FK
        date order_date
    }
    PRODUCT {
        int product_id PK
        int category_id FK
        string name
    }
    CATEGORY {
        int category_id PK
        string name
    }
    CUSTOMER ||--o{ ORDER : places
    CATEGORY ||--o{ PRODUCT : categorizes
    ORDER ||--o{ PRODUCT : contains

**WRONG EXAMPLES TO AVOID:**
- WRONG: PRODUCT ||--o{ CATEGORY : belongs to
  RIGHT: CATEGORY ||--o{ PRODUCT : categorizes
- WRONG: BOOK ||--o{ AUTHOR : written by
  RIGHT: AUTHOR ||--o{ BOOK : writes"""

CLASS_GUIDANCE = """

**CLASS DIAGRAM SPECIFIC REQUIREMENTS:**
- Start with "classDiagram"
- Define classes with their attributes and methods
- Visibility markers: + (public), - (private), # (protected)
- Inheritance: Parent <|-- Child
- Association: ClassA --> ClassB
- Composition: ClassA *-- ClassB"""

SEQUENCE_GUIDANCE = """

**SEQUENCE DIAGRAM SPECIFIC REQUIREMENTS:**
- Start with "sequenceDiagram"
- Declare every participant
- Arrows: ->> (solid), -->> (dashed), -x (solid with cross), --x (dashed with cross)
- Use alt/else, opt and loop blocks whenever the description branches or repeats"""

FAMILY_GUIDANCE = {
    DiagramType.ER: ER_GUIDANCE,
    DiagramType.CLASS: CLASS_GUIDANCE,
    DiagramType.SEQUENCE: SEQUENCE_GUIDANCE,
}


def build_prompt(description: str, diagram_type: DiagramType = DiagramType.AUTO,
                 family: Optional[DiagramType] = None) -> str:
    """
    Compose the instruction text sent to the generation model.

    Args:
        description: The user's (already sanitized) description
        diagram_type: The type the user asked for, possibly AUTO
        family: Family used to pick the guidance block. Resolved from the
            description when omitted.

    Returns:
        The complete prompt, ending with the verbatim description
    """
    if family is None:
        family = resolve_diagram_type(diagram_type, description)
    specific_guidance = FAMILY_GUIDANCE.get(family, "")

    if diagram_type != DiagramType.AUTO:
        format_selection = f"- User requested: {DiagramType(diagram_type).value}"
    else:
        format_selection = "- Auto-detect the most appropriate diagram type based on the description"

    return f"""You are an expert Diagram Code Generator that turns natural language descriptions into accurate, executable Mermaid.js diagram code.

**CRITICAL REQUIREMENTS:**
1. Output ONLY Mermaid.js code - no explanations, no prose, no markdown code fences
2. The code must be syntactically correct and renderable
3. Include ALL elements the user describes
4. Use the Mermaid.js syntax that matches the diagram type

**Supported Diagram Types:**
- Flowcharts: "graph TD" (top-down) or "graph LR" (left-right)
- Class Diagrams: "classDiagram"
- Sequence Diagrams: "sequenceDiagram"
- Entity-Relationship: "erDiagram"
- State Diagrams: "stateDiagram-v2"
- Gantt Charts: "gantt"

**Format Selection:**
{format_selection}{specific_guidance}

**Output Requirements:**
- Start directly with the diagram type declaration
- Name nodes with the user's own terminology
- Label relationships when the description names them
- Make the flow direction follow the described process

**User Description:**
{description}

Generate the Mermaid.js code now:"""
