"""Static catalog of supported diagram families and example descriptions."""

DIAGRAM_EXAMPLES = [
    {
        "id": 1,
        "title": "Simple Process Flow",
        "description": "Create a flowchart showing the process of making coffee: start, boil water, grind beans, brew coffee, serve",
        "expectedType": "flowchart",
        "category": "process",
    },
    {
        "id": 2,
        "title": "User Authentication System",
        "description": "Show the sequence of user login: user enters credentials, system validates, checks database, returns success or error",
        "expectedType": "sequence",
        "category": "system",
    },
    {
        "id": 3,
        "title": "E-commerce Database",
        "description": "Design an entity relationship diagram for an online store with customers, orders, products, and categories",
        "expectedType": "er",
        "category": "database",
    },
    {
        "id": 4,
        "title": "Vehicle Class Hierarchy",
        "description": "Create a class diagram showing Vehicle as parent class with Car and Motorcycle as children, including properties and methods",
        "expectedType": "class",
        "category": "object-oriented",
    },
    {
        "id": 5,
        "title": "Order Processing States",
        "description": "Show the states of an order: pending, confirmed, processing, shipped, delivered, with transitions between them",
        "expectedType": "state",
        "category": "workflow",
    },
]

DIAGRAM_TYPES = [
    {
        "type": "flowchart",
        "name": "Flowchart",
        "description": "Process flows, decision trees, workflows",
        "syntax": "graph TD or graph LR",
        "useCase": "Business processes, algorithms, decision making",
    },
    {
        "type": "class",
        "name": "Class Diagram",
        "description": "Object-oriented design, class relationships",
        "syntax": "classDiagram",
        "useCase": "Software architecture, inheritance, associations",
    },
    {
        "type": "sequence",
        "name": "Sequence Diagram",
        "description": "Time-ordered interactions between actors",
        "syntax": "sequenceDiagram",
        "useCase": "API calls, user interactions, system communications",
    },
    {
        "type": "er",
        "name": "Entity Relationship",
        "description": "Database schemas, entity relationships",
        "syntax": "erDiagram",
        "useCase": "Database design, data modeling",
    },
    {
        "type": "state",
        "name": "State Diagram",
        "description": "State machines, transitions",
        "syntax": "stateDiagram-v2",
        "useCase": "Workflow states, system states, lifecycle",
    },
    {
        "type": "gantt",
        "name": "Gantt Chart",
        "description": "Project timelines, task scheduling",
        "syntax": "gantt",
        "useCase": "Project management, timeline planning",
    },
]
