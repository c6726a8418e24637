"""fheviz - side-by-side viewer model for compiled FHE program graphs."""

from fheviz.events import (
    AsyncEventProcessor,
    BaseEvent,
    Event,
    EventDispatcher,
    EventProcessor,
    GraphRenderedEvent,
    LineSelectedEvent,
    NodeSelectionEvent,
    TypedEventProcessor,
)
from fheviz.exceptions import InvalidGraphError, NodeNotFoundError, SessionNotFoundError
from fheviz.program import (
    Add,
    Edge,
    EdgeRole,
    InputCiphertext,
    IntegrityIssue,
    Multiply,
    Operation,
    OutputCiphertext,
    ProgramGraph,
    ProgramNode,
    Relinearize,
    UnknownOperation,
    ValidationResult,
    validate_program,
)
from fheviz.selection import (
    AsyncSelectionCoordinator,
    LookupLineMapping,
    PanelBinding,
    SelectionCoordinator,
    SelectionSnapshot,
    demo_line_mapping,
    describe_selection,
)
from fheviz.sessions import DebugSession, SessionRegistry
from fheviz.viz import (
    MermaidDiagram,
    RenderEdge,
    RenderGraph,
    RenderNode,
    VisualKind,
    mark_problematic,
    to_mermaid,
    translate,
)

__all__ = [
    # Program model
    "Add",
    "Edge",
    "EdgeRole",
    "InputCiphertext",
    "Multiply",
    "Operation",
    "OutputCiphertext",
    "ProgramGraph",
    "ProgramNode",
    "Relinearize",
    "UnknownOperation",
    # Validation
    "IntegrityIssue",
    "ValidationResult",
    "validate_program",
    # Translation
    "RenderEdge",
    "RenderGraph",
    "RenderNode",
    "VisualKind",
    "mark_problematic",
    "translate",
    "MermaidDiagram",
    "to_mermaid",
    # Selection
    "AsyncSelectionCoordinator",
    "LookupLineMapping",
    "PanelBinding",
    "SelectionCoordinator",
    "SelectionSnapshot",
    "demo_line_mapping",
    "describe_selection",
    # Sessions
    "DebugSession",
    "SessionRegistry",
    # Errors
    "InvalidGraphError",
    "NodeNotFoundError",
    "SessionNotFoundError",
    # Events
    "AsyncEventProcessor",
    "BaseEvent",
    "Event",
    "EventDispatcher",
    "EventProcessor",
    "GraphRenderedEvent",
    "LineSelectedEvent",
    "NodeSelectionEvent",
    "TypedEventProcessor",
]
