"""Selection package - code/graph selection state and its coordinators."""

from fheviz.selection.coordinator import (
    AsyncSelectionCoordinator,
    BaseCoordinator,
    SelectionCoordinator,
    prepare_render,
)
from fheviz.selection.line_mapping import (
    AsyncLineToGraph,
    LineToGraph,
    LookupLineMapping,
    demo_line_mapping,
)
from fheviz.selection.state import SelectionSnapshot, SelectionState
from fheviz.selection.views import (
    CodePanel,
    GraphPanel,
    InfoPanel,
    PanelBinding,
    describe_selection,
)

__all__ = [
    # Coordinators
    "AsyncSelectionCoordinator",
    "BaseCoordinator",
    "SelectionCoordinator",
    "prepare_render",
    # Line mapping
    "AsyncLineToGraph",
    "LineToGraph",
    "LookupLineMapping",
    "demo_line_mapping",
    # State
    "SelectionSnapshot",
    "SelectionState",
    # Views
    "CodePanel",
    "GraphPanel",
    "InfoPanel",
    "PanelBinding",
    "describe_selection",
]
