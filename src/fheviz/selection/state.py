"""Selection state owned by the coordinator and the snapshots it hands out."""

from __future__ import annotations

from dataclasses import dataclass, field

from fheviz.program.graph import ProgramGraph
from fheviz.viz.translator import RenderGraph


@dataclass
class SelectionState:
    """Mutable interaction state. Only the coordinator writes to it.

    Attributes:
        selected_line: Source line the user last clicked
        selected_nodes: Node ids currently selected in the graph panel
        current_graph: Program graph resolved for ``selected_line``
        render: Translation of ``current_graph`` shown in the graph panel
    """

    selected_line: int
    current_graph: ProgramGraph
    render: RenderGraph
    selected_nodes: frozenset[int] = field(default_factory=frozenset)

    def snapshot(self) -> SelectionSnapshot:
        return SelectionSnapshot(
            selected_line=self.selected_line,
            selected_nodes=self.selected_nodes,
            current_graph=self.current_graph,
            render=self.render,
        )


@dataclass(frozen=True)
class SelectionSnapshot:
    """Read-only copy of SelectionState handed to views and event processors."""

    selected_line: int
    selected_nodes: frozenset[int]
    current_graph: ProgramGraph
    render: RenderGraph

    @property
    def primary_node(self) -> int | None:
        """Lowest selected node id, shown in the node-info panel."""
        return min(self.selected_nodes) if self.selected_nodes else None
