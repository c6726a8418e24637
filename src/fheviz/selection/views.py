"""Collaborator view interfaces and the processor that drives them.

The coordinator never calls a view directly. Views are wrapped in a
``PanelBinding`` registered as an event processor, and receive snapshots
through it after every transition.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from fheviz.events.processor import TypedEventProcessor
from fheviz.viz.info import describe_nodes

if TYPE_CHECKING:
    from fheviz.events.types import GraphRenderedEvent, LineSelectedEvent, NodeSelectionEvent
    from fheviz.selection.state import SelectionSnapshot
    from fheviz.viz.translator import RenderGraph


class CodePanel(Protocol):
    """Syntax-highlighted source view. Reports clicks as line numbers."""

    def highlight_line(self, line: int) -> None: ...


class GraphPanel(Protocol):
    """Interactive diagram view. Reports selection changes as node-id sets."""

    def show_graph(self, render: RenderGraph, selected: frozenset[int]) -> None: ...


class InfoPanel(Protocol):
    """Shows details of the selected nodes."""

    def show_info(self, entries: list[dict[str, Any]]) -> None: ...


def describe_selection(snapshot: SelectionSnapshot) -> list[dict[str, Any]]:
    """Info-panel entries for the selected nodes of the current graph.

    Each entry describes the node's operation, operands and consumers, plus
    the visual kind it is drawn with. Selected ids that are not part of the
    current graph are skipped.
    """
    entries = describe_nodes(snapshot.current_graph, snapshot.selected_nodes)
    for entry in entries:
        render_node = snapshot.render.node(entry["id"])
        entry["kind"] = render_node.kind.value if render_node is not None else None
    return entries


class PanelBinding(TypedEventProcessor):
    """Forwards coordinator events to whichever panels are attached.

    Args:
        code_panel: Receives the line to highlight
        graph_panel: Receives the render graph and current selection
        info_panel: Receives node details for the current selection
    """

    def __init__(
        self,
        code_panel: CodePanel | None = None,
        graph_panel: GraphPanel | None = None,
        info_panel: InfoPanel | None = None,
    ) -> None:
        self.code_panel = code_panel
        self.graph_panel = graph_panel
        self.info_panel = info_panel

    def on_line_selected(self, event: LineSelectedEvent) -> None:
        if self.code_panel is not None:
            self.code_panel.highlight_line(event.line)

    def on_graph_rendered(self, event: GraphRenderedEvent) -> None:
        if self.graph_panel is not None:
            self.graph_panel.show_graph(event.snapshot.render, event.snapshot.selected_nodes)
        self._refresh_info(event.snapshot)

    def on_node_selection(self, event: NodeSelectionEvent) -> None:
        if self.graph_panel is not None:
            self.graph_panel.show_graph(event.snapshot.render, event.snapshot.selected_nodes)
        self._refresh_info(event.snapshot)

    def _refresh_info(self, snapshot: SelectionSnapshot) -> None:
        if self.info_panel is not None:
            self.info_panel.show_info(describe_selection(snapshot))
