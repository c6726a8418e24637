"""Translate a ProgramGraph into the node/edge shape the graph panel draws.

The graph panel only understands flat ``RenderNode`` / ``RenderEdge``
sequences. ``translate`` is a pure projection: one render node per program
node (same index), one render edge per program edge (same order).

Public API:
    from fheviz.viz.translator import translate, mark_problematic
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterable

from fheviz.exceptions import InvalidGraphError
from fheviz.program.graph import EdgeRole, ProgramGraph
from fheviz.program.operations import InputCiphertext, Operation, UnknownOperation


class VisualKind(Enum):
    """Node style understood by the graph panel.

    Values:
        INPUT: Encrypted program input.
        EMPTY: Any other operation.
        PROBLEMATIC: Highlighted as an error. Never produced by ``translate``.
    """

    INPUT = "input"
    EMPTY = "empty"
    PROBLEMATIC = "problematic"


@dataclass(frozen=True)
class RenderNode:
    """A drawable node. ``id`` is the program node's index."""

    id: int
    label: str
    kind: VisualKind

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.label, "type": self.kind.value}


@dataclass(frozen=True)
class RenderEdge:
    """A drawable directed edge carrying its operand role."""

    source: int
    target: int
    role: EdgeRole

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "type": self.role.value}


@dataclass(frozen=True)
class RenderGraph:
    """Display-oriented projection of a ProgramGraph. Recomputed, never stored."""

    nodes: tuple[RenderNode, ...] = ()
    edges: tuple[RenderEdge, ...] = ()

    def node(self, node_id: int) -> RenderNode | None:
        """Look up a render node by id."""
        if 0 <= node_id < len(self.nodes) and self.nodes[node_id].id == node_id:
            return self.nodes[node_id]
        return next((n for n in self.nodes if n.id == node_id), None)

    def to_dict(self) -> dict[str, Any]:
        """Payload for the graph panel: ``{"nodes": [...], "edges": [...]}``."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


def node_label(operation: Operation) -> str:
    """Stable user-visible label for a node.

    Inputs show their slot number, unrecognized variants show their raw wire
    value, everything else shows the variant name.
    """
    if isinstance(operation, InputCiphertext):
        return str(operation.slot)
    if isinstance(operation, UnknownOperation):
        return f"Unknown({operation.raw})"
    return operation.name


def translate(graph: ProgramGraph) -> RenderGraph:
    """Project a program graph onto render nodes and edges.

    Args:
        graph: Program graph to translate. Not modified.

    Returns:
        RenderGraph with ``graph.node_count`` nodes and ``graph.edge_count``
        edges, both in input order

    Raises:
        InvalidGraphError: If any edge references a node index out of range.
            Nothing is returned in that case.

    Example:
        >>> from fheviz.program.examples import sample_graph
        >>> render = translate(sample_graph())
        >>> render.nodes[0]
        RenderNode(id=0, label='0', kind=<VisualKind.INPUT: 'input'>)
    """
    problems = graph.out_of_range_edges()
    if problems:
        raise InvalidGraphError(problems)

    nodes = tuple(
        RenderNode(
            id=index,
            label=node_label(node.operation),
            kind=VisualKind.INPUT if isinstance(node.operation, InputCiphertext) else VisualKind.EMPTY,
        )
        for index, node in enumerate(graph.nodes)
    )
    edges = tuple(RenderEdge(e.source, e.target, e.role) for e in graph.edges)
    return RenderGraph(nodes=nodes, edges=edges)


def mark_problematic(render: RenderGraph, node_ids: Iterable[int]) -> RenderGraph:
    """Return a copy of ``render`` with the given nodes styled as problematic.

    Ids that do not appear in the graph are ignored.
    """
    flagged = frozenset(node_ids)
    if not flagged:
        return render
    nodes = tuple(
        replace(n, kind=VisualKind.PROBLEMATIC) if n.id in flagged else n
        for n in render.nodes
    )
    return replace(render, nodes=nodes)
