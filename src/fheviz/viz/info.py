"""Node details shown in the info panel and returned by session lookups."""

from __future__ import annotations

from typing import Any

from fheviz.exceptions import NodeNotFoundError
from fheviz.program.graph import ProgramGraph
from fheviz.program.operations import operation_to_wire
from fheviz.viz.translator import node_label


def describe_node(graph: ProgramGraph, node_id: int) -> dict[str, Any]:
    """Describe one node: its operation, operands and consumers.

    Raises:
        NodeNotFoundError: If ``node_id`` is not a node of ``graph``
    """
    if not 0 <= node_id < graph.node_count:
        raise NodeNotFoundError(node_id, graph.node_count)
    operation = graph.operation(node_id)
    return {
        "id": node_id,
        "label": node_label(operation),
        "operation": operation_to_wire(operation),
        "operands": [{"source": e.source, "role": e.role.value} for e in graph.incoming(node_id)],
        "consumers": [{"target": e.target, "role": e.role.value} for e in graph.outgoing(node_id)],
    }


def describe_nodes(graph: ProgramGraph, node_ids: frozenset[int] | set[int]) -> list[dict[str, Any]]:
    """Describe each id in ascending order, skipping ids not in ``graph``."""
    return [describe_node(graph, i) for i in sorted(node_ids) if 0 <= i < graph.node_count]
