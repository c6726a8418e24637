"""Visualization module for fheviz.

Usage:
    from fheviz.viz import translate, to_mermaid

    render = translate(program_graph)   # nodes/edges for the graph panel
    render.to_dict()                    # JSON payload for the panel
    to_mermaid(render)                  # Mermaid flowchart
"""

from fheviz.viz.mermaid import MermaidDiagram, to_mermaid
from fheviz.viz.translator import (
    RenderEdge,
    RenderGraph,
    RenderNode,
    VisualKind,
    mark_problematic,
    node_label,
    translate,
)

__all__ = [
    "MermaidDiagram",
    "RenderEdge",
    "RenderGraph",
    "RenderNode",
    "VisualKind",
    "mark_problematic",
    "node_label",
    "to_mermaid",
    "translate",
]
