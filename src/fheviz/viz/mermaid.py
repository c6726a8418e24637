"""Mermaid flowchart exporter for render graphs.

Turns the same RenderGraph the interactive graph panel draws into Mermaid
source, for terminals, notebooks and documentation.

Usage:
    to_mermaid(translate(graph))                 # Renders in notebooks
    print(to_mermaid(render, direction="LR"))    # Raw Mermaid source
    to_mermaid(render).source                    # Access source directly
"""

from __future__ import annotations

from typing import Any

from fheviz.program.graph import EdgeRole
from fheviz.viz.translator import RenderGraph, RenderNode, VisualKind

# =============================================================================
# Constants
# =============================================================================

VALID_DIRECTIONS = frozenset({"TD", "TB", "BT", "LR", "RL"})

DEFAULT_COLORS: dict[str, dict[str, str]] = {
    "input": {
        "fill": "#E3F2FD", "stroke": "#1976D2", "stroke-width": "2px", "color": "#0D47A1",
    },
    "empty": {
        "fill": "#ECEFF1", "stroke": "#546E7A", "stroke-width": "2px", "color": "#263238",
    },
    "problematic": {
        "fill": "#FFEBEE", "stroke": "#C62828", "stroke-width": "3px", "color": "#B71C1C",
    },
}

# Shape templates: (open, close) delimiters for each visual kind
_SHAPE_DELIMITERS: dict[VisualKind, tuple[str, str]] = {
    VisualKind.INPUT: ('(["', '"])'),
    VisualKind.EMPTY: ('["', '"]'),
    VisualKind.PROBLEMATIC: ('{{"', '"}}'),
}

# =============================================================================
# MermaidDiagram (notebook-renderable result)
# =============================================================================


class MermaidDiagram:
    """A Mermaid diagram that renders in Jupyter notebooks.

    Example:
        >>> diagram = to_mermaid(render)
        >>> diagram                  # renders in notebook
        >>> print(diagram)           # prints raw Mermaid source
        >>> diagram.source           # raw string
    """

    def __init__(self, source: str) -> None:
        self.source = source

    def __str__(self) -> str:
        return self.source

    def __repr__(self) -> str:
        lines = self.source.split("\n")
        preview = lines[0] if lines else ""
        return f"MermaidDiagram({preview!r}, {len(lines)} lines)"

    def __contains__(self, item: str) -> bool:
        return item in self.source

    def _repr_mimebundle_(self, **kwargs: Any) -> dict[str, str]:
        """Provide MIME types for notebook rendering."""
        return {
            "text/vnd.mermaid": self.source,
            "text/plain": str(self),
        }


# =============================================================================
# Formatting
# =============================================================================


def _node_id(node_id: int) -> str:
    # Mermaid IDs cannot start with a digit
    return f"n{node_id}"


def _escape_label(text: str) -> str:
    """Escape characters that have special meaning in Mermaid labels."""
    return text.replace('"', "&quot;").replace("<", "&lt;").replace(">", "&gt;")


def _format_node(node: RenderNode, show_ids: bool) -> str:
    open_delim, close_delim = _SHAPE_DELIMITERS[node.kind]
    label = _escape_label(node.label)
    if show_ids:
        label = f"#{node.id} {label}"
    return f"    {_node_id(node.id)}{open_delim}{label}{close_delim}"


def _format_edge(source: int, target: int, role: EdgeRole, show_roles: bool) -> str:
    s, t = _node_id(source), _node_id(target)
    if show_roles and role is not EdgeRole.UNARY:
        return f"    {s} -->|{role.value}| {t}"
    return f"    {s} --> {t}"


def _build_style_section(
    render: RenderGraph,
    colors: dict[str, dict[str, str]] | None,
) -> list[str]:
    """Build classDef and class assignment lines."""
    effective = {cls: props.copy() for cls, props in DEFAULT_COLORS.items()}
    if colors:
        for key, val in colors.items():
            effective.setdefault(key, {}).update(val)

    class_to_ids: dict[str, list[str]] = {}
    for node in render.nodes:
        class_to_ids.setdefault(node.kind.value, []).append(_node_id(node.id))

    lines: list[str] = []
    for cls_name, props in effective.items():
        if cls_name not in class_to_ids:
            continue
        prop_str = ",".join(f"{k}:{v}" for k, v in props.items())
        lines.append(f"    classDef {cls_name} {prop_str}")

    for cls_name, ids in sorted(class_to_ids.items()):
        lines.append(f"    class {','.join(ids)} {cls_name}")

    return lines


# =============================================================================
# Public API
# =============================================================================


def to_mermaid(
    render: RenderGraph,
    *,
    direction: str = "TD",
    show_roles: bool = True,
    show_ids: bool = False,
    colors: dict[str, dict[str, str]] | None = None,
) -> MermaidDiagram:
    """Convert a render graph to a Mermaid flowchart diagram.

    Args:
        render: Output of ``translate`` (optionally ``mark_problematic``)
        direction: Flowchart direction, one of "TD", "TB", "LR", "RL", "BT"
        show_roles: Label Left/Right operand edges with their role
        show_ids: Prefix node labels with their node id
        colors: Custom color overrides per visual kind, e.g.
            {"input": {"fill": "#fff", "stroke": "#000"}}

    Returns:
        MermaidDiagram that renders in notebooks and converts to string.
    """
    if direction not in VALID_DIRECTIONS:
        msg = f"Invalid direction {direction!r}. Must be one of {sorted(VALID_DIRECTIONS)}"
        raise ValueError(msg)

    lines: list[str] = [f"flowchart {direction}"]

    if render.nodes:
        lines.append("    %% Nodes")
        lines.extend(_format_node(node, show_ids) for node in render.nodes)

    if render.edges:
        lines.append("    %% Edges")
        lines.extend(_format_edge(e.source, e.target, e.role, show_roles) for e in render.edges)

    style = _build_style_section(render, colors)
    if style:
        lines.append("")
        lines.append("    %% Styling")
        lines.extend(style)

    return MermaidDiagram("\n".join(lines))
