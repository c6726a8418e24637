"""Program graph model: nodes, typed edges and the serialized payload codec."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import networkx as nx

from fheviz.exceptions import InvalidGraphError
from fheviz.program.operations import Operation, operation_to_wire, parse_operation

# Only BFV programs are modeled
SUPPORTED_SCHEME = "Bfv"


class EdgeRole(Enum):
    """Operand position an edge's source feeds into on its target.

    Values:
        LEFT: Left operand of a binary operation.
        RIGHT: Right operand of a binary operation.
        UNARY: Sole operand of a unary operation.
    """

    LEFT = "Left"
    RIGHT = "Right"
    UNARY = "Unary"


@dataclass(frozen=True)
class ProgramNode:
    """One node of a program graph. Identified by its index, not its content."""

    operation: Operation


@dataclass(frozen=True)
class Edge:
    """Directed operand edge ``source -> target``."""

    source: int
    target: int
    role: EdgeRole

    def __post_init__(self) -> None:
        if isinstance(self.role, str):
            object.__setattr__(self, "role", EdgeRole(self.role))


@dataclass(frozen=True)
class ProgramGraph:
    """A compiled FHE program: ordered nodes plus operand edges.

    Node identity is the zero-based position in ``nodes``. The graph is
    assumed to be acyclic; that is never re-verified here. Index ranges and
    operand arity are checked by the translator and by
    ``fheviz.program.validation`` respectively, not at construction, so a
    malformed graph can still be built, inspected and reported on.

    Example:
        >>> g = ProgramGraph.from_dict({
        ...     "nodes": [{"operation": {"InputCiphertext": 0}},
        ...               {"operation": "OutputCiphertext"}],
        ...     "edges": [[0, 1, "Unary"]],
        ... })
        >>> g.node_count, g.edge_count
        (2, 1)
    """

    nodes: tuple[ProgramNode, ...] = ()
    edges: tuple[Edge, ...] = field(default=())

    def __post_init__(self) -> None:
        # Accept lists for convenience but store tuples so the graph stays hashable
        if not isinstance(self.nodes, tuple):
            object.__setattr__(self, "nodes", tuple(self.nodes))
        if not isinstance(self.edges, tuple):
            object.__setattr__(self, "edges", tuple(self.edges))

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def operation(self, index: int) -> Operation:
        """Operation of the node at ``index``."""
        return self.nodes[index].operation

    def incoming(self, index: int) -> list[Edge]:
        """Edges whose target is ``index``, in graph order."""
        return [e for e in self.edges if e.target == index]

    def outgoing(self, index: int) -> list[Edge]:
        """Edges whose source is ``index``, in graph order."""
        return [e for e in self.edges if e.source == index]

    def out_of_range_edges(self) -> list[str]:
        """Describe every edge endpoint that does not name an existing node."""
        problems = []
        count = self.node_count
        for position, edge in enumerate(self.edges):
            for end, index in (("source", edge.source), ("target", edge.target)):
                if not _is_index(index):
                    problems.append(f"Edge {position} {end} {index!r} is not a node index")
                elif not 0 <= index < count:
                    problems.append(
                        f"Edge {position} ({edge.source} -> {edge.target}) {end} {index} "
                        f"is out of range for {count} nodes"
                    )
        return problems

    def to_networkx(self) -> nx.MultiDiGraph:
        """Build a NetworkX view of the graph.

        A MultiDiGraph is used because the same source may feed both operands
        of a binary operation (e.g. squaring). Node attribute ``operation``
        and edge attribute ``role`` mirror the model.

        Raises:
            InvalidGraphError: If an edge references a missing node
        """
        problems = self.out_of_range_edges()
        if problems:
            raise InvalidGraphError(problems)
        G = nx.MultiDiGraph()
        for index, node in enumerate(self.nodes):
            G.add_node(index, operation=node.operation)
        for edge in self.edges:
            G.add_edge(edge.source, edge.target, role=edge.role)
        return G

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Any, *, allow_unknown: bool = False) -> ProgramGraph:
        """Decode a serialized program.

        Accepts the bare ``{"nodes": [...], "edges": [...]}`` form as well as
        the runtime envelope ``{"graph": {"graph": {...}}, "data": "Bfv"}``.
        Unrelated keys (``node_holes``, ``edge_property``) are ignored.

        Args:
            data: Parsed JSON payload
            allow_unknown: Decode unrecognized operations as UnknownOperation

        Raises:
            InvalidGraphError: If the payload shape, an operation or an edge
                is malformed. All problems are reported together.
        """
        body = _unwrap_envelope(data)

        raw_nodes = body.get("nodes")
        raw_edges = body.get("edges", [])
        if not isinstance(raw_nodes, list):
            raise InvalidGraphError("Payload has no 'nodes' list")
        if not isinstance(raw_edges, list):
            raise InvalidGraphError("'edges' must be a list")

        problems: list[str] = []
        nodes: list[ProgramNode] = []
        for index, raw in enumerate(raw_nodes):
            if not isinstance(raw, dict) or "operation" not in raw:
                problems.append(f"Node {index} has no 'operation' field")
                continue
            try:
                nodes.append(ProgramNode(parse_operation(raw["operation"], allow_unknown=allow_unknown)))
            except InvalidGraphError as e:
                problems.extend(f"Node {index}: {p}" for p in e.problems)

        edges: list[Edge] = []
        for position, raw in enumerate(raw_edges):
            edge = _parse_edge(raw, position, problems)
            if edge is not None:
                edges.append(edge)

        if problems:
            raise InvalidGraphError(problems)
        return cls(nodes=tuple(nodes), edges=tuple(edges))

    @classmethod
    def from_json(cls, text: str, *, allow_unknown: bool = False) -> ProgramGraph:
        """Decode a serialized program from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidGraphError(f"Payload is not valid JSON: {e}") from e
        return cls.from_dict(data, allow_unknown=allow_unknown)

    @classmethod
    def load(cls, path: str | Path, *, allow_unknown: bool = False) -> ProgramGraph:
        """Read a serialized program from a JSON file.

        Raises:
            OSError: If the file cannot be read
            InvalidGraphError: If the file is not UTF-8 or not a valid program
        """
        raw = Path(path).read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidGraphError(f"Payload is not valid UTF-8: {e}") from e
        return cls.from_json(text, allow_unknown=allow_unknown)

    def to_dict(self) -> dict[str, Any]:
        """Encode as the bare ``{"nodes", "edges"}`` payload."""
        return {
            "nodes": [{"operation": operation_to_wire(n.operation)} for n in self.nodes],
            "edges": [[e.source, e.target, e.role.value] for e in self.edges],
        }


def _unwrap_envelope(data: Any) -> dict[str, Any]:
    """Strip the runtime's ``{"graph": {"graph": ...}, "data": scheme}`` wrapping."""
    if not isinstance(data, dict):
        raise InvalidGraphError(f"Payload must be an object, got {type(data).__name__}")

    scheme = data.get("data")
    if scheme is not None and scheme != SUPPORTED_SCHEME:
        raise InvalidGraphError(f"Unsupported scheme {scheme!r}; only {SUPPORTED_SCHEME!r} programs are supported")

    body = data
    while "nodes" not in body and isinstance(body.get("graph"), dict):
        body = body["graph"]
    return body


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_edge(raw: Any, position: int, problems: list[str]) -> Edge | None:
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        problems.append(f"Edge {position} must be [source, target, role], got {raw!r}")
        return None
    source, target, tag = raw
    if not (_is_index(source) and _is_index(target)):
        problems.append(f"Edge {position} endpoints must be integers, got {source!r} -> {target!r}")
        return None
    try:
        role = EdgeRole(tag)
    except ValueError:
        valid = ", ".join(r.value for r in EdgeRole)
        problems.append(f"Edge {position} has unknown role {tag!r}. Expected one of: {valid}")
        return None
    return Edge(source, target, role)
