"""Structural integrity checks for program graphs.

Arity rules:
    - Multiply / Add consume exactly one Left and one Right operand
    - Relinearize / OutputCiphertext consume exactly one Unary operand
    - InputCiphertext has no incoming edges

Violations are reported as ``IntegrityIssue`` values rather than raised, so a
viewer can highlight the offending nodes instead of refusing to draw. Edges
that point at missing nodes are a different matter: nothing sensible can be
drawn, so those raise ``InvalidGraphError``.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

import networkx as nx

from fheviz.program.graph import EdgeRole, ProgramGraph
from fheviz.program.operations import InputCiphertext, UnknownOperation

_BINARY_ROLES = Counter({EdgeRole.LEFT: 1, EdgeRole.RIGHT: 1})
_UNARY_ROLES = Counter({EdgeRole.UNARY: 1})


@dataclass(frozen=True)
class IntegrityIssue:
    """A single integrity violation attached to a node."""

    node_id: int
    message: str

    def __str__(self) -> str:
        return f"Node {self.node_id}: {self.message}"


@dataclass
class ValidationResult:
    """Result of program graph validation."""

    valid: bool
    issues: list[IntegrityIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        """Issue messages, prefixed with their node id."""
        return [str(issue) for issue in self.issues]

    @property
    def problem_nodes(self) -> frozenset[int]:
        """Ids of every node with at least one issue."""
        return frozenset(issue.node_id for issue in self.issues)


def validate_program(graph: ProgramGraph) -> ValidationResult:
    """Check operand arity and edge roles for every node.

    Args:
        graph: The program graph to check

    Returns:
        ValidationResult listing issues in node order

    Raises:
        InvalidGraphError: If an edge references a node index out of range
    """
    G = graph.to_networkx()
    issues: list[IntegrityIssue] = []

    for index, operation in G.nodes(data="operation"):
        roles = Counter(role for _, _, role in G.in_edges(index, data="role"))
        message = _check_operands(operation, roles)
        if message is not None:
            issues.append(IntegrityIssue(index, message))

    for source, _ in nx.selfloop_edges(G):
        issues.append(IntegrityIssue(source, "Feeds its own operand (self-loop)"))

    issues.sort(key=lambda issue: issue.node_id)
    return ValidationResult(valid=not issues, issues=issues)


def _check_operands(operation: object, roles: Counter) -> str | None:
    if isinstance(operation, UnknownOperation):
        return f"Unrecognized operation {operation.raw}"

    if isinstance(operation, InputCiphertext):
        if roles:
            return f"InputCiphertext must have no operands, got {_describe(roles)}"
        return None

    expected = _BINARY_ROLES if operation.arity == 2 else _UNARY_ROLES
    if roles != expected:
        return f"{operation.name} expects {_describe(expected)}, got {_describe(roles) or 'none'}"
    return None


def _describe(roles: Counter) -> str:
    ordered = sorted(roles.items(), key=lambda item: list(EdgeRole).index(item[0]))
    return ", ".join(f"{count} {role.value}" for role, count in ordered)
