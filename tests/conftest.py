"""Shared fixtures for fheviz tests."""

from __future__ import annotations

import pytest

from fheviz.program.examples import SAMPLE_PAYLOAD, sample_graph
from fheviz.program.graph import Edge, EdgeRole, ProgramGraph, ProgramNode
from fheviz.program.operations import Add, InputCiphertext, Multiply, OutputCiphertext, Relinearize


def make_graph(operations, edges) -> ProgramGraph:
    """Build a ProgramGraph from operations and (source, target, role) triples."""
    return ProgramGraph(
        nodes=tuple(ProgramNode(op) for op in operations),
        edges=tuple(Edge(s, t, EdgeRole(r)) for s, t, r in edges),
    )


@pytest.fixture
def sample():
    """The 13-node sample program."""
    return sample_graph()


@pytest.fixture
def sample_payload():
    return SAMPLE_PAYLOAD


@pytest.fixture
def square_graph():
    """x * x, relinearized and returned."""
    return make_graph(
        [InputCiphertext(0), Multiply(), Relinearize(), OutputCiphertext()],
        [(0, 1, "Left"), (0, 1, "Right"), (1, 2, "Unary"), (2, 3, "Unary")],
    )


@pytest.fixture
def missing_operand_graph():
    """An Add with only its Left operand wired."""
    return make_graph(
        [InputCiphertext(0), InputCiphertext(1), Add(), OutputCiphertext()],
        [(0, 2, "Left"), (2, 3, "Unary")],
    )


@pytest.fixture
def out_of_range_graph(sample):
    """The sample program plus an edge into node 99."""
    return ProgramGraph(nodes=sample.nodes, edges=sample.edges + (Edge(7, 99, EdgeRole.UNARY),))
