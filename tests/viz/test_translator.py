"""Tests for ProgramGraph -> RenderGraph translation."""

import pytest

from fheviz.exceptions import InvalidGraphError
from fheviz.program.graph import EdgeRole
from fheviz.program.operations import InputCiphertext, UnknownOperation
from fheviz.viz.translator import (
    RenderEdge,
    RenderGraph,
    RenderNode,
    VisualKind,
    mark_problematic,
    node_label,
    translate,
)
from tests.conftest import make_graph


class TestSampleProgram:
    def test_counts(self, sample):
        render = translate(sample)
        assert len(render.nodes) == 13
        assert len(render.edges) == 13

    def test_input_node(self, sample):
        node = translate(sample).nodes[0]
        assert node == RenderNode(id=0, label="0", kind=VisualKind.INPUT)

    def test_add_node(self, sample):
        node = translate(sample).nodes[7]
        assert node.label == "Add"
        assert node.kind is VisualKind.EMPTY

    def test_inputs_reveal_slots(self, sample):
        render = translate(sample)
        for slot in range(4):
            assert render.nodes[slot].kind is VisualKind.INPUT
            assert str(slot) in render.nodes[slot].label

    def test_non_inputs_are_empty(self, sample):
        render = translate(sample)
        assert {n.kind for n in render.nodes[4:]} == {VisualKind.EMPTY}
        assert [n.label for n in render.nodes[4:]] == [
            "Multiply", "Multiply", "Multiply", "Add",
            "OutputCiphertext", "OutputCiphertext",
            "Relinearize", "Relinearize", "Relinearize",
        ]

    def test_edges_preserve_order(self, sample):
        render = translate(sample)
        assert [(e.source, e.target, e.role) for e in render.edges] == [
            (e.source, e.target, e.role) for e in sample.edges
        ]

    def test_never_produces_problematic(self, sample, missing_operand_graph):
        for graph in (sample, missing_operand_graph):
            assert VisualKind.PROBLEMATIC not in {n.kind for n in translate(graph).nodes}


class TestPurity:
    def test_idempotent(self, sample):
        assert translate(sample) == translate(sample)

    def test_input_not_modified(self, sample):
        before = sample.to_dict()
        translate(sample)
        assert sample.to_dict() == before

    def test_ids_are_positions(self):
        graph = make_graph([InputCiphertext(5), InputCiphertext(5)], [])
        render = translate(graph)
        assert [n.id for n in render.nodes] == [0, 1]
        assert render.nodes[0].label == render.nodes[1].label == "5"


class TestInvalidGraph:
    def test_out_of_range_edge(self, out_of_range_graph):
        with pytest.raises(InvalidGraphError, match="target 99 is out of range for 13 nodes"):
            translate(out_of_range_graph)

    def test_negative_source(self):
        graph = make_graph([InputCiphertext(0)], [(-1, 0, "Unary")])
        with pytest.raises(InvalidGraphError, match="source -1"):
            translate(graph)

    def test_arity_violation_still_translates(self, missing_operand_graph):
        render = translate(missing_operand_graph)
        assert len(render.nodes) == 4


class TestLabels:
    def test_unknown_operation_label(self):
        assert node_label(UnknownOperation(raw='"Rotate"')) == 'Unknown("Rotate")'

    def test_unknown_operation_kind(self):
        render = translate(make_graph([UnknownOperation(raw="1")], []))
        assert render.nodes[0].kind is VisualKind.EMPTY


class TestRenderGraph:
    def test_to_dict(self, square_graph):
        payload = translate(square_graph).to_dict()
        assert payload["nodes"][0] == {"id": 0, "title": "0", "type": "input"}
        assert payload["nodes"][1] == {"id": 1, "title": "Multiply", "type": "empty"}
        assert payload["edges"][0] == {"source": 0, "target": 1, "type": "Left"}
        assert payload["edges"][2] == {"source": 1, "target": 2, "type": "Unary"}

    def test_node_lookup(self, sample):
        render = translate(sample)
        assert render.node(7).label == "Add"
        assert render.node(13) is None
        assert render.node(-1) is None

    def test_node_lookup_with_sparse_ids(self):
        render = RenderGraph(nodes=(RenderNode(4, "x", VisualKind.EMPTY),))
        assert render.node(4).label == "x"

    def test_edge_to_dict(self):
        assert RenderEdge(1, 2, EdgeRole.RIGHT).to_dict() == {"source": 1, "target": 2, "type": "Right"}


class TestMarkProblematic:
    def test_marks_only_given_nodes(self, sample):
        render = mark_problematic(translate(sample), {0, 7})
        kinds = [n.kind for n in render.nodes]
        assert kinds[0] is VisualKind.PROBLEMATIC
        assert kinds[7] is VisualKind.PROBLEMATIC
        assert kinds.count(VisualKind.PROBLEMATIC) == 2
        assert render.nodes[7].label == "Add"

    def test_returns_new_graph(self, sample):
        original = translate(sample)
        mark_problematic(original, {1})
        assert original.nodes[1].kind is VisualKind.INPUT

    def test_empty_set_is_identity(self, sample):
        render = translate(sample)
        assert mark_problematic(render, set()) is render

    def test_unknown_ids_ignored(self, sample):
        render = translate(sample)
        assert mark_problematic(render, {99}) == render
