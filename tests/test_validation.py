"""Tests for program graph integrity checks."""

import pytest

from fheviz.exceptions import InvalidGraphError
from fheviz.program.operations import Add, InputCiphertext, Multiply, OutputCiphertext, Relinearize, UnknownOperation
from fheviz.program.validation import IntegrityIssue, ValidationResult, validate_program
from tests.conftest import make_graph


class TestValidGraphs:
    def test_sample_is_valid(self, sample):
        result = validate_program(sample)
        assert result.valid is True
        assert result.issues == []
        assert result.problem_nodes == frozenset()

    def test_square_is_valid(self, square_graph):
        """The same source may feed both operands."""
        assert validate_program(square_graph).valid

    def test_empty_graph_is_valid(self):
        assert validate_program(make_graph([], [])).valid


class TestArityViolations:
    def test_missing_right_operand(self, missing_operand_graph):
        result = validate_program(missing_operand_graph)
        assert not result.valid
        assert result.problem_nodes == {2}
        assert result.errors == ["Node 2: Add expects 1 Left, 1 Right, got 1 Left"]

    def test_two_left_operands(self):
        graph = make_graph(
            [InputCiphertext(0), InputCiphertext(1), Multiply()],
            [(0, 2, "Left"), (1, 2, "Left")],
        )
        result = validate_program(graph)
        assert result.errors == ["Node 2: Multiply expects 1 Left, 1 Right, got 2 Left"]

    def test_unary_edge_into_binary(self):
        graph = make_graph([InputCiphertext(0), Add()], [(0, 1, "Unary")])
        assert validate_program(graph).problem_nodes == {1}

    def test_binary_role_into_unary(self):
        graph = make_graph([InputCiphertext(0), Relinearize()], [(0, 1, "Left")])
        result = validate_program(graph)
        assert "Relinearize expects 1 Unary, got 1 Left" in result.errors[0]

    def test_output_without_operand(self):
        graph = make_graph([OutputCiphertext()], [])
        result = validate_program(graph)
        assert result.errors == ["Node 0: OutputCiphertext expects 1 Unary, got none"]

    def test_input_with_operand(self):
        graph = make_graph([InputCiphertext(0), InputCiphertext(1)], [(0, 1, "Unary")])
        result = validate_program(graph)
        assert result.problem_nodes == {1}
        assert "must have no operands" in result.errors[0]

    def test_self_loop(self):
        graph = make_graph([InputCiphertext(0), Relinearize()], [(1, 1, "Unary")])
        result = validate_program(graph)
        assert any("self-loop" in e for e in result.errors)

    def test_unknown_operation_flagged(self):
        graph = make_graph([UnknownOperation(raw='"Rotate"')], [])
        result = validate_program(graph)
        assert result.errors == ['Node 0: Unrecognized operation "Rotate"']

    def test_issues_sorted_by_node(self):
        graph = make_graph(
            [OutputCiphertext(), InputCiphertext(0), Add(), Relinearize()],
            [],
        )
        result = validate_program(graph)
        assert [i.node_id for i in result.issues] == [0, 2, 3]


class TestOutOfRange:
    def test_raises(self, out_of_range_graph):
        with pytest.raises(InvalidGraphError):
            validate_program(out_of_range_graph)


class TestResultTypes:
    def test_issue_str(self):
        assert str(IntegrityIssue(4, "broken")) == "Node 4: broken"

    def test_validation_result_dataclass(self):
        result = ValidationResult(valid=False, issues=[IntegrityIssue(1, "a"), IntegrityIssue(1, "b")])
        assert result.errors == ["Node 1: a", "Node 1: b"]
        assert result.problem_nodes == frozenset({1})
