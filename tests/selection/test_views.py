"""Tests for panel bindings and the node-info projection."""

from __future__ import annotations

from fheviz.program.examples import product_graph
from fheviz.selection.coordinator import SelectionCoordinator
from fheviz.selection.line_mapping import LookupLineMapping, demo_line_mapping
from fheviz.selection.views import PanelBinding, describe_selection
from fheviz.viz.translator import VisualKind


class FakeCodePanel:
    def __init__(self):
        self.highlighted: list[int] = []

    def highlight_line(self, line):
        self.highlighted.append(line)


class FakeGraphPanel:
    def __init__(self):
        self.shown: list = []

    def show_graph(self, render, selected):
        self.shown.append((render, selected))


class FakeInfoPanel:
    def __init__(self):
        self.entries: list = []

    def show_info(self, entries):
        self.entries.append(entries)


def _bound_coordinator(mapping=None):
    code, graph, info = FakeCodePanel(), FakeGraphPanel(), FakeInfoPanel()
    coordinator = SelectionCoordinator(
        mapping or demo_line_mapping(),
        processors=[PanelBinding(code_panel=code, graph_panel=graph, info_panel=info)],
    )
    return coordinator, code, graph, info


class TestPanelBinding:
    def test_line_click_updates_code_and_graph(self):
        coordinator, code, graph, info = _bound_coordinator()

        coordinator.on_line_clicked(9)

        assert code.highlighted == [9]
        render, selected = graph.shown[-1]
        assert render == coordinator.render
        assert selected == frozenset()
        assert info.entries[-1] == []

    def test_node_selection_updates_graph_and_info(self):
        coordinator, code, graph, info = _bound_coordinator()
        coordinator.on_line_clicked(8)

        coordinator.on_graph_selection_changed({2})

        assert code.highlighted == [8]
        assert graph.shown[-1][1] == frozenset({2})
        assert [e["label"] for e in info.entries[-1]] == ["Multiply"]

    def test_missing_panels_are_skipped(self):
        coordinator = SelectionCoordinator(demo_line_mapping(), processors=[PanelBinding()], strict=True)
        coordinator.on_line_clicked(1)
        coordinator.on_graph_selection_changed({0})

    def test_failing_panel_does_not_break_transition(self):
        class BrokenPanel:
            def highlight_line(self, line):
                raise RuntimeError("render failed")

        coordinator = SelectionCoordinator(demo_line_mapping(), processors=[PanelBinding(code_panel=BrokenPanel())])
        assert coordinator.on_line_clicked(8).selected_line == 8


class TestDescribeSelection:
    def test_entries_carry_kind(self):
        coordinator = SelectionCoordinator(demo_line_mapping())
        snapshot = coordinator.on_graph_selection_changed({7, 0})
        entries = describe_selection(snapshot)
        assert [(e["id"], e["kind"]) for e in entries] == [(0, "input"), (7, "empty")]

    def test_problematic_kind(self, missing_operand_graph):
        coordinator = SelectionCoordinator(LookupLineMapping({}, fallback=missing_operand_graph))
        entries = describe_selection(coordinator.on_graph_selection_changed({2}))
        assert entries[0]["kind"] == VisualKind.PROBLEMATIC.value

    def test_stale_ids_skipped(self):
        """Ids selected in a larger graph are dropped once a smaller graph is shown."""
        coordinator = SelectionCoordinator(demo_line_mapping())
        coordinator.on_graph_selection_changed({1, 12})
        snapshot = coordinator.on_line_clicked(8)
        assert snapshot.current_graph == product_graph(0, 3)
        assert [e["id"] for e in describe_selection(snapshot)] == [1]
