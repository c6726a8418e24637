"""Terminal walk-through of the code/graph selection linkage.

Drives a SelectionCoordinator over the built-in sample program with three
text panels standing in for the real code view, graph view and node-info
view:
  1. Startup shows the whole compiled program
  2. Clicking a product statement narrows the graph to its nodes
  3. Selecting nodes in the graph fills the info panel
  4. Clicking an unmapped line falls back to the whole program

Run:  python examples/selection_demo.py
"""

from __future__ import annotations

import logging

from fheviz import PanelBinding, SelectionCoordinator, demo_line_mapping, to_mermaid
from fheviz.program.examples import SAMPLE_SOURCE

# ─── Text panels ─────────────────────────────────────────────────────


class TextCodePanel:
    def highlight_line(self, line: int) -> None:
        print("\n── code " + "─" * 50)
        for number, text in enumerate(SAMPLE_SOURCE.splitlines(), start=1):
            marker = ">" if number == line else " "
            print(f" {marker} {number:2d} │ {text}")


class TextGraphPanel:
    def show_graph(self, render, selected) -> None:
        print("\n── graph " + "─" * 49)
        print(to_mermaid(render, show_ids=True))
        if selected:
            print(f"   selected: {sorted(selected)}")


class TextInfoPanel:
    def show_info(self, entries) -> None:
        print("\n── node info " + "─" * 45)
        if not entries:
            print("   (nothing selected)")
        for entry in entries:
            operands = ", ".join(f"{o['source']} ({o['role']})" for o in entry["operands"]) or "—"
            print(f"   #{entry['id']} {entry['label']} [{entry['kind']}]  operands: {operands}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    binding = PanelBinding(TextCodePanel(), TextGraphPanel(), TextInfoPanel())
    coordinator = SelectionCoordinator(demo_line_mapping(), processors=[binding])

    print("\n═══ 1. Startup ═══")
    TextGraphPanel().show_graph(coordinator.render, coordinator.selected_nodes)

    print("\n═══ 2. Click line 8 (let ad = a * d) ═══")
    coordinator.on_line_clicked(8)

    print("\n═══ 3. Select the Multiply and Relinearize nodes ═══")
    coordinator.on_graph_selection_changed({2, 3})

    print("\n═══ 4. Click line 11 (no dedicated entry) ═══")
    coordinator.on_line_clicked(11)

    print("\n═══ 5. Click empty canvas ═══")
    coordinator.on_graph_selection_changed(None)

    coordinator.close()


if __name__ == "__main__":
    main()
