"""Program CLI commands: ls, inspect, render, mermaid, validate, select."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fheviz.cli._config import FhevizConfig, load_config
from fheviz.cli._format import emit_json, print_table, truncate
from fheviz.exceptions import InvalidGraphError
from fheviz.program.examples import sample_graph
from fheviz.program.graph import ProgramGraph
from fheviz.program.operations import operation_to_wire
from fheviz.program.validation import validate_program
from fheviz.selection.coordinator import SelectionCoordinator
from fheviz.selection.line_mapping import demo_line_mapping
from fheviz.selection.views import describe_selection
from fheviz.viz.mermaid import VALID_DIRECTIONS, to_mermaid
from fheviz.viz.translator import mark_problematic, translate

# Name that always resolves to the built-in example program
SAMPLE_NAME = "sample"


def load_program(target: str, config: FhevizConfig | None = None) -> ProgramGraph:
    """Load a program by file path, registered name, or ``sample``."""
    config = config or load_config()
    allow_unknown = config.allow_unknown_operations

    if target == SAMPLE_NAME:
        return sample_graph()

    path = Path(target)
    if not path.is_file():
        registered = config.program_path(target)
        if registered is None:
            print(f"Error: '{target}' is neither a file nor a program in [tool.fheviz.programs]")
            print("Hint: pass a JSON path or register it in pyproject.toml:")
            print(f'  [tool.fheviz.programs]\n  {target} = "path/to/program.json"')
            raise typer.Exit(1)
        path = registered

    try:
        return ProgramGraph.load(path, allow_unknown=allow_unknown)
    except FileNotFoundError as e:
        print(f"Error: Program file '{path}' does not exist")
        raise typer.Exit(1) from e
    except OSError as e:
        print(f"Error: Cannot read program file '{path}': {e.strerror or e}")
        raise typer.Exit(1) from e
    except InvalidGraphError as e:
        print(f"Error: {e}")
        raise typer.Exit(1) from e


def _parse_node_ids(raw: str | None) -> set[int]:
    """Parse '1,4,7' into {1, 4, 7}."""
    if not raw:
        return set()
    try:
        return {int(part) for part in raw.split(",") if part.strip()}
    except ValueError as e:
        print(f"Error: --nodes expects comma-separated integers, got '{raw}'")
        raise typer.Exit(1) from e


def register_commands(app: typer.Typer) -> None:
    """Register all program commands as top-level commands on the app."""

    @app.command("ls")
    def ls_cmd(
        as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    ):
        """List registered programs from [tool.fheviz.programs]."""
        config = load_config()
        programs = {SAMPLE_NAME: "(built-in)", **config.programs}

        if as_json:
            emit_json("ls", {"programs": programs})
            return

        rows = [[name, path] for name, path in sorted(programs.items())]
        print(f"\n  Programs ({len(programs)}):\n")
        print_table(["Name", "Path"], rows)

    @app.command("inspect")
    def inspect_cmd(
        target: Annotated[str, typer.Argument(help="Program JSON path, registered name, or 'sample'")],
        as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
        output: Annotated[str | None, typer.Option("--output", help="Write JSON to file")] = None,
    ):
        """Show program structure: nodes, labels and operands."""
        graph = load_program(target)
        try:
            render = translate(graph)
        except InvalidGraphError as e:
            print(f"Error: {e}")
            raise typer.Exit(1) from e

        if as_json:
            nodes = [
                {
                    **node.to_dict(),
                    "operation": operation_to_wire(graph.operation(node.id)),
                    "operands": [[e.source, e.role.value] for e in graph.incoming(node.id)],
                }
                for node in render.nodes
            ]
            data = {"node_count": graph.node_count, "edge_count": graph.edge_count, "nodes": nodes}
            emit_json("inspect", data, output)
            return

        print(f"\nProgram: {target} | {graph.node_count} nodes | {graph.edge_count} edges\n")
        rows = []
        for node in render.nodes:
            operands = ", ".join(f"{e.source}:{e.role.value}" for e in graph.incoming(node.id))
            rows.append(
                [
                    str(node.id),
                    truncate(node.label, 30),
                    node.kind.value,
                    graph.operation(node.id).name,
                    operands or "—",
                ]
            )
        print_table(["Id", "Label", "Kind", "Operation", "Operands"], rows)

    @app.command("render")
    def render_cmd(
        target: Annotated[str, typer.Argument(help="Program JSON path, registered name, or 'sample'")],
        output: Annotated[str | None, typer.Option("--output", help="Write JSON to file")] = None,
        highlight: Annotated[bool, typer.Option("--highlight/--no-highlight", help="Mark nodes failing integrity checks")] = True,
    ):
        """Print the graph panel payload (nodes and edges) as JSON."""
        graph = load_program(target)
        try:
            render = translate(graph)
            if highlight:
                render = mark_problematic(render, validate_program(graph).problem_nodes)
        except InvalidGraphError as e:
            print(f"Error: {e}")
            raise typer.Exit(1) from e
        emit_json("render", render.to_dict(), output)

    @app.command("mermaid")
    def mermaid_cmd(
        target: Annotated[str, typer.Argument(help="Program JSON path, registered name, or 'sample'")],
        direction: Annotated[str | None, typer.Option("--direction", help="TD, TB, BT, LR or RL")] = None,
        show_ids: Annotated[bool, typer.Option("--show-ids", help="Prefix labels with node ids")] = False,
        output: Annotated[str | None, typer.Option("--output", help="Write Mermaid source to file")] = None,
    ):
        """Export the program as a Mermaid flowchart."""
        config = load_config()
        direction = direction or config.direction
        if direction not in VALID_DIRECTIONS:
            print(f"Error: Invalid direction '{direction}'. Use one of: {', '.join(sorted(VALID_DIRECTIONS))}")
            raise typer.Exit(1)

        graph = load_program(target, config)
        try:
            render = mark_problematic(translate(graph), validate_program(graph).problem_nodes)
        except InvalidGraphError as e:
            print(f"Error: {e}")
            raise typer.Exit(1) from e

        source = to_mermaid(render, direction=direction, show_ids=show_ids).source
        if output:
            Path(output).write_text(source + "\n")
            print(f"Wrote Mermaid diagram to {output}")
        else:
            print(source)

    @app.command("validate")
    def validate_cmd(
        target: Annotated[str, typer.Argument(help="Program JSON path, registered name, or 'sample'")],
        as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    ):
        """Check operand arity and edge roles. Exits 1 if anything is wrong."""
        graph = load_program(target)
        try:
            result = validate_program(graph)
        except InvalidGraphError as e:
            if as_json:
                emit_json("validate", {"valid": False, "errors": e.problems})
            else:
                print(f"Error: {e}")
            raise typer.Exit(1) from e

        if as_json:
            emit_json("validate", {"valid": result.valid, "errors": result.errors})
        elif result.valid:
            print(f"\n  {target}: OK ({graph.node_count} nodes, {graph.edge_count} edges)")
        else:
            print(f"\n  {target}: {len(result.issues)} issue(s)\n")
            for error in result.errors:
                print(f"  ✗ {error}")

        if not result.valid:
            raise typer.Exit(1)

    @app.command("select")
    def select_cmd(
        line: Annotated[int, typer.Argument(help="Source line of the built-in sample to click")],
        nodes: Annotated[str | None, typer.Option("--nodes", help="Comma-separated node ids to select")] = None,
        as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    ):
        """Click a line of the sample program and show the resulting selection."""
        coordinator = SelectionCoordinator(demo_line_mapping())
        coordinator.on_line_clicked(line)
        snapshot = coordinator.on_graph_selection_changed(_parse_node_ids(nodes))
        selected = describe_selection(snapshot)

        if as_json:
            data = {
                "selected_line": snapshot.selected_line,
                "selected_nodes": sorted(snapshot.selected_nodes),
                "graph": snapshot.render.to_dict(),
                "selection": selected,
            }
            emit_json("select", data)
            return

        graph = snapshot.current_graph
        print(f"\n  Line {snapshot.selected_line} -> {graph.node_count} nodes, {graph.edge_count} edges")
        if not selected:
            print("  No nodes selected.")
            return
        rows = [
            [
                str(entry["id"]),
                entry["label"],
                entry["kind"] or "—",
                ", ".join(f"{o['source']}:{o['role']}" for o in entry["operands"]) or "—",
                ", ".join(f"{c['target']}:{c['role']}" for c in entry["consumers"]) or "—",
            ]
            for entry in selected
        ]
        print()
        print_table(["Id", "Label", "Kind", "Operands", "Consumers"], rows)
