"""fheviz CLI: inspect compiled FHE program graphs from the terminal.

Entry point for the `fheviz` command. Requires ``pip install fheviz[cli]``.

Commands:
    ls          List registered programs from pyproject.toml
    inspect     Show program structure (nodes, labels, operands)
    render      Print the graph panel payload as JSON
    mermaid     Export the program as a Mermaid flowchart
    validate    Check operand arity and edge roles
    select      Click a line of the sample program and show the selection
"""

from __future__ import annotations


def _require_typer():
    """Check that typer is available."""
    try:
        import typer  # noqa: F401
    except ImportError:
        import sys

        print("Error: typer is required for the CLI. Install with: pip install fheviz[cli]", file=sys.stderr)
        raise SystemExit(1) from None


def create_app():
    """Create the Typer app with all commands."""
    _require_typer()

    import typer

    from fheviz.cli.program_cmd import register_commands

    app = typer.Typer(
        name="fheviz",
        help="Inspect compiled FHE program graphs.",
        no_args_is_help=True,
    )
    register_commands(app)

    return app


def main():
    """CLI entry point."""
    app = create_app()
    app()
