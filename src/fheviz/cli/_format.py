"""Output helpers shared by the program commands: JSON envelopes and node tables."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

# Bump on breaking changes to any command's JSON data
SCHEMA_VERSION = 1

# Longer tables are cut; --json always carries every row
MAX_ROWS = 200

# Columns holding node ids or counts
NUMERIC_COLUMNS = frozenset({"Id", "Nodes", "Edges"})


def json_envelope(command: str, data: Any) -> dict[str, Any]:
    """Wrap command output as ``{schema_version, command, generated_at, data}``."""
    return {
        "schema_version": SCHEMA_VERSION,
        "command": command,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "data": data,
    }


def emit_json(command: str, data: Any, output: str | None = None) -> None:
    """Print the envelope, or write it to ``output`` and report where it went."""
    text = json.dumps(json_envelope(command, data), indent=2, default=str)
    if output is None:
        print(text)
        return
    Path(output).write_text(text)
    print(f"Wrote {command} output to {output}")


def truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 1] + "…"


def table_lines(headers: Sequence[str], rows: Sequence[Sequence[str]], indent: int = 2) -> list[str]:
    """Lay out ``rows`` under ``headers`` with a rule line; id columns align right."""
    if not rows:
        return []
    widths = [max(len(header), *(len(row[i]) for row in rows)) for i, header in enumerate(headers)]

    def layout(cells: Sequence[str]) -> str:
        padded = (
            cell.rjust(width) if header in NUMERIC_COLUMNS else cell.ljust(width)
            for header, cell, width in zip(headers, cells, widths)
        )
        return " " * indent + "  ".join(padded).rstrip()

    return [layout(headers), " " * indent + "  ".join("─" * w for w in widths), *map(layout, rows)]


def print_table(headers: Sequence[str], rows: Sequence[Sequence[str]], max_rows: int = MAX_ROWS) -> None:
    """Print a table, cutting it after ``max_rows`` rows."""
    for line in table_lines(headers, rows[:max_rows]):
        print(line)
    if len(rows) > max_rows:
        print(f"\n  # ... {len(rows) - max_rows} more rows (use --json for the full output)")
