"""Resolution of a clicked source line to the program graph it produced.

The coordinator only sees a ``LineToGraph`` callable, so a mapping derived
from real compiler debug info can replace the lookup table without touching
the coordinator. Mappings must be total: every integer resolves to a graph.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from fheviz.program.examples import SAMPLE_PRODUCT_LINES, product_graph, sample_graph
from fheviz.program.graph import ProgramGraph


class LineToGraph(Protocol):
    """Total mapping from a source line number to a program graph."""

    def __call__(self, line: int) -> ProgramGraph: ...


class AsyncLineToGraph(Protocol):
    """Suspending variant of LineToGraph, e.g. for graphs fetched on demand."""

    async def __call__(self, line: int) -> ProgramGraph: ...


class LookupLineMapping:
    """A fixed line -> graph table with an explicit fallback graph.

    Lines absent from the table resolve to ``fallback``; this is what makes
    the mapping total.

    Example:
        >>> mapping = LookupLineMapping({8: product}, fallback=whole_program)
        >>> mapping(8) is product
        True
        >>> mapping(-3) is whole_program
        True
    """

    def __init__(self, table: Mapping[int, ProgramGraph], fallback: ProgramGraph) -> None:
        self._table = dict(table)
        self.fallback = fallback

    def __call__(self, line: int) -> ProgramGraph:
        return self._table.get(line, self.fallback)

    def __repr__(self) -> str:
        return f"LookupLineMapping(lines={list(self.lines)})"

    @property
    def lines(self) -> tuple[int, ...]:
        """Lines with a dedicated entry, ascending."""
        return tuple(sorted(self._table))

    def is_mapped(self, line: int) -> bool:
        """True if ``line`` has its own entry rather than using the fallback."""
        return line in self._table


def demo_line_mapping() -> LookupLineMapping:
    """Mapping for the built-in sample program.

    Each product statement shows the nodes it compiles to; every other line
    shows the whole program.
    """
    table = {line: product_graph(*slots) for line, slots in SAMPLE_PRODUCT_LINES.items()}
    return LookupLineMapping(table, fallback=sample_graph())
