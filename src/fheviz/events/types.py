"""Events emitted by the selection coordinator.

Every event carries the full ``SelectionSnapshot`` taken right after the
transition, so a view can re-render from the event alone.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from fheviz.program.validation import IntegrityIssue
    from fheviz.selection.state import SelectionSnapshot


def _now() -> float:
    """Current timestamp."""
    return time.time()


@dataclass(frozen=True)
class BaseEvent:
    """Base class for all selection events.

    Attributes:
        snapshot: Selection state after the transition.
        timestamp: Unix timestamp when the event was created.
    """

    snapshot: SelectionSnapshot
    timestamp: float = field(default_factory=_now)


@dataclass(frozen=True)
class LineSelectedEvent(BaseEvent):
    """Emitted when a source line is clicked. The code panel highlights it.

    Attributes:
        line: The clicked line number.
    """

    handler: ClassVar[str] = "on_line_selected"

    line: int = 0


@dataclass(frozen=True)
class GraphRenderedEvent(BaseEvent):
    """Emitted after the current graph has been (re)translated.

    Attributes:
        issues: Integrity issues found in the graph. Their nodes are styled
            as problematic in ``snapshot.render``.
        reused: True if the previous render was kept because the resolved
            graph did not change.
    """

    handler: ClassVar[str] = "on_graph_rendered"

    issues: tuple[IntegrityIssue, ...] = ()
    reused: bool = False


@dataclass(frozen=True)
class NodeSelectionEvent(BaseEvent):
    """Emitted when the graph panel reports a new node selection.

    Attributes:
        previous: The selection before this change.
    """

    handler: ClassVar[str] = "on_node_selection"

    previous: frozenset[int] = frozenset()


Event = LineSelectedEvent | GraphRenderedEvent | NodeSelectionEvent
