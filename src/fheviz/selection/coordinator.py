"""Selection coordinator: keeps the code panel and the graph panel in sync.

Two transitions exist:

    on_line_clicked(line)
        selected_line := line
        current_graph := line_to_graph(line)
        render        := translate(current_graph), integrity issues highlighted

    on_graph_selection_changed(node_ids)
        selected_nodes := node_ids (None means empty)

Each transition emits events to the registered view processors right away,
carrying a snapshot of the new state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from fheviz.events.dispatcher import EventDispatcher
from fheviz.events.processor import EventProcessor
from fheviz.events.types import GraphRenderedEvent, LineSelectedEvent, NodeSelectionEvent
from fheviz.program.graph import ProgramGraph
from fheviz.program.validation import IntegrityIssue, validate_program
from fheviz.selection.line_mapping import AsyncLineToGraph, LineToGraph
from fheviz.selection.state import SelectionSnapshot, SelectionState
from fheviz.viz.translator import RenderGraph, mark_problematic, translate

logger = logging.getLogger(__name__)


def _check_line(line: object) -> int:
    # bool is an int subclass but never a line number
    if isinstance(line, bool) or not isinstance(line, int):
        raise TypeError(f"Line number must be an int, got {type(line).__name__}")
    return line


def _check_node_ids(node_ids: Iterable[int] | None) -> frozenset[int]:
    if node_ids is None:
        return frozenset()
    ids = frozenset(node_ids)
    for node_id in ids:
        if isinstance(node_id, bool) or not isinstance(node_id, int):
            raise TypeError(f"Node id must be an int, got {type(node_id).__name__}")
    return ids


def prepare_render(graph: ProgramGraph) -> tuple[RenderGraph, tuple[IntegrityIssue, ...]]:
    """Translate ``graph`` and mark nodes that fail integrity checks.

    Raises:
        InvalidGraphError: If the graph cannot be translated at all
    """
    render = translate(graph)
    result = validate_program(graph)
    if not result.valid:
        logger.warning(
            "Program graph has %d integrity issue(s): %s",
            len(result.issues),
            "; ".join(result.errors),
        )
        render = mark_problematic(render, result.problem_nodes)
    return render, tuple(result.issues)


class BaseCoordinator:
    """State ownership and event plumbing shared by both coordinators."""

    def __init__(
        self,
        initial_graph: ProgramGraph,
        *,
        initial_line: int = 0,
        processors: list[EventProcessor] | None = None,
        strict: bool = False,
    ) -> None:
        render, issues = prepare_render(initial_graph)
        self._state = SelectionState(
            selected_line=_check_line(initial_line),
            current_graph=initial_graph,
            render=render,
        )
        self._issues = issues
        self._dispatcher = EventDispatcher(processors, strict=strict)

    # -------------------------------------------------------------------------
    # Read-only views of the state
    # -------------------------------------------------------------------------

    def snapshot(self) -> SelectionSnapshot:
        """Current state as an immutable snapshot."""
        return self._state.snapshot()

    @property
    def selected_line(self) -> int:
        return self._state.selected_line

    @property
    def selected_nodes(self) -> frozenset[int]:
        return self._state.selected_nodes

    @property
    def current_graph(self) -> ProgramGraph:
        return self._state.current_graph

    @property
    def render(self) -> RenderGraph:
        return self._state.render

    @property
    def issues(self) -> tuple[IntegrityIssue, ...]:
        """Integrity issues of the current graph."""
        return self._issues

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def on_graph_selection_changed(self, node_ids: Iterable[int] | None) -> SelectionSnapshot:
        """Store the graph panel's selection. ``None`` or empty clears it.

        Raises:
            TypeError: If any id is not an int. The selection is left unchanged.
        """
        selected = _check_node_ids(node_ids)
        previous = self._state.selected_nodes
        self._state.selected_nodes = selected
        logger.debug("Graph selection changed: %s", sorted(self._state.selected_nodes))

        snapshot = self.snapshot()
        self._dispatcher.emit(NodeSelectionEvent(snapshot, previous=previous))
        return snapshot

    def add_processor(self, processor: EventProcessor) -> None:
        """Register a view. It receives events from the next transition on."""
        self._dispatcher.add(processor)

    def close(self) -> None:
        """End the viewing session and shut down all views."""
        self._dispatcher.shutdown()

    def _render_for(self, graph: ProgramGraph) -> tuple[RenderGraph, tuple[IntegrityIssue, ...], bool]:
        """Render ``graph``, reusing the current render if the graph is unchanged."""
        if graph is self._state.current_graph or graph == self._state.current_graph:
            return self._state.render, self._issues, True
        render, issues = prepare_render(graph)
        return render, issues, False

    def _commit_graph(
        self,
        graph: ProgramGraph,
        render: RenderGraph,
        issues: tuple[IntegrityIssue, ...],
    ) -> None:
        self._state.current_graph = graph
        self._state.render = render
        self._issues = issues


class SelectionCoordinator(BaseCoordinator):
    """Synchronous coordinator for a single-threaded UI.

    Args:
        line_to_graph: Total mapping from line number to program graph
        initial_line: Line selected at startup (default 0)
        processors: Views to notify on every transition
        strict: Propagate view exceptions instead of logging them

    Example:
        >>> coordinator = SelectionCoordinator(demo_line_mapping())
        >>> coordinator.on_line_clicked(8).current_graph.node_count
        4
        >>> coordinator.on_graph_selection_changed({2}).selected_nodes
        frozenset({2})
    """

    def __init__(
        self,
        line_to_graph: LineToGraph,
        *,
        initial_line: int = 0,
        processors: list[EventProcessor] | None = None,
        strict: bool = False,
    ) -> None:
        self._line_to_graph = line_to_graph
        super().__init__(
            line_to_graph(_check_line(initial_line)),
            initial_line=initial_line,
            processors=processors,
            strict=strict,
        )

    def on_line_clicked(self, line: int) -> SelectionSnapshot:
        """Select ``line`` and show the graph it resolves to.

        The state is updated only once translation has succeeded, so an
        InvalidGraphError leaves the previous line and graph in place.

        Raises:
            TypeError: If ``line`` is not an int
            InvalidGraphError: If the resolved graph cannot be translated
        """
        line = _check_line(line)
        graph = self._line_to_graph(line)
        render, issues, reused = self._render_for(graph)

        self._state.selected_line = line
        self._commit_graph(graph, render, issues)
        logger.debug("Line %d selected (%d nodes, reused=%s)", line, graph.node_count, reused)

        snapshot = self.snapshot()
        self._dispatcher.emit(LineSelectedEvent(snapshot, line=line))
        self._dispatcher.emit(GraphRenderedEvent(snapshot, issues=issues, reused=reused))
        return snapshot


class AsyncSelectionCoordinator(BaseCoordinator):
    """Coordinator for line mappings that suspend (e.g. fetch debug info).

    Last click wins: a click cancels any resolution still in flight, and a
    resolution that finishes after a newer click started is discarded. The
    selected line is updated as soon as the click arrives; the graph follows
    when its resolution completes.

    Args:
        line_to_graph: Async total mapping from line number to program graph
        initial_graph: Graph shown until the first resolution completes
        initial_line: Line selected at startup (default 0)
        processors: Views to notify on every transition
        strict: Propagate view exceptions instead of logging them
    """

    def __init__(
        self,
        line_to_graph: AsyncLineToGraph,
        *,
        initial_graph: ProgramGraph,
        initial_line: int = 0,
        processors: list[EventProcessor] | None = None,
        strict: bool = False,
    ) -> None:
        super().__init__(
            initial_graph,
            initial_line=initial_line,
            processors=processors,
            strict=strict,
        )
        self._line_to_graph = line_to_graph
        self._generation = 0
        self._pending: asyncio.Future[ProgramGraph] | None = None

    async def on_line_clicked(self, line: int) -> bool:
        """Select ``line`` and resolve its graph.

        Returns:
            True if the resolved graph was committed, False if a newer click
            superseded this one

        Raises:
            TypeError: If ``line`` is not an int
            InvalidGraphError: If the resolved graph cannot be translated
        """
        line = _check_line(line)
        self._generation += 1
        generation = self._generation
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

        self._state.selected_line = line
        await self._dispatcher.emit_async(LineSelectedEvent(self.snapshot(), line=line))
        if generation != self._generation:
            return False

        task = asyncio.ensure_future(self._line_to_graph(line))
        self._pending = task
        try:
            graph = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("Discarded cancelled resolution for line %d", line)
                return False
            raise
        finally:
            if self._pending is task:
                self._pending = None

        if generation != self._generation:
            logger.debug("Discarded stale resolution for line %d", line)
            return False

        render, issues, reused = self._render_for(graph)
        self._commit_graph(graph, render, issues)
        await self._dispatcher.emit_async(GraphRenderedEvent(self.snapshot(), issues=issues, reused=reused))
        return True
