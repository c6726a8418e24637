"""Tests for the async, last-click-wins selection coordinator."""

from __future__ import annotations

import asyncio

import pytest

from fheviz.events import AsyncEventProcessor, GraphRenderedEvent, LineSelectedEvent
from fheviz.exceptions import InvalidGraphError
from fheviz.program.examples import product_graph
from fheviz.selection.coordinator import AsyncSelectionCoordinator


class GatedMapping:
    """Async line mapping whose resolutions complete only when released."""

    def __init__(self, graphs):
        self.graphs = graphs
        self.gates: dict[int, asyncio.Event] = {}
        self.cancelled: list[int] = []

    def release(self, line):
        self.gates.setdefault(line, asyncio.Event()).set()

    async def __call__(self, line):
        gate = self.gates.setdefault(line, asyncio.Event())
        try:
            await gate.wait()
        except asyncio.CancelledError:
            self.cancelled.append(line)
            raise
        return self.graphs[line]


class AsyncListProcessor(AsyncEventProcessor):
    def __init__(self):
        self.events: list = []

    async def on_event_async(self, event):
        self.events.append(event)


@pytest.fixture
def graphs(sample):
    return {1: sample, 8: product_graph(0, 3), 9: product_graph(1, 2)}


class TestAsyncLineClicked:
    @pytest.mark.asyncio
    async def test_commits_resolved_graph(self, sample, graphs):
        mapping = GatedMapping(graphs)
        coordinator = AsyncSelectionCoordinator(mapping, initial_graph=sample)
        mapping.release(8)

        assert await coordinator.on_line_clicked(8) is True
        assert coordinator.selected_line == 8
        assert coordinator.current_graph == graphs[8]
        assert len(coordinator.render.nodes) == 4

    @pytest.mark.asyncio
    async def test_newer_click_wins(self, sample, graphs):
        mapping = GatedMapping(graphs)
        coordinator = AsyncSelectionCoordinator(mapping, initial_graph=sample)

        first = asyncio.ensure_future(coordinator.on_line_clicked(8))
        await asyncio.sleep(0)
        second = asyncio.ensure_future(coordinator.on_line_clicked(9))
        await asyncio.sleep(0)
        mapping.release(9)

        assert await first is False
        assert await second is True
        assert mapping.cancelled == [8]
        assert coordinator.selected_line == 9
        assert coordinator.current_graph == graphs[9]

    @pytest.mark.asyncio
    async def test_stale_resolution_never_overwrites(self, sample, graphs):
        """A superseded click never replaces the graph of a newer one."""
        mapping = GatedMapping(graphs)
        coordinator = AsyncSelectionCoordinator(mapping, initial_graph=sample)

        first = asyncio.ensure_future(coordinator.on_line_clicked(8))
        await asyncio.sleep(0)
        mapping.release(9)
        assert await coordinator.on_line_clicked(9) is True
        mapping.release(8)

        assert await first is False
        assert coordinator.current_graph == graphs[9]

    @pytest.mark.asyncio
    async def test_line_updates_before_resolution(self, sample, graphs):
        mapping = GatedMapping(graphs)
        coordinator = AsyncSelectionCoordinator(mapping, initial_graph=sample)

        pending = asyncio.ensure_future(coordinator.on_line_clicked(8))
        await asyncio.sleep(0)
        assert coordinator.selected_line == 8
        assert coordinator.current_graph is sample

        mapping.release(8)
        await pending
        assert coordinator.current_graph == graphs[8]

    @pytest.mark.asyncio
    async def test_events(self, sample, graphs):
        mapping = GatedMapping(graphs)
        lp = AsyncListProcessor()
        coordinator = AsyncSelectionCoordinator(mapping, initial_graph=sample, processors=[lp])
        mapping.release(9)

        await coordinator.on_line_clicked(9)

        assert [type(e) for e in lp.events] == [LineSelectedEvent, GraphRenderedEvent]
        assert lp.events[1].snapshot.current_graph == graphs[9]

    @pytest.mark.asyncio
    async def test_invalid_graph_propagates(self, sample, out_of_range_graph):
        mapping = GatedMapping({4: out_of_range_graph})
        coordinator = AsyncSelectionCoordinator(mapping, initial_graph=sample)
        mapping.release(4)

        with pytest.raises(InvalidGraphError):
            await coordinator.on_line_clicked(4)
        assert coordinator.current_graph is sample

    @pytest.mark.asyncio
    async def test_rejects_non_int(self, sample, graphs):
        coordinator = AsyncSelectionCoordinator(GatedMapping(graphs), initial_graph=sample)
        with pytest.raises(TypeError):
            await coordinator.on_line_clicked("8")

    @pytest.mark.asyncio
    async def test_graph_selection_is_synchronous(self, sample, graphs):
        coordinator = AsyncSelectionCoordinator(GatedMapping(graphs), initial_graph=sample)
        snapshot = coordinator.on_graph_selection_changed({3})
        assert snapshot.selected_nodes == {3}
