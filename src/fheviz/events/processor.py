"""Base classes for views that consume coordinator events."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fheviz.events.types import (
        Event,
        GraphRenderedEvent,
        LineSelectedEvent,
        NodeSelectionEvent,
    )


class EventProcessor:
    """A view attached to a coordinator. Override ``on_event``."""

    def on_event(self, event: Event) -> None:
        pass

    def shutdown(self) -> None:
        """Called once from ``coordinator.close()``."""


class AsyncEventProcessor(EventProcessor):
    """A view whose updates suspend, driven by ``AsyncSelectionCoordinator``."""

    async def on_event_async(self, event: Event) -> None:
        pass


class TypedEventProcessor(EventProcessor):
    """Routes each event to the handler it names in ``event.handler``.

    Handlers default to no-ops, so a panel overrides only the transitions it
    redraws on.
    """

    def on_event(self, event: Event) -> None:
        getattr(self, event.handler)(event)

    def on_line_selected(self, event: LineSelectedEvent) -> None:
        pass

    def on_graph_rendered(self, event: GraphRenderedEvent) -> None:
        pass

    def on_node_selection(self, event: NodeSelectionEvent) -> None:
        pass
