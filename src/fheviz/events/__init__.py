"""Event system connecting the selection coordinator to its views."""

from fheviz.events.dispatcher import EventDispatcher
from fheviz.events.processor import (
    AsyncEventProcessor,
    EventProcessor,
    TypedEventProcessor,
)
from fheviz.events.types import (
    BaseEvent,
    Event,
    GraphRenderedEvent,
    LineSelectedEvent,
    NodeSelectionEvent,
)

__all__ = [
    # Event types
    "BaseEvent",
    "Event",
    "GraphRenderedEvent",
    "LineSelectedEvent",
    "NodeSelectionEvent",
    # Processor interfaces
    "AsyncEventProcessor",
    "EventProcessor",
    "TypedEventProcessor",
    # Dispatcher
    "EventDispatcher",
]
