"""Fan-out of selection events to the attached views."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from fheviz.events.processor import AsyncEventProcessor, EventProcessor

if TYPE_CHECKING:
    from fheviz.events.types import Event

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Delivers each coordinator event to every view, in registration order.

    A view that raises is logged and skipped; the remaining views still
    receive the event. ``strict=True`` re-raises instead.
    """

    def __init__(
        self,
        processors: list[EventProcessor] | None = None,
        *,
        strict: bool = False,
    ) -> None:
        self._processors: list[EventProcessor] = list(processors or ())
        self._strict = strict

    def __len__(self) -> int:
        return len(self._processors)

    def add(self, processor: EventProcessor) -> None:
        self._processors.append(processor)

    def emit(self, event: Event) -> None:
        for processor in self._processors:
            with self._isolated(processor, f"on {type(event).__name__}"):
                processor.on_event(event)

    async def emit_async(self, event: Event) -> None:
        """Like ``emit``, awaiting views that implement ``on_event_async``."""
        for processor in self._processors:
            with self._isolated(processor, f"on {type(event).__name__}"):
                if isinstance(processor, AsyncEventProcessor):
                    await processor.on_event_async(event)
                else:
                    processor.on_event(event)

    def shutdown(self) -> None:
        for processor in self._processors:
            with self._isolated(processor, "during shutdown"):
                processor.shutdown()

    @contextmanager
    def _isolated(self, processor: EventProcessor, stage: str) -> Iterator[None]:
        try:
            yield
        except Exception:
            if self._strict:
                raise
            logger.warning("View %r failed %s", processor, stage, exc_info=True)
