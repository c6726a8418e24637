"""Registry of debugging sessions.

A session pairs a compiled program graph with the source text it came from,
under a name the viewer can list and open. The registry is process-local and
in-memory; nothing is persisted.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

from fheviz.exceptions import SessionNotFoundError
from fheviz.program.graph import ProgramGraph
from fheviz.viz.info import describe_node
from fheviz.viz.translator import RenderGraph, translate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DebugSession:
    """One program open for inspection.

    Attributes:
        name: Registry key
        graph: Compiled program graph
        source_code: Source text shown in the code panel
    """

    name: str
    graph: ProgramGraph
    source_code: str = ""

    def render(self) -> RenderGraph:
        """Translate the session's graph for the graph panel."""
        return translate(self.graph)


class SessionRegistry:
    """Thread-safe name -> DebugSession store.

    Example:
        >>> registry = SessionRegistry()
        >>> registry.register("cross_terms", sample_graph(), SAMPLE_SOURCE)
        >>> registry.names()
        ['cross_terms']
    """

    def __init__(self) -> None:
        self._sessions: dict[str, DebugSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._sessions

    def register(self, name: str, graph: ProgramGraph, source_code: str = "") -> DebugSession:
        """Add or replace a session.

        The graph is translated once up front so a malformed program is
        rejected here rather than when a viewer opens it.

        Raises:
            ValueError: If ``name`` is empty
            InvalidGraphError: If ``graph`` cannot be translated
        """
        if not name:
            raise ValueError("Session name must be a non-empty string")
        translate(graph)

        session = DebugSession(name=name, graph=graph, source_code=source_code)
        with self._lock:
            replaced = name in self._sessions
            self._sessions[name] = session
        logger.debug("%s session '%s' (%d nodes)", "Replaced" if replaced else "Registered", name, graph.node_count)
        return session

    def names(self) -> list[str]:
        """Registered session names, sorted."""
        with self._lock:
            return sorted(self._sessions)

    def get(self, name: str) -> DebugSession:
        """Look up a session.

        Raises:
            SessionNotFoundError: If no session is registered under ``name``
        """
        with self._lock:
            session = self._sessions.get(name)
            if session is None:
                raise SessionNotFoundError(name, sorted(self._sessions))
            return session

    def graph_for(self, name: str) -> ProgramGraph:
        return self.get(name).graph

    def source_for(self, name: str) -> str:
        return self.get(name).source_code

    def node_info(self, name: str, node_id: int) -> dict[str, Any]:
        """Details of one node of a session's graph.

        Raises:
            SessionNotFoundError: If the session does not exist
            NodeNotFoundError: If the node does not exist in its graph
        """
        return describe_node(self.get(name).graph, node_id)

    def remove(self, name: str) -> DebugSession:
        """Unregister and return a session.

        Raises:
            SessionNotFoundError: If no session is registered under ``name``
        """
        with self._lock:
            session = self._sessions.pop(name, None)
            if session is None:
                raise SessionNotFoundError(name, sorted(self._sessions))
        logger.debug("Removed session '%s'", name)
        return session
