"""Exceptions raised by fheviz."""

from __future__ import annotations


class InvalidGraphError(Exception):
    """Serialized or in-memory program graph is structurally invalid.

    Raised for out-of-range node indices, unknown operation variants and
    malformed payloads. Translation never returns partial output when this
    is raised.

    Attributes:
        problems: One human-readable line per structural violation
        message: Human-readable error message
    """

    def __init__(
        self,
        problems: list[str] | str,
        message: str | None = None,
    ) -> None:
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        if len(self.problems) == 1:
            return f"Invalid program graph: {self.problems[0]}"
        details = "\n".join(f"  -> {p}" for p in self.problems)
        return f"Invalid program graph ({len(self.problems)} problems):\n{details}"


class SessionNotFoundError(Exception):
    """No debugging session is registered under the requested name.

    Attributes:
        name: The session name that was looked up
        available: Names of the sessions that do exist
    """

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        msg = f"Session '{name}' not found"
        if self.available:
            msg += f". Available: {', '.join(self.available)}"
        super().__init__(msg)


class NodeNotFoundError(Exception):
    """A node id does not exist in the program graph it was looked up in."""

    def __init__(self, node_id: int, node_count: int) -> None:
        self.node_id = node_id
        self.node_count = node_count
        super().__init__(f"Node {node_id} not found (graph has {node_count} nodes)")
