"""Project-level configuration from pyproject.toml.

Reads the [tool.fheviz] section to provide named program shortcuts and
default settings for the CLI:

    [tool.fheviz]
    direction = "LR"
    allow_unknown_operations = false

    [tool.fheviz.programs]
    cross_terms = "programs/cross_terms.json"
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class FhevizConfig:
    """Configuration from [tool.fheviz] in pyproject.toml.

    Attributes:
        programs: Program name -> JSON path, relative to ``root``
        direction: Default Mermaid flowchart direction
        allow_unknown_operations: Decode unknown variants instead of failing
        root: Directory containing the pyproject.toml, if one was found
    """

    programs: dict[str, str] = field(default_factory=dict)
    direction: str = "TD"
    allow_unknown_operations: bool = False
    root: Path | None = None

    def program_path(self, name: str) -> Path | None:
        """Resolve a registered program name to its file path."""
        raw = self.programs.get(name)
        if raw is None:
            return None
        path = Path(raw)
        if not path.is_absolute() and self.root is not None:
            path = self.root / path
        return path


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from start directory to find pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_config(start: Path | None = None) -> FhevizConfig:
    """Load [tool.fheviz] from the nearest pyproject.toml.

    Returns default config if no pyproject.toml or no [tool.fheviz] section.
    """
    path = find_pyproject(start)
    if path is None:
        return FhevizConfig()

    if sys.version_info >= (3, 11):
        import tomllib
    else:
        import tomli as tomllib

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get("fheviz", {})
    if not section:
        return FhevizConfig(root=path.parent)

    return FhevizConfig(
        programs=section.get("programs", {}),
        direction=section.get("direction", "TD"),
        allow_unknown_operations=bool(section.get("allow_unknown_operations", False)),
        root=path.parent,
    )
