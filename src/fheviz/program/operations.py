"""Operations carried by FHE program graph nodes.

Each node of a compiled BFV program wraps exactly one operation. The set of
operations is closed: ``Operation`` is a union of the concrete classes below,
and the wire codec rejects anything it does not recognize unless the caller
explicitly opts in to ``UnknownOperation`` placeholders.

Wire format (one node's ``operation`` field):

    "Multiply" | "Add" | "Relinearize" | "OutputCiphertext"
    {"InputCiphertext": <slot>}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from fheviz.exceptions import InvalidGraphError


@dataclass(frozen=True)
class BaseOperation:
    """Base class for all program operations."""

    @property
    def name(self) -> str:
        """Variant name as it appears on the wire."""
        return type(self).__name__

    @property
    def arity(self) -> int | None:
        """Number of operands consumed, or None if unknown."""
        return _ARITY.get(type(self))


@dataclass(frozen=True)
class InputCiphertext(BaseOperation):
    """An encrypted program input.

    Attributes:
        slot: Index of the encrypted argument this node reads.
    """

    slot: int = 0


@dataclass(frozen=True)
class Multiply(BaseOperation):
    """Ciphertext multiplication (Left * Right)."""


@dataclass(frozen=True)
class Add(BaseOperation):
    """Ciphertext addition (Left + Right)."""


@dataclass(frozen=True)
class Relinearize(BaseOperation):
    """Reduces ciphertext size after a multiplication."""


@dataclass(frozen=True)
class OutputCiphertext(BaseOperation):
    """Marks its operand as a program output."""


@dataclass(frozen=True)
class UnknownOperation(BaseOperation):
    """Placeholder for an unrecognized variant.

    Only produced when parsing with ``allow_unknown=True``. Kept distinct from
    the known variants so callers can tell a forward-compatible payload apart
    from a well-understood one.

    Attributes:
        raw: Canonical JSON text of the unrecognized wire value.
    """

    raw: str = "null"


Operation = InputCiphertext | Multiply | Add | Relinearize | OutputCiphertext | UnknownOperation

_ARITY: dict[type, int] = {
    InputCiphertext: 0,
    Multiply: 2,
    Add: 2,
    Relinearize: 1,
    OutputCiphertext: 1,
}

# Variants that carry no payload and are serialized as a bare string
_UNIT_VARIANTS: dict[str, type[BaseOperation]] = {
    "Multiply": Multiply,
    "Add": Add,
    "Relinearize": Relinearize,
    "OutputCiphertext": OutputCiphertext,
}

KNOWN_VARIANTS: tuple[str, ...] = ("InputCiphertext", *_UNIT_VARIANTS)


def parse_operation(value: Any, *, allow_unknown: bool = False) -> Operation:
    """Decode one wire-format operation.

    Args:
        value: The node's ``operation`` field from a serialized program
        allow_unknown: Return ``UnknownOperation`` instead of raising for
            unrecognized variants

    Returns:
        The decoded operation

    Raises:
        InvalidGraphError: If the value is not a recognized variant (and
            ``allow_unknown`` is False) or an InputCiphertext slot is invalid
    """
    if isinstance(value, str):
        cls = _UNIT_VARIANTS.get(value)
        if cls is not None:
            return cls()
    elif isinstance(value, dict) and list(value) == ["InputCiphertext"]:
        return InputCiphertext(slot=_parse_slot(value["InputCiphertext"]))

    if allow_unknown:
        return UnknownOperation(raw=json.dumps(value, sort_keys=True, default=str))

    raise InvalidGraphError(
        f"Unknown operation {value!r}. Expected one of: {', '.join(KNOWN_VARIANTS)}"
    )


def _parse_slot(slot: Any) -> int:
    # bool is an int subclass but never a valid slot
    if isinstance(slot, bool) or not isinstance(slot, int):
        raise InvalidGraphError(f"InputCiphertext slot must be an integer, got {slot!r}")
    if slot < 0:
        raise InvalidGraphError(f"InputCiphertext slot must be non-negative, got {slot}")
    return slot


def operation_to_wire(operation: Operation) -> Any:
    """Encode an operation back into its wire form."""
    if isinstance(operation, InputCiphertext):
        return {"InputCiphertext": operation.slot}
    if isinstance(operation, UnknownOperation):
        return json.loads(operation.raw)
    return operation.name
