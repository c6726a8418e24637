"""Program package - FHE program graph model, codec and validation."""

from fheviz.program.graph import Edge, EdgeRole, ProgramGraph, ProgramNode
from fheviz.program.operations import (
    Add,
    InputCiphertext,
    Multiply,
    Operation,
    OutputCiphertext,
    Relinearize,
    UnknownOperation,
    operation_to_wire,
    parse_operation,
)
from fheviz.program.validation import IntegrityIssue, ValidationResult, validate_program

__all__ = [
    # Operations
    "Add",
    "InputCiphertext",
    "Multiply",
    "Operation",
    "OutputCiphertext",
    "Relinearize",
    "UnknownOperation",
    "operation_to_wire",
    "parse_operation",
    # Graph
    "Edge",
    "EdgeRole",
    "ProgramGraph",
    "ProgramNode",
    # Validation
    "IntegrityIssue",
    "ValidationResult",
    "validate_program",
]
