"""
Core modules for sheetgraph.

This package contains the fundamental building blocks:
- types: Graph model (Node, Edge, Graph, ...)
- result: Ok/Err outcome type
- exceptions: Ingestion failures and invariant errors
"""

from .exceptions import (
    ConfigError, DecodeFailureError, DecodeFailureKind, EmptyInputError,
    GraphInvariantError, IngestionError, NoValidRowsError, OversizeInputError,
)
from .result import Err, Ok, Result
from .types import Edge, Graph, GraphStats, Node, Position, Size

__all__ = [
    # Types
    "Node", "Edge", "Graph", "GraphStats", "Position", "Size",
    # Result
    "Ok", "Err", "Result",
    # Errors
    "ConfigError", "GraphInvariantError", "IngestionError", "EmptyInputError",
    "OversizeInputError", "DecodeFailureError", "DecodeFailureKind",
    "NoValidRowsError",
]
