"""
Ingestion pipeline.

raw bytes -> size checks -> decode -> validate -> build.

Every recoverable failure comes back as ``Err(IngestionError)``; callers
keep whatever graph they had before.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from ..config import MAX_WORKBOOK_BYTES
from ..core.exceptions import (
    DecodeFailureError,
    DecodeFailureKind,
    EmptyInputError,
    IngestionError,
    NoValidRowsError,
    OversizeInputError,
)
from ..core.result import Err, Ok, Result
from ..core.types import Graph
from .builder import GraphBuilder
from .source import TabularSource, WorkbookSource
from .validation import ValidationStats, ValidRow, validate

logger = logging.getLogger(__name__)


class IngestionReport(BaseModel):
    """Successful ingestion: the new graph plus the counts shown to the user."""
    graph: Graph
    node_count: int
    edge_count: int
    rows_processed: int
    rows_skipped: int
    sheet_count: int


def ingest_source(source: TabularSource) -> Result[IngestionReport, IngestionError]:
    """
    Validate and build a graph from an already-decoded source.

    All sheets are merged into a single graph.
    """
    builder = GraphBuilder()
    stats = ValidationStats()
    sheets = set()

    for raw in source.iter_rows():
        sheets.add(raw.sheet)
        outcome = validate(raw)
        stats.record(outcome)
        if isinstance(outcome, ValidRow):
            builder.add_row(outcome)

    graph = builder.build()
    if graph.is_empty() or graph.edge_count == 0:
        logger.info(f"No valid rows among {stats.rows_processed} processed")
        return Err(NoValidRowsError(stats.rows_processed))

    if stats.rows_skipped:
        logger.info(f"Skipped {stats.rows_skipped} row(s) missing source or target")

    return Ok(IngestionReport(
        graph=graph,
        node_count=graph.node_count,
        edge_count=graph.edge_count,
        rows_processed=stats.rows_processed,
        rows_skipped=stats.rows_skipped,
        sheet_count=len(sheets),
    ))


def ingest_bytes(
    data: bytes,
    name: str = "<workbook>",
    max_bytes: int = MAX_WORKBOOK_BYTES,
) -> Result[IngestionReport, IngestionError]:
    """Check size limits, decode an xlsx payload and ingest it."""
    if len(data) == 0:
        return Err(EmptyInputError())
    if len(data) > max_bytes:
        return Err(OversizeInputError(len(data), max_bytes))

    try:
        source = WorkbookSource(data, name=name)
    except DecodeFailureError as e:
        return Err(e)

    logger.info(f"Ingesting {name} ({len(source.sheet_names)} sheet(s))")
    return ingest_source(source)


def ingest_workbook(
    path: Path,
    max_bytes: Optional[int] = None,
) -> Result[IngestionReport, IngestionError]:
    """
    Ingest an .xlsx file from disk.

    The size ceiling is checked against the file's stat before any bytes
    are read. A path that cannot be read comes back as an unreadable
    ``DecodeFailureError``.
    """
    limit = max_bytes if max_bytes is not None else MAX_WORKBOOK_BYTES
    try:
        size = path.stat().st_size
        if size == 0:
            return Err(EmptyInputError())
        if size > limit:
            return Err(OversizeInputError(size, limit))
        data = path.read_bytes()
    except OSError as e:
        logger.warning(f"Cannot read {path}: {e}")
        return Err(DecodeFailureError(DecodeFailureKind.UNREADABLE, str(e)))

    return ingest_bytes(data, name=path.name, max_bytes=limit)
