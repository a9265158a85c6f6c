"""Ingestion: tabular sources, row validation and graph building."""

from .builder import GraphBuilder, build, derive_tooltip
from .pipeline import IngestionReport, ingest_bytes, ingest_source, ingest_workbook
from .source import RawRow, RowsSource, TabularSource, WorkbookSource
from .validation import Skip, SkipReason, ValidRow, validate

__all__ = [
    "GraphBuilder", "build", "derive_tooltip",
    "IngestionReport", "ingest_bytes", "ingest_source", "ingest_workbook",
    "RawRow", "RowsSource", "TabularSource", "WorkbookSource",
    "Skip", "SkipReason", "ValidRow", "validate",
]
