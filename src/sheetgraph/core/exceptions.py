"""
Exception hierarchy for sheetgraph.

Ingestion failures are recoverable: they are returned inside an ``Err``
and never abort the process. ``GraphInvariantError`` marks a programming
error (a malformed Graph reached layout or search).
"""

from enum import StrEnum

EXPECTED_LAYOUT = (
    "Expected columns (row 1 = header):\n"
    "- Column A: Source Node\n"
    "- Column B: Target Node\n"
    "- Column C: Edge Label (optional)\n"
    "- Column D: Tooltip (optional)"
)


class SheetGraphError(Exception):
    """Base class for all sheetgraph errors."""


class ConfigError(SheetGraphError):
    """Settings file or environment override could not be applied."""


class GraphInvariantError(AssertionError):
    """A Graph violates its structural invariants (dangling edge, duplicate id)."""


class IngestionError(SheetGraphError):
    """
    Base class for failures that abort a single ingestion attempt.

    Attributes:
        message: What went wrong.
        hint: How to fix the input.
    """

    kind = "ingestion_error"

    def __init__(self, message: str, hint: str = EXPECTED_LAYOUT):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def describe(self) -> str:
        if not self.hint:
            return self.message
        return f"{self.message}\n{self.hint}"


class EmptyInputError(IngestionError):
    kind = "empty_input"

    def __init__(self):
        super().__init__(
            "The selected file is empty. Please choose a valid Excel file.",
            hint="",
        )


class OversizeInputError(IngestionError):
    kind = "oversize_input"

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        size_mb = size_bytes / 1024 / 1024
        limit_mb = limit_bytes / 1024 / 1024
        super().__init__(
            f"File too large ({size_mb:.1f}MB). Maximum size is {limit_mb:g}MB.",
            hint="Please compress or split your data.",
        )


class DecodeFailureKind(StrEnum):
    """Why the workbook container could not be read."""
    CORRUPTED = "corrupted"
    WRONG_FORMAT = "wrong_format"
    UNREADABLE = "unreadable"


class DecodeFailureError(IngestionError):
    kind = "decode_failure"

    _MESSAGES = {
        DecodeFailureKind.CORRUPTED: "The file appears to be corrupted.",
        DecodeFailureKind.WRONG_FORMAT: "The file format is invalid. Please ensure it is a .xlsx file.",
        DecodeFailureKind.UNREADABLE: "Please check the file format.",
    }

    def __init__(self, failure: DecodeFailureKind, detail: str = ""):
        self.failure = failure
        self.detail = detail
        hint = EXPECTED_LAYOUT if failure == DecodeFailureKind.UNREADABLE else ""
        super().__init__(
            f"Failed to read Excel file. {self._MESSAGES[failure]}",
            hint=hint,
        )


class NoValidRowsError(IngestionError):
    kind = "no_valid_rows"

    def __init__(self, rows_processed: int = 0):
        self.rows_processed = rows_processed
        super().__init__("No valid data found in Excel file. Please check the format.")
