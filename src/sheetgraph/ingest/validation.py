"""
Row validation.

Classifies decoded rows as usable or skippable. Skips are counted, never
raised; only an ingestion with zero usable rows is a failure, and that
decision belongs to the pipeline.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import StrEnum
from typing import Any, Optional

from ..config import HEADER_ROW
from .source import RawRow

logger = logging.getLogger(__name__)


class SkipReason(StrEnum):
    HEADER = "header"
    BLANK = "blank"
    MISSING_SOURCE = "missing_source"
    MISSING_TARGET = "missing_target"


@dataclass(frozen=True)
class ValidRow:
    """A row with both endpoints present, cells coerced to strings."""
    source: str
    target: str
    label: str
    link: str
    sheet: str
    row_number: int


@dataclass(frozen=True)
class Skip:
    reason: SkipReason
    sheet: str
    row_number: int


@dataclass
class ValidationStats:
    """
    Running tally across all sheets.

    ``rows_processed`` counts every non-blank data row, valid or not; the
    header and fully blank rows are not counted.
    """
    rows_processed: int = 0
    rows_valid: int = 0
    skipped: dict[SkipReason, int] = field(default_factory=dict)

    @property
    def rows_skipped(self) -> int:
        return self.rows_processed - self.rows_valid

    def record(self, outcome: "ValidRow | Skip") -> None:
        if isinstance(outcome, ValidRow):
            self.rows_processed += 1
            self.rows_valid += 1
            return
        self.skipped[outcome.reason] = self.skipped.get(outcome.reason, 0) + 1
        if outcome.reason in (SkipReason.MISSING_SOURCE, SkipReason.MISSING_TARGET):
            self.rows_processed += 1


def coerce_cell(value: Any) -> Optional[str]:
    """
    Coerce a decoded cell to its string form; ``None`` stays missing.

    Integral floats drop their fractional part so that an id typed as 1 in
    the sheet does not become "1.0".
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _cell(values: tuple, index: int) -> Optional[str]:
    if index >= len(values):
        return None
    return coerce_cell(values[index])


def validate(row: RawRow) -> ValidRow | Skip:
    """
    Classify a row.

    A row is valid iff it is not the sheet header and both its source and
    target cells are present and non-empty.
    """
    if row.row_number == HEADER_ROW:
        return Skip(SkipReason.HEADER, row.sheet, row.row_number)
    if row.is_blank():
        return Skip(SkipReason.BLANK, row.sheet, row.row_number)

    source = _cell(row.values, 0)
    target = _cell(row.values, 1)

    if not source:
        logger.debug(f"Skipping {row.sheet}!{row.row_number}: missing source")
        return Skip(SkipReason.MISSING_SOURCE, row.sheet, row.row_number)
    if not target:
        logger.debug(f"Skipping {row.sheet}!{row.row_number}: missing target")
        return Skip(SkipReason.MISSING_TARGET, row.sheet, row.row_number)

    return ValidRow(
        source=source,
        target=target,
        label=_cell(row.values, 2) or "",
        link=_cell(row.values, 3) or "",
        sheet=row.sheet,
        row_number=row.row_number,
    )
