"""
Tabular sources.

A source yields every row of every worksheet, header included, tagged with
its sheet name and 1-based spreadsheet row number. Decoding the container
format is the source's job; validation and graph building happen later.
"""

import logging
import zipfile
import zlib
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Iterator, Mapping, Protocol, Sequence, Tuple
from xml.etree.ElementTree import ParseError

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..core.exceptions import DecodeFailureError, DecodeFailureKind

logger = logging.getLogger(__name__)

ZIP_SIGNATURE = b"PK\x03\x04"


@dataclass(frozen=True)
class RawRow:
    """One spreadsheet row as decoded, before validation."""
    sheet: str
    row_number: int
    values: Tuple[Any, ...]

    def is_blank(self) -> bool:
        return all(v is None or v == "" for v in self.values)


class TabularSource(Protocol):
    """Anything that can stream rows from one or more sheets."""

    def iter_rows(self) -> Iterator[RawRow]:
        ...


class RowsSource:
    """
    In-memory source.

    Accepts either a single sequence of rows (one sheet named ``Sheet1``)
    or a mapping of sheet name to rows. The first row of each sheet is the
    header, exactly as in a workbook.
    """

    def __init__(self, sheets: Mapping[str, Sequence[Sequence[Any]]] | Sequence[Sequence[Any]]):
        if isinstance(sheets, Mapping):
            self._sheets = dict(sheets)
        else:
            self._sheets = {"Sheet1": sheets}

    def iter_rows(self) -> Iterator[RawRow]:
        for sheet, rows in self._sheets.items():
            for number, values in enumerate(rows, start=1):
                yield RawRow(sheet=sheet, row_number=number, values=tuple(values))


class WorkbookSource:
    """
    Excel (.xlsx) source backed by openpyxl.

    The whole workbook is decoded up front so that container errors surface
    before any row is handed to the builder.
    """

    def __init__(self, data: bytes, name: str = "<workbook>"):
        self.name = name
        self._sheets = self._decode(data)

    @property
    def sheet_names(self) -> list[str]:
        return [sheet for sheet, _ in self._sheets]

    def iter_rows(self) -> Iterator[RawRow]:
        for sheet, rows in self._sheets:
            for number, values in enumerate(rows, start=1):
                yield RawRow(sheet=sheet, row_number=number, values=values)

    def _decode(self, data: bytes) -> list[Tuple[str, list[Tuple[Any, ...]]]]:
        if not data.startswith(ZIP_SIGNATURE):
            logger.warning(f"{self.name} is not an xlsx container")
            raise DecodeFailureError(DecodeFailureKind.WRONG_FORMAT, "missing zip signature")

        try:
            wb = load_workbook(BytesIO(data), data_only=True)
            try:
                sheets = [
                    (ws.title, [tuple(row) for row in ws.iter_rows(values_only=True)])
                    for ws in wb.worksheets
                ]
            finally:
                wb.close()
        except InvalidFileException as e:
            logger.warning(f"{self.name} is not an xlsx workbook: {e}")
            raise DecodeFailureError(DecodeFailureKind.WRONG_FORMAT, str(e)) from e
        except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError, KeyError, ParseError) as e:
            logger.warning(f"{self.name} looks corrupted: {e}")
            raise DecodeFailureError(DecodeFailureKind.CORRUPTED, str(e)) from e
        except Exception as e:
            logger.warning(f"Failed to decode {self.name}: {e}")
            raise DecodeFailureError(DecodeFailureKind.UNREADABLE, str(e)) from e

        logger.debug(f"Decoded {len(sheets)} sheet(s) from {self.name}")
        return sheets
